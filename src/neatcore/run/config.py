import configparser
import os

from neatcore.errors import ConfigurationError

class Config:

    INITIAL_CXN_POLICIES = ("none", "one-input", "partial", "full")

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config with default values.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a default Config for manual attribute setting.

        Raises:
            ConfigurationError: if the file does not exist or a required value is missing
        """

        # Default config for testing/manual setup
        if config_file is None:

            # Set defaults for mutation probabilities
            self.weight_mutation_prob  = 0.5
            self.enable_mutation_prob  = 0.05
            self.disable_mutation_prob = 0.01
            self.split_mutation_prob   = 0.02
            self.insert_mutation_prob  = 0.1

            # Set defaults for speciation
            self.distance_disjoint_coeff = 1.0
            self.distance_excess_coeff   = 1.0
            self.distance_weight_coeff   = 0.4
            self.compatibility_threshold = 0.3

            # Set defaults for selection
            self.age_threshold     = 3
            self.target_population = 50
            self.keep_fraction     = 0.5

            # Set defaults for population initialization
            self.initial_cxn_policy   = "partial"
            self.initial_cxn_fraction = 0.5

            # Set defaults for termination
            self.max_number_generations = 100
            self.fitness_threshold      = None
            return

        if not os.path.exists(config_file):
            raise ConfigurationError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if value_type == str:
                    return raw_value

                # "None" is only special for numeric values (a policy may be called "none")
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise ConfigurationError(f"Missing required value '{key}' in section [{section}]") from None
            except ValueError as e:
                raise ConfigurationError(f"Bad value for '{key}' in section [{section}]: {e}") from None

        # [MUTATION]

        # The probability that a link's weight is replaced by a
        # new value drawn uniformly from [-1, 1].
        self.weight_mutation_prob = get_value('MUTATION', 'weight_mutation_prob', float)

        # The probability that a disabled link is enabled, and
        # the probability that an enabled link is disabled.
        self.enable_mutation_prob  = get_value('MUTATION', 'enable_mutation_prob' , float)
        self.disable_mutation_prob = get_value('MUTATION', 'disable_mutation_prob', float)

        # The probability that a link is split by a new hidden neuron.
        # Evaluated once per link.
        self.split_mutation_prob = get_value('MUTATION', 'split_mutation_prob', float)

        # The probability that one new link is inserted between existing neurons.
        # Evaluated once per mutation (not per link).
        self.insert_mutation_prob = get_value('MUTATION', 'insert_mutation_prob', float)

        # [SPECIATION]

        # The coefficients weighting the disjoint count, the excess
        # count and the mean weight difference in the genomic distance.
        self.distance_disjoint_coeff = get_value('SPECIATION', 'distance_disjoint_coeff', float)
        self.distance_excess_coeff   = get_value('SPECIATION', 'distance_excess_coeff'  , float)
        self.distance_weight_coeff   = get_value('SPECIATION', 'distance_weight_coeff'  , float)

        # A genome joins a species when its distance to the
        # species representative is GREATER than this threshold.
        self.compatibility_threshold = get_value('SPECIATION', 'compatibility_threshold', float)

        # [SELECTION]

        # Species younger than this (in generations) are
        # exempt from extinction against the global median.
        self.age_threshold = get_value('SELECTION', 'age_threshold', int)

        # The pool is refilled up to this many genomes every generation.
        self.target_population = get_value('SELECTION', 'target_population', int)

        # The fraction of each species (plus one) that survives pruning.
        self.keep_fraction = get_value('SELECTION', 'keep_fraction', float, default=0.5)

        # [POPULATION INIT]

        # Specifies the initial connectivity of newly-created networks.
        # Allowed values:
        #   "none"      - no connections are initially present
        #   "one-input" - one random input neuron is connected to all output neurons
        #   "partial"   - a fraction of all possible connections are instantiated randomly
        #   "full"      - connect all input neurons to all output neurons
        self.initial_cxn_policy = get_value('POPULATION_INIT', 'initial_cxn_policy', str, default="partial")

        # The fraction of connections to instantiate (only applicable
        # if the initial connection policy is "partial").
        self.initial_cxn_fraction = get_value('POPULATION_INIT', 'initial_cxn_fraction', float, default=0.5)

        # [TERMINATION]

        # The number of generations after which to stop a trial.
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int, default=100)

        # The best fitness which when met or exceeded ends a trial early.
        # Use "None" to always run for the maximum number of generations.
        self.fitness_threshold = get_value('TERMINATION', 'fitness_threshold', float, default=None)

    def validate(self) -> None:
        """
        Check that all configuration values are present and within range.

        Raises:
            ConfigurationError: describing the first offending value
        """
        for name in ('weight_mutation_prob',
                     'enable_mutation_prob',
                     'disable_mutation_prob',
                     'split_mutation_prob',
                     'insert_mutation_prob'):
            value = getattr(self, name, None)
            if value is None:
                raise ConfigurationError(f"Mutation rate '{name}' is missing")
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"Mutation rate '{name}' must be in [0, 1], got {value}")

        for name in ('distance_disjoint_coeff',
                     'distance_excess_coeff',
                     'distance_weight_coeff'):
            value = getattr(self, name, None)
            if value is None:
                raise ConfigurationError(f"Speciation coefficient '{name}' is missing")
            if value < 0:
                raise ConfigurationError(f"Speciation coefficient '{name}' must be non-negative, got {value}")

        if getattr(self, 'compatibility_threshold', None) is None:
            raise ConfigurationError("Speciation coefficient 'compatibility_threshold' is missing")

        target_population = getattr(self, 'target_population', None)
        if target_population is None or target_population <= 0:
            raise ConfigurationError(f"'target_population' must be a positive integer, got {target_population}")

        age_threshold = getattr(self, 'age_threshold', None)
        if age_threshold is None or age_threshold < 0:
            raise ConfigurationError(f"'age_threshold' must be a non-negative integer, got {age_threshold}")

        keep_fraction = getattr(self, 'keep_fraction', None)
        if keep_fraction is None or not 0.0 < keep_fraction <= 1.0:
            raise ConfigurationError(f"'keep_fraction' must be in (0, 1], got {keep_fraction}")

        if self.initial_cxn_policy not in self.INITIAL_CXN_POLICIES:
            raise ConfigurationError(f"bad initial connection policy '{self.initial_cxn_policy}'")
        if self.initial_cxn_policy == "partial":
            fraction = self.initial_cxn_fraction
            if fraction is None or not 0.0 <= fraction <= 1.0:
                raise ConfigurationError(f"'initial_cxn_fraction' must be in [0, 1], got {fraction}")
