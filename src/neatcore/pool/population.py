"""
NEAT Population Module

This module implements the Population class, the top-level orchestrator for the NEAT
evolutionary algorithm. The population owns all species and the innovation ledger,
and turns one generation into the next.

Classes:
    Population: Top-level evolutionary coordinator managing species and generations
"""

import random
from typing import Any, Iterable, Mapping, Sequence, TYPE_CHECKING

from loguru import logger

from neatcore.errors    import ExtinctionError, MissingFitnessError
from neatcore.genotype  import Genome, InnovationLedger, Link, Neuron, NeuronType
from neatcore.pool.species import Species, fitness_at_rank
if TYPE_CHECKING:
    from neatcore.run.config import Config

class Population:
    """
    A population of evolving genomes in the NEAT algorithm, split into species.

    The Population class represents the top-level container for the evolutionary
    process. Fitness evaluation is external: once per generation a driver scores
    every genome and hands the scores to 'iterate', which produces the next
    generation.

    Public Attributes:
        species: List of all species in the current generation
        ledger:  The innovation ledger shared by all genomes

    Public Properties:
        genomes: All genomes in the current generation (flattened across species)

    Public Methods:
        iterate(fitness):            Create the next generation
        get_fittest_genome(fitness): Return the genome with highest fitness

    Class Methods:
        from_genomes(genomes, config, ledger):                Speciate externally built genomes
        from_topology(input_payloads, output_payloads, ...): Seed a population of minimal genomes
    """

    def __init__(self, config: 'Config', ledger: InnovationLedger, species: list[Species] | None = None):
        """
        Parameters:
            config:  Stores configuration parameters
            ledger:  The innovation ledger shared by all genomes
            species: The initial species (may be empty)

        Raises:
            ConfigurationError: if the configuration is invalid
        """
        config.validate()

        self._config: 'Config'         = config
        self.ledger : InnovationLedger = ledger
        self.species: list[Species]    = species if species is not None else []

        # Hidden neurons created from now on must not reuse the ID of an existing neuron
        self.ledger.reserve_neuron_ids(neuron for genome in self.genomes for neuron in genome.neurons.values())

    @classmethod
    def from_genomes(cls, genomes: Iterable[Genome], config: 'Config', ledger: InnovationLedger) -> 'Population':
        """
        Create a population out of externally built genomes and split them into species.

        The genomes' links should have been given innovation numbers by 'ledger'.
        Hidden neuron IDs allocated by the ledger from now on will not collide
        with the IDs of the neurons found in 'genomes'.
        """
        genomes = list(genomes)
        ledger.reserve_neuron_ids(neuron for genome in genomes for neuron in genome.neurons.values())

        population = cls(config, ledger)
        population._group_into_species(genomes)
        return population

    @classmethod
    def from_topology(cls,
                      input_payloads : Sequence[Any],
                      output_payloads: Sequence[Any],
                      config         : 'Config',
                      ledger         : InnovationLedger | None = None) -> 'Population':
        """
        Create 'config.target_population' genomes sharing the same input and output neurons.

        Input neurons are numbered [1, n], output neurons [n + 1, n + m]. Links
        between input and output neurons are created according to the initial
        connection policy, with weights drawn uniformly from [-1, 1].

        Parameters:
            input_payloads:  one payload per input neuron
            output_payloads: one payload per output neuron
            config:          Stores configuration parameters
            ledger:          The innovation ledger (a new one is created if None)

        Returns:
            the new, speciated, population
        """
        config.validate()

        num_inputs     = len(input_payloads)
        input_neurons  = [Neuron(NeuronType.INPUT , 1 + i, payload)
                          for i, payload in enumerate(input_payloads)]
        output_neurons = [Neuron(NeuronType.OUTPUT, 1 + num_inputs + i, payload)
                          for i, payload in enumerate(output_payloads)]
        if ledger is None:
            ledger = InnovationLedger(first_neuron_id=1 + len(input_neurons) + len(output_neurons))

        genomes = []
        for _ in range(config.target_population):
            genome = Genome(ledger.next_genome_id(), input_neurons + output_neurons)

            # The manner in which links are added depends on the initialization policy.
            for from_neuron, to_neuron in cls._initial_pairs(input_neurons, output_neurons, config):
                innovation = ledger.new_link_innovation(from_neuron, to_neuron)
                weight     = random.uniform(-1.0, 1.0)
                genome.links[innovation] = Link(innovation, from_neuron.id, to_neuron.id, weight)
            genomes.append(genome)

        return cls.from_genomes(genomes, config, ledger)

    @staticmethod
    def _initial_pairs(input_neurons : list[Neuron],
                       output_neurons: list[Neuron],
                       config        : 'Config') -> list[tuple[Neuron, Neuron]]:
        """
        The (input, output) neuron pairs to connect in a newly created genome.
        """
        all_pairs = [(inp, out) for inp in input_neurons for out in output_neurons]

        if config.initial_cxn_policy == "none":
            return []
        elif config.initial_cxn_policy == "one-input":
            if not input_neurons:
                return []
            input_neuron = random.choice(input_neurons)
            return [(input_neuron, out) for out in output_neurons]
        elif config.initial_cxn_policy == "partial":
            num_links = int(len(all_pairs) * config.initial_cxn_fraction)
            return random.sample(all_pairs, num_links)
        else:
            return all_pairs

    @property
    def genomes(self) -> list[Genome]:
        return [genome for spec in self.species for genome in spec.genomes]

    def get_fittest_genome(self, fitness: Mapping[int, float]) -> Genome | None:
        """
        Find and return the genome with the highest fitness in the population.

        Parameters:
            fitness: genome ID => fitness

        Returns:
            The genome with the highest fitness value, or None if the population is empty
        """
        genomes = self.genomes
        if not genomes:
            return None
        return max(genomes, key=lambda genome: fitness[genome.genome_id])

    def iterate(self, fitness: Mapping[int, float]) -> None:
        """
        Create the next generation through selection, reproduction and speciation.

        This is the main generational step: a single, non-reentrant transform of
        the population, which must be called once per generation after every
        genome has been scored.

        Step 1: Aging
        - Every species gets one generation older

        Step 2: Pruning
        - Every species keeps only its fittest genomes
        - Old enough species that perform worse than the population's
          median fitness go extinct; empty species are removed

        Step 3: Reproduction
        - Random pairs of surviving genomes mate, and their offspring
          is mutated, until the pool reaches the target population size

        Step 4: Speciation
        - Every species picks a new random representative among its genomes
        - Every genome joins the first species it is compatible with, or
          founds a new one

        Parameters:
            fitness: genome ID => fitness, for every genome in the population

        Raises:
            MissingFitnessError: if a genome in the population has no fitness
                                 (the population is left untouched)
            ExtinctionError:     if no genome survives pruning
        """
        genomes = self.genomes
        missing = [genome.genome_id for genome in genomes if genome.genome_id not in fitness]
        if missing:
            raise MissingFitnessError(missing)

        for spec in self.species:
            spec.increase_age()

        self._prune(fitness, genomes)

        pool = self.genomes
        self._repopulate(pool, fitness)
        self._group_into_species(pool)

        logger.debug("[Population] Iterated: {} genomes in {} species", len(pool), len(self.species))

    def _prune(self, fitness: Mapping[int, float], genomes: list[Genome]) -> None:
        """
        Prune every species against the median fitness of the whole population,
        then remove the species left without genomes.
        """
        keep_fraction = self._config.keep_fraction
        all_fitness   = sorted((fitness[genome.genome_id] for genome in genomes), reverse=True)
        global_median = fitness_at_rank(all_fitness, keep_fraction)

        for spec in self.species:
            spec.prune(fitness, keep_fraction, self._config.age_threshold, global_median)

        extinct = [spec.id for spec in self.species if not spec.genomes]
        if extinct:
            logger.debug("[Population] Extinct species: {}", extinct)
        self.species = [spec for spec in self.species if spec.genomes]

    def _repopulate(self, pool: list[Genome], fitness: Mapping[int, float]) -> None:
        """
        Add offspring to the pool by mating the surviving (therefore best) genomes.
        Parents are drawn at random, with replacement, among the survivors only.
        """
        if not pool:
            raise ExtinctionError("No genome survived pruning; the pruning parameters are too aggressive")

        parents   = list(pool)
        offspring = []
        while len(pool) + len(offspring) < self._config.target_population:

            # Note that if the parents are not distinct, crossover will produce a
            # genetically identical clone of the parent (but with a different ID).
            parent1 = random.choice(parents)
            parent2 = random.choice(parents)

            fitness_delta = fitness[parent1.genome_id] - fitness[parent2.genome_id]
            child = parent1.mate(parent2, fitness_delta, self.ledger)
            offspring.append(child.mutate(self.ledger, self._config))

        logger.debug("[Population] Bred {} offspring from {} survivors", len(offspring), len(parents))
        pool.extend(offspring)

    def _group_into_species(self, genomes: list[Genome]) -> None:
        """
        Assign all genomes to species based on compatibility with the species representatives.

        Each existing species first picks a new representative among its current
        genomes and is emptied. Then each genome joins the first species whose
        representative it is compatible with; if there is none, it founds a new
        species, becoming its representative. Species left empty are removed.
        """
        for spec in self.species:
            if spec.genomes:
                spec.representative = random.choice(spec.genomes)
            spec.genomes = []

        for genome in genomes:
            for spec in self.species:
                if spec.representative.is_compatible_with(genome, self._config):
                    spec.genomes.append(genome)
                    genome.species_id = spec.id
                    break

            # No compatible species found
            else:
                spec = Species(self.ledger.next_species_id(), [genome], genome)
                genome.species_id = spec.id
                self.species.append(spec)

        self.species = [spec for spec in self.species if spec.genomes]

    def __str__(self):
        return '\n'.join(str(genome) for genome in self.genomes)
