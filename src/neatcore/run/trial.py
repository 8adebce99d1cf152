"""
NEAT Trial Module

This module defines the abstract base class for NEAT trials.

A trial represents one independent run of the NEAT algorithm, evolving a
population through generations until a solution is found or the maximum
number of generations is reached. Fitness is evaluated serially, one genome
at a time.
"""

from abc    import ABC, abstractmethod
from typing import TYPE_CHECKING

from loguru import logger

from neatcore.run.config import Config
if TYPE_CHECKING:
    from neatcore.genotype import Genome
    from neatcore.pool     import Population

class Trial(ABC):
    """
    Abstract base class for implementing a NEAT trial.

    Subclasses must implement:
    - _create_population():         Build the initial population
    - _evaluate_fitness(genome):    Evaluate fitness for a single genome

    Subclasses can override:
    - _reset():           Reset trial-specific state (call super()._reset())
    - _report_progress(): Report after each generation (default: log a summary)
    - _final_report():    Report at the end of the trial (default: log a summary)
    - _terminate():       Custom termination logic (default: max generations + fitness threshold)

    Public Attributes:
        failed:          Whether the trial ended without reaching the fitness threshold
        fitness_history: (generation, best fitness) for every evaluated generation

    Public Properties:
        population: The evolving population (None before the trial runs)
        fitness:    genome ID => fitness, for the current generation
        generation: Number of completed generational iterations

    Public Methods:
        run(): Execute a complete NEAT trial
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress and final reports
                             (useful when running many trials)
        """
        self._config            : Config               = config
        self._generation_counter: int                  = 0
        self._population        : 'Population | None'  = None
        self._fitness           : dict[int, float]     = {}
        self._suppress_output   : bool                 = suppress_output
        self.fitness_history    : list[tuple[int, float]] = []
        self.failed             : bool                 = True

    @property
    def population(self) -> 'Population | None':
        return self._population

    @property
    def fitness(self) -> dict[int, float]:
        return self._fitness

    @property
    def generation(self) -> int:
        return self._generation_counter

    def run(self) -> 'Population':
        """
        Run the trial.

        Resets the trial state and runs the evolutionary
        algorithm until the terminate condition is met.

        Returns:
            the final population

        Raises:
            ExtinctionError: if no genome survives a generation
        """
        # Reset the trial state before starting a new run
        self._reset()

        # Create the initial population
        self._population = self._create_population()

        # Evaluate the fitness of the initial population
        self._evaluate_fitness_all()

        # Display progress for the initial population
        if not self._suppress_output:
            self._report_progress()

        # Evolution loop
        while not self._terminate():
            self._generation_counter += 1

            # The members of the population mate and create offspring
            self._population.iterate(self._fitness)

            # Evaluate the fitness of each genome in the new generation
            self._evaluate_fitness_all()

            # Display progress after each generation
            if not self._suppress_output:
                self._report_progress()

        # Produce final report
        if not self._suppress_output:
            self._final_report()

        return self._population

    def _reset(self):
        """
        Reset the trial state before starting a new run.

        Subclasses overriding this method should call super()._reset()
        and then initialize their problem-specific data.
        """
        self._generation_counter = 0
        self._population         = None
        self._fitness            = {}
        self.fitness_history     = []
        self.failed              = True

    @abstractmethod
    def _create_population(self) -> 'Population':
        """
        Create the initial population, usually through
        'Population.from_topology' or 'Population.from_genomes'.
        """
        pass

    @abstractmethod
    def _evaluate_fitness(self, genome: 'Genome') -> float:
        """
        Evaluate and return the fitness of a genome.

        This method should test the genome's network on the problem
        domain and compute a fitness score. Higher fitness values
        indicate better performance and a better chance of surviving.

        Parameters:
            genome: The genome to evaluate

        Returns:
            float: Fitness score for the genome
        """
        pass

    def _evaluate_fitness_all(self):
        """
        Evaluate the fitness of all genomes in the population, one at a time,
        and record the best fitness of the generation.
        """
        self._fitness = {genome.genome_id: self._evaluate_fitness(genome)
                         for genome in self._population.genomes}

        best = max(self._fitness.values(), default=float('-inf'))
        self.fitness_history.append((self._generation_counter, best))

    def _report_progress(self):
        """
        Report trial progress after each generation.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials.
        """
        _, best = self.fitness_history[-1]
        logger.info("[Trial] Generation {:04d}: genomes={}, species={}, max fitness={:.4f}",
                    self._generation_counter,
                    len(self._population.genomes),
                    len(self._population.species),
                    best)

    def _final_report(self):
        """
        Produce final report at the end of the trial.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials.
        """
        fittest = self._population.get_fittest_genome(self._fitness)
        if self.failed:
            logger.warning("[Trial] Fitness threshold not reached after {} generations", self._generation_counter)
        else:
            logger.info("[Trial] Finished after {} generations", self._generation_counter)
        if fittest is not None:
            logger.info("[Trial] Fittest genome (fitness={:.4f}):\n{}", self._fitness[fittest.genome_id], fittest)

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        This default implementation stops the trial after a maximum number
        of generations and (optionally) also stops it if the best fitness in
        the population has reached a given threshold.

        Subclasses can override this method for custom termination logic.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        # Has this trial run for too long?
        terminate = self._generation_counter >= self._config.max_number_generations

        # Without a threshold there is nothing to fail
        if self._config.fitness_threshold is None:
            self.failed = False
            return terminate

        # Compare the best fitness in the population against the threshold
        _, best = self.fitness_history[-1]
        success = best >= self._config.fitness_threshold
        self.failed = not success

        return terminate or success
