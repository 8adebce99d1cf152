"""
NEAT (NeuroEvolution of Augmenting Topologies) - evolution core.

This package implements the core of the NEAT algorithm: genomes made of neurons
and innovation-numbered links, an innovation ledger keeping structural mutations
consistent across a population, and a population manager turning one scored
generation into the next through pruning, crossover, mutation and speciation.

Main components:
- genotype:      Genetic encoding (neurons, links, genomes, innovation ledger)
- pool:          Population and speciation management
- run:           Configuration and trial driver
- activations:   Activation functions used by genome evaluation
- visualization: Genome graphs and fitness charts (imported on demand)

Example:
    >>> from neatcore import Config, Population, Trial
    >>> class MyTrial(Trial):
    ...     def _create_population(self):
    ...         return Population.from_topology(["x", "y"], ["out"], self._config)
    ...     def _evaluate_fitness(self, genome):
    ...         # Implement fitness evaluation
    ...         pass
    >>> trial = MyTrial(Config("config.ini"))
    >>> trial.run()
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from neatcore.errors                     import ConfigurationError, ExtinctionError, MissingFitnessError, NeatError
from neatcore.genotype.genome            import Genome
from neatcore.genotype.innovation_ledger import InnovationLedger
from neatcore.genotype.link              import Link
from neatcore.genotype.neuron            import Neuron, NeuronType
from neatcore.pool.population            import Population
from neatcore.pool.species               import Species
from neatcore.run.config                 import Config
from neatcore.run.trial                  import Trial

__all__ = [
    "Config",
    "ConfigurationError",
    "ExtinctionError",
    "Genome",
    "InnovationLedger",
    "Link",
    "MissingFitnessError",
    "NeatError",
    "Neuron",
    "NeuronType",
    "Population",
    "Species",
    "Trial",
]
