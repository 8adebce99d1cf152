"""
NEAT Pool Package

This package contains classes for managing populations and species in the NEAT
(NeuroEvolution of Augmenting Topologies) algorithm.

The pool package coordinates the evolutionary process at the population level,
organizing genomes into species based on genetic similarity and managing
reproduction across generations.

Modules:
    species:    Individual species representation and pruning
    population: Top-level population management and evolution

Exported Classes:
    Species:    A cluster of genetically similar genomes
    Population: Top-level evolutionary coordinator
"""

from neatcore.pool.species    import Species, fitness_at_rank
from neatcore.pool.population import Population

__all__ = [
    'Species',
    'Population',
    'fitness_at_rank',
]
