"""
NEAT Species Module

This module implements the Species class for the NEAT algorithm.
A species represents a cluster of genetically similar genomes
that compete primarily within their own niche.

Classes:
    Species: Represents a single species with its genomes and representative

Functions:
    fitness_at_rank: Fitness found at a given fraction of a descending ranking
"""

from typing import TYPE_CHECKING, Mapping, Sequence

if TYPE_CHECKING:
    from neatcore.genotype import Genome

def fitness_at_rank(descending: Sequence[float], fraction: float) -> float | None:
    """
    Return the value at position 'fraction' of a list sorted in descending order.
    With fraction 0.5 this is the median (the upper one for even lengths).
    Returns None when the rank falls past the end of the list (fraction 1.0).
    """
    index = int(len(descending) * fraction)
    if index >= len(descending):
        return None
    return descending[index]

class Species:
    """
    A species representing a cluster of genetically similar genomes in NEAT.

    In NEAT, the population is divided into species based on genetic similarity,
    allowing different evolutionary niches to develop independently. This protects
    innovative structures from being eliminated by competition with more mature
    solutions.

    Each species keeps a representative genome used for compatibility checks
    during speciation. The representative is one of the species' genomes and is
    re-chosen at random every generation.

    Public Attributes:
        id:             Unique species identifier
        genomes:        The genomes that are part of this species
        representative: Genome used for compatibility checks during speciation
        age:            Number of generations this species has existed

    Public Methods:
        increase_age(): Age the species by one generation
        prune(...):     Cull the weakest genomes, possibly the whole species

    Life Cycle:
    1. Created when a genome isn't compatible with any existing species
    2. Accumulates genomes during speciation
    3. Ages once per generation
    4. Keeps only its fittest genomes when pruned
    5. Goes extinct when pruning leaves it empty
    """

    def __init__(self, species_id: int, genomes: list['Genome'], representative: 'Genome'):
        """
        Parameters:
            species_id:     unique species identifier
            genomes:        the genomes of this species
            representative: the genome that represents this species in the speciation process
        """
        self.id            : int             = species_id
        self.genomes       : list['Genome']  = genomes
        self.representative: 'Genome'        = representative
        self.age           : int             = 0

    def increase_age(self) -> None:
        self.age += 1

    def prune(self,
              fitness       : Mapping[int, float],
              keep_fraction : float,
              age_threshold : int,
              global_median : float | None) -> None:
        """
        Cull the weakest genomes of the species.

        Only the fittest 'keep_fraction' of the genomes (plus one) survive.
        Once the species is at least 'age_threshold' generations old it must
        also hold its own against the rest of the population: if the median
        fitness of its surviving genomes is lower than the median fitness of
        all genomes, the species dies out entirely. Younger species are spared
        to give their innovations a chance to mature.

        Parameters:
            fitness:       genome ID => fitness
            keep_fraction: fraction of the genomes allowed to survive
            age_threshold: age from which the species can go extinct
            global_median: median fitness over the whole population
                           (None disables the extinction check)

        With keep_fraction 1.0 the median rank falls past the surviving
        genomes and the species never goes extinct.
        """
        self.genomes.sort(key=lambda genome: fitness[genome.genome_id], reverse=True)
        del self.genomes[int(len(self.genomes) * keep_fraction) + 1:]

        if not self.genomes or self.age < age_threshold or global_median is None:
            return

        kept_fitness = [fitness[genome.genome_id] for genome in self.genomes]
        kept_median  = fitness_at_rank(kept_fitness, keep_fraction)

        # No median rank when every genome is kept
        if kept_median is not None and kept_median < global_median:
            self.genomes = []

    def __repr__(self):
        return f"Species(id={self.id}, age={self.age}, genomes={len(self.genomes)})"
