"""
NEAT Errors Module

This module defines the fatal error conditions of the evolutionary engine.
Expected structural no-ops (duplicate innovations, self-loops, cycle-forming
links) are not errors: the mutation that detects them simply skips them.

Classes:
    NeatError:           Base class for all fatal engine errors
    ConfigurationError:  Invalid or incomplete configuration
    ExtinctionError:     No genome survived pruning
    MissingFitnessError: A live genome has no score
"""

class NeatError(Exception):
    """
    Base class for the fatal errors raised by the engine.
    """

class ConfigurationError(NeatError):
    """
    Raised when the configuration is invalid, incomplete or unreadable.
    Detected before any generational iteration takes place.
    """

class ExtinctionError(NeatError):
    """
    Raised when the pool of surviving genomes is empty entering repopulation.
    Usually a sign of over-aggressive pruning parameters.
    """

class MissingFitnessError(NeatError):
    """
    Raised when the fitness map handed to an iteration lacks a live genome.
    """

    def __init__(self, genome_ids):
        self.genome_ids = sorted(genome_ids)
        super().__init__(f"no fitness for genome(s) {self.genome_ids}")
