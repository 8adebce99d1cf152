"""
NEAT Run Package

This package contains the configuration record and the
abstract trial driver for running the NEAT algorithm.

Exported Classes:
    Config: Configuration parameters, optionally parsed from an INI file
    Trial:  Abstract base class for one run of the NEAT algorithm
"""

from neatcore.run.config import Config
from neatcore.run.trial  import Trial

__all__ = [
    'Config',
    'Trial',
]
