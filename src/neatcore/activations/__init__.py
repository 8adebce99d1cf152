"""
Activations Package

This package provides the activation functions used to evaluate genomes.

Exported:
    logistic_activation:             The logistic sigmoid
    thresholded_logistic_activation: 0 for non-positive signals, logistic sigmoid otherwise
"""

from neatcore.activations.basic_activations import (
    logistic_activation,
    thresholded_logistic_activation
)

__all__ = [
    'logistic_activation',
    'thresholded_logistic_activation'
]
