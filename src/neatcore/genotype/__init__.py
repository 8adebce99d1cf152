"""
NEAT Genotype Package

This package implements the genotype representation for the NEAT (NeuroEvolution of
Augmenting Topologies) algorithm. It provides classes for encoding neural network
structures and parameters at the genetic level.

The NEAT genotype consists of:
- Neurons: immutable node descriptors (input, hidden, output) carrying a payload
- Links:   weighted connections between neurons, identified by innovation numbers

Modules:
    neuron:            NeuronType enumeration, HiddenPayload and Neuron classes
    link:              Link class
    genome:            Genome class
    innovation_ledger: InnovationLedger class

Exported Classes:
    NeuronType:       Enumeration for neuron types (INPUT, HIDDEN, OUTPUT)
    HiddenPayload:    Constant payload of hidden neurons
    Neuron:           Descriptor of a single network node
    Link:             Gene encoding a weighted connection between neurons
    Genome:           Complete genome representing a neural network
    InnovationLedger: Tracker for innovation numbers and neuron, species, genome IDs
    SplitInnovation:  IDs produced by splitting a link
"""

from neatcore.genotype.genome            import Genome, MATING_TOLERANCE
from neatcore.genotype.innovation_ledger import InnovationLedger, SplitInnovation
from neatcore.genotype.link              import Link
from neatcore.genotype.neuron            import HiddenPayload, Neuron, NeuronType

__all__ = ['Genome',
           'HiddenPayload',
           'InnovationLedger',
           'Link',
           'MATING_TOLERANCE',
           'Neuron',
           'NeuronType',
           'SplitInnovation']
