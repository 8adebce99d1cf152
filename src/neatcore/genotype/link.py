"""
NEAT Link Module

This module implements the Link class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    Link: Gene encoding a weighted connection between two neurons
"""

import copy

class Link:
    """
    A gene describing a weighted, directed connection between two neurons.

    Links are uniquely identified by their innovation number, which serves as
    a historical marker enabling gene alignment during crossover: the same
    structural event occurring in two genomes yields links with the same
    innovation number.

    The endpoints are stored as neuron IDs; the neurons themselves live in the
    genome's neuron arena. Links can be enabled or disabled; a disabled link
    keeps its place in the genome but carries no signal.

    Public Attributes:
        innovation: Global innovation number uniquely identifying this link
        node_in:    ID of the source neuron
        node_out:   ID of the destination neuron
        weight:     Weight of the link
        enabled:    Whether this link is active in the network

    Public Methods:
        clone(): Copy of this link, with the same innovation number
    """

    def __init__(self,
                 innovation: int,
                 node_in   : int,
                 node_out  : int,
                 weight    : float,
                 enabled   : bool = True):
        """
        Initialize a link gene.

        Parameters:
            innovation: Number uniquely and globally identifying this link
            node_in:    ID of the source neuron
            node_out:   ID of the destination neuron
            weight:     Weight of the link
            enabled:    Whether this link is active in the network
        """
        self.innovation: int   = innovation
        self.node_in   : int   = node_in
        self.node_out  : int   = node_out
        self.weight    : float = weight
        self.enabled   : bool  = enabled

    def clone(self) -> 'Link':
        return copy.copy(self)

    def __repr__(self):
        return (f"Link(innovation={self.innovation:03d}, node_in={self.node_in:03d}, "
                f"node_out={self.node_out:03d}, weight={self.weight:+.6f}, enabled={self.enabled})")

    def __str__(self):
        s  = f"[{self.innovation:03d},{'E' if self.enabled else 'D'},"
        s += f"{self.node_in:02d}=>{self.node_out:02d},{self.weight:+.02f}]"
        return s
