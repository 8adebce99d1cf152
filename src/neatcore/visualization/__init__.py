"""
NEAT Visualization Package

Read-only adapters for inspecting genomes and trials.

Modules:
    network: Genome => graphviz digraph, text explanation
    fitness: Fitness history => matplotlib line chart
"""

from neatcore.visualization.network import genome_to_graph, explain_genome, render_genome
from neatcore.visualization.fitness import plot_fitness

__all__ = [
    'genome_to_graph',
    'explain_genome',
    'render_genome',
    'plot_fitness',
]
