"""
Network visualization utilities.

Turn a genome into a graphviz digraph or a plain text explanation
of its links. Neither function modifies the genome.

Functions:
    genome_to_graph: Build a graphviz.Digraph of the genome's network
    explain_genome:  Describe the genome's links as text
    render_genome:   Render the genome's network to a file
"""

import graphviz  # type: ignore

from neatcore.genotype import Genome, Link, NeuronType

# Node attributes, per neuron type
_NODE_STYLES = {
    NeuronType.INPUT : {'fillcolor': 'lightgrey', 'color': 'red' , 'style': 'filled', 'shape': 'circle'},
    NeuronType.HIDDEN: {'fillcolor': 'lightblue', 'color': 'black', 'style': 'filled', 'shape': 'circle'},
    NeuronType.OUTPUT: {'fillcolor': 'white'    , 'color': 'blue' , 'style': 'filled', 'shape': 'circle'},
}

def _shown_links(genome: Genome, enabled_only: bool) -> list[Link]:
    return [link for link in genome.links.values() if link.enabled or not enabled_only]

def _edge_color(link: Link) -> str:
    if not link.enabled:
        return 'gray'
    return 'green' if link.weight > 0 else 'red'

def genome_to_graph(genome: Genome, enabled_only: bool = False) -> graphviz.Digraph:
    """
    Build a directed graph of the network encoded by a genome.

    Only neurons referenced by a shown link become nodes. Edges are labelled
    with the link weight (2 decimals) and colored green (positive weight),
    red (non-positive weight) or gray (disabled link).

    Parameters:
        genome:       the genome to draw
        enabled_only: draw only the enabled links

    Returns:
        graphviz.Digraph object representing the network
    """
    dot = graphviz.Digraph(engine='dot')
    dot.attr(rankdir='LR')

    drawn = set()
    for link in _shown_links(genome, enabled_only):
        for neuron_id in (link.node_in, link.node_out):
            if neuron_id in drawn:
                continue
            neuron = genome.neurons[neuron_id]
            dot.node(str(neuron_id), label=neuron.label, **_NODE_STYLES[neuron.type])
            drawn.add(neuron_id)

        dot.edge(str(link.node_in), str(link.node_out),
                 label=f"{round(link.weight, 2)}", color=_edge_color(link))

    return dot

def explain_genome(genome: Genome, enabled_only: bool = False) -> str:
    """
    Describe the links of a genome, one per line, in innovation order.

    Example:
        Genome 3 | Species 1:
        #1 [INPUT] x -> [OUTPUT] y weight=0.5
        #2 [INPUT] z -> [OUTPUT] y weight=-0.13 [DISABLED]
    """
    lines = [f"Genome {genome.genome_id} | Species {genome.species_id}:"]
    for link in sorted(_shown_links(genome, enabled_only), key=lambda link: link.innovation):
        line = (f"#{link.innovation} "
                f"{genome.neurons[link.node_in].label} -> {genome.neurons[link.node_out].label} "
                f"weight={round(link.weight, 2)}")
        if not link.enabled:
            line += " [DISABLED]"
        lines.append(line)
    return '\n'.join(lines)

def render_genome(genome      : Genome,
                  output_file : str  = 'network',
                  format      : str  = 'png',
                  view        : bool = False,
                  enabled_only: bool = False) -> str:
    """
    Render the network encoded by a genome to a file.

    Parameters:
        genome:       the genome to draw
        output_file:  output filename (without extension)
        format:       output format (png, pdf, svg, etc.)
        view:         whether to automatically open the generated file
        enabled_only: draw only the enabled links

    Returns:
        path of the rendered file
    """
    dot = genome_to_graph(genome, enabled_only)
    dot.format = format
    return dot.render(output_file, view=view, cleanup=True)
