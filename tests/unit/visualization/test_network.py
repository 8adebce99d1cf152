"""
Unit tests for neatcore.visualization.network module.
"""

from unittest.mock import patch

import graphviz  # type: ignore

from neatcore.genotype              import Genome, Link, Neuron
from neatcore.visualization.network import explain_genome, genome_to_graph, render_genome


class TestGenomeToGraph:
    """Test genome_to_graph()."""

    def test_returns_digraph(self, simple_genome):
        assert isinstance(genome_to_graph(simple_genome), graphviz.Digraph)

    def test_nodes_and_edges(self, two_input_genome):
        source = genome_to_graph(two_input_genome).source

        assert '[INPUT] x' in source
        assert '[INPUT] z' in source
        assert '[OUTPUT] y' in source
        assert '1 -> 2' in source
        assert '3 -> 2' in source

    def test_edge_colors(self, two_input_genome):
        two_input_genome.links[1].enabled = False
        source = genome_to_graph(two_input_genome).source

        assert '1 -> 2 [label=0.5 color=gray]' in source
        assert '3 -> 2 [label=-0.25 color=red]' in source
        assert 'color=green' not in source

    def test_positive_weight_is_green(self, simple_genome):
        assert 'color=green' in genome_to_graph(simple_genome).source

    def test_weight_labels(self, two_input_genome):
        two_input_genome.links[1].weight = 0.123456
        source = genome_to_graph(two_input_genome).source
        assert 'label=0.12' in source
        assert 'label=-0.25' in source

    def test_enabled_only(self, two_input_genome):
        two_input_genome.links[2].enabled = False
        source = genome_to_graph(two_input_genome, enabled_only=True).source

        assert '[INPUT] z' not in source
        assert '3 -> 2' not in source
        assert '1 -> 2' in source

    def test_unlinked_neurons_are_not_drawn(self, input_x, input_z, output_y):
        source = genome_to_graph(Genome(1, [input_x, input_z, output_y])).source
        assert '[INPUT]' not in source

    def test_genome_untouched(self, two_input_genome):
        before = [(l.innovation, l.weight, l.enabled) for l in two_input_genome.links.values()]
        genome_to_graph(two_input_genome)
        assert [(l.innovation, l.weight, l.enabled) for l in two_input_genome.links.values()] == before


class TestExplainGenome:
    """Test explain_genome()."""

    def test_explanation(self, two_input_genome):
        two_input_genome.species_id = 2
        assert explain_genome(two_input_genome) == (
            "Genome 1 | Species 2:\n"
            "#1 [INPUT] x -> [OUTPUT] y weight=0.5\n"
            "#2 [INPUT] z -> [OUTPUT] y weight=-0.25"
        )

    def test_disabled_marker(self, two_input_genome):
        two_input_genome.links[2].enabled = False
        assert explain_genome(two_input_genome).endswith("weight=-0.25 [DISABLED]")

    def test_enabled_only(self, two_input_genome):
        two_input_genome.links[2].enabled = False
        assert explain_genome(two_input_genome, enabled_only=True) == (
            "Genome 1 | Species None:\n"
            "#1 [INPUT] x -> [OUTPUT] y weight=0.5"
        )

    def test_hidden_label(self, input_x, output_y):
        hidden = Neuron.hidden(7)
        genome = Genome(4, [input_x, hidden, output_y], [Link(3, 1, 7, 1.0)])
        assert "#3 [INPUT] x -> [HIDDEN] #7 weight=1.0" in explain_genome(genome)


class TestRenderGenome:
    """Test render_genome() without calling the graphviz executables."""

    def test_render(self, simple_genome):
        with patch.object(graphviz.Digraph, 'render', autospec=True, return_value='out.svg') as mock_render:
            path = render_genome(simple_genome, 'out', format='svg')

        assert path == 'out.svg'
        dot = mock_render.call_args.args[0]
        assert dot.format == 'svg'
        assert mock_render.call_args.args[1] == 'out'
        assert mock_render.call_args.kwargs == {'view': False, 'cleanup': True}
