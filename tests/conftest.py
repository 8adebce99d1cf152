"""Pytest configuration and shared fixtures."""

import random

import pytest

from neatcore.genotype import Genome, InnovationLedger, Link, Neuron, NeuronType
from neatcore.run.config import Config


@pytest.fixture(autouse=True)
def set_random_seed():
    """Set the random seed for reproducibility."""
    random.seed(42)
    yield
    random.seed(None)


@pytest.fixture
def config():
    """Default configuration (no INI file)."""
    return Config()


@pytest.fixture
def zero_mutation_config():
    """Configuration with all mutation probabilities set to 0."""
    config = Config()
    config.weight_mutation_prob  = 0.0
    config.enable_mutation_prob  = 0.0
    config.disable_mutation_prob = 0.0
    config.split_mutation_prob   = 0.0
    config.insert_mutation_prob  = 0.0
    return config


@pytest.fixture
def ledger():
    """Fresh innovation ledger; hidden neuron IDs start after the fixture neurons."""
    return InnovationLedger(first_neuron_id=100)


@pytest.fixture
def input_x():
    return Neuron(NeuronType.INPUT, 1, "x")


@pytest.fixture
def input_z():
    return Neuron(NeuronType.INPUT, 3, "z")


@pytest.fixture
def output_y():
    return Neuron(NeuronType.OUTPUT, 2, "y")


@pytest.fixture
def simple_genome(ledger, input_x, output_y):
    """Genome x -> y with a single link of weight 0.5."""
    innov = ledger.new_link_innovation(input_x, output_y)
    return Genome(ledger.next_genome_id(), [input_x, output_y], [Link(innov, 1, 2, 0.5)])


@pytest.fixture
def two_input_genome(ledger, input_x, input_z, output_y):
    """Genome with links x -> y (weight 0.5) and z -> y (weight -0.25)."""
    innov_xy = ledger.new_link_innovation(input_x, output_y)
    innov_zy = ledger.new_link_innovation(input_z, output_y)
    return Genome(ledger.next_genome_id(),
                  [input_x, input_z, output_y],
                  [Link(innov_xy, 1, 2, 0.5), Link(innov_zy, 3, 2, -0.25)])
