"""
Unit tests for neatcore.pool.population module.

This module contains tests for the Population class,
which is the top-level evolutionary coordinator in NEAT.
"""

import pytest
from unittest.mock import patch

from neatcore.errors   import ConfigurationError, ExtinctionError, MissingFitnessError
from neatcore.genotype import Genome, InnovationLedger, Link, Neuron, NeuronType
from neatcore.pool     import Population, Species
from neatcore.run      import Config


# ============================================================================
# Helpers
# ============================================================================

def assert_partition(population: Population):
    """Every genome belongs to exactly one non-empty species and knows which."""
    seen = set()
    for spec in population.species:
        assert spec.genomes
        assert spec.id >= 1
        for genome in spec.genomes:
            assert genome.species_id == spec.id
            assert genome.genome_id not in seen
            seen.add(genome.genome_id)
    assert len(seen) == len(population.genomes)


def score(genome: Genome) -> float:
    """Fitness of a genome with 3 inputs and 1 output, all inputs set to 1."""
    return genome.evaluate(lambda payload: 1.0)["out"]


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def small_config():
    """10 genomes, 3 inputs, 1 output, partial connectivity, no extinction."""
    config = Config()
    config.target_population  = 10
    config.initial_cxn_policy = "partial"
    config.age_threshold      = 100
    return config


@pytest.fixture
def small_population(small_config):
    return Population.from_topology(["a", "b", "c"], ["out"], small_config)


@pytest.fixture
def two_species_population(zero_mutation_config):
    """
    Species 1 holds 3 fit genomes (fitness 10, 9, 8; weights 0.1, 0.2, 0.3),
    species 2 holds 3 weak genomes (fitness 3, 2, 1; weights 0.7, 0.8, 0.9).
    """
    zero_mutation_config.target_population = 6
    zero_mutation_config.age_threshold     = 1

    ledger = InnovationLedger(first_neuron_id=3)
    x      = Neuron(NeuronType.INPUT , 1, "x")
    y      = Neuron(NeuronType.OUTPUT, 2, "y")
    innov  = ledger.new_link_innovation(x, y)

    species, fitness = [], {}
    for species_fitness, weights in (((10.0, 9.0, 8.0), (0.1, 0.2, 0.3)),
                                     (( 3.0, 2.0, 1.0), (0.7, 0.8, 0.9))):
        species_id = ledger.next_species_id()
        genomes    = []
        for value, weight in zip(species_fitness, weights):
            genome = Genome(ledger.next_genome_id(), [x, y], [Link(innov, 1, 2, weight)], species_id)
            fitness[genome.genome_id] = value
            genomes.append(genome)
        species.append(Species(species_id, genomes, genomes[0]))

    return Population(zero_mutation_config, ledger, species), fitness


# ============================================================================
# Test Population construction
# ============================================================================

class TestPopulationInit:
    """Test Population construction."""

    def test_empty_population(self, config):
        population = Population(config, InnovationLedger())
        assert population.species == []
        assert population.genomes == []

    def test_invalid_target_population(self, config):
        config.target_population = 0
        with pytest.raises(ConfigurationError):
            Population(config, InnovationLedger())

    def test_invalid_mutation_rate(self, config):
        config.split_mutation_prob = 1.5
        with pytest.raises(ConfigurationError):
            Population(config, InnovationLedger())

    def test_direct_construction_reserves_neuron_ids(self, zero_mutation_config):
        """A population built from existing species never reuses their neuron IDs."""
        zero_mutation_config.split_mutation_prob = 1.0
        zero_mutation_config.target_population   = 4

        ledger = InnovationLedger()
        x      = Neuron(NeuronType.INPUT , 1, "x")
        y      = Neuron(NeuronType.OUTPUT, 2, "y")
        genome = Genome(ledger.next_genome_id(), [x, y], [Link(ledger.new_link_innovation(x, y), 1, 2, 0.5)], 1)

        population = Population(zero_mutation_config, ledger, [Species(1, [genome], genome)])
        assert ledger.next_neuron_id() == 3

        # ID 3 was just handed out, so splitting x -> y creates neuron 4
        population.iterate({genome.genome_id: 1.0})

        assert len(population.genomes) == 4
        for offspring in population.genomes:
            if offspring.hidden_neurons:
                assert [neuron.id for neuron in offspring.hidden_neurons] == [4]
            assert offspring.neurons[1] == x
            assert offspring.neurons[2] == y

    def test_from_genomes_reserves_neuron_ids(self, config):
        ledger = InnovationLedger()
        x = Neuron(NeuronType.INPUT , 1 , "x")
        y = Neuron(NeuronType.OUTPUT, 50, "y")
        population = Population.from_genomes([Genome(ledger.next_genome_id(), [x, y])], config, ledger)

        assert population.ledger is ledger
        assert ledger.next_neuron_id() == 51

    def test_from_genomes_assigns_species(self, config):
        ledger  = InnovationLedger()
        x       = Neuron(NeuronType.INPUT , 1, "x")
        y       = Neuron(NeuronType.OUTPUT, 2, "y")
        genomes = [Genome(ledger.next_genome_id(), [x, y]) for _ in range(4)]

        population = Population.from_genomes(genomes, config, ledger)

        assert_partition(population)
        assert sorted(genome.genome_id for genome in population.genomes) == [1, 2, 3, 4]


class TestPopulationFromTopology:
    """Test Population.from_topology()."""

    def test_full_connectivity(self, small_config):
        small_config.initial_cxn_policy = "full"
        population = Population.from_topology(["a", "b", "c"], ["out"], small_config)

        assert len(population.genomes) == 10
        for genome in population.genomes:
            assert set(genome.neurons) == {1, 2, 3, 4}
            assert set(genome.links) == {1, 2, 3}
            assert [neuron.id for neuron in genome.output_neurons] == [4]
            assert all(-1.0 <= link.weight <= 1.0 for link in genome.links.values())
        assert_partition(population)

    def test_hidden_ids_follow_io_ids(self, small_population):
        assert small_population.ledger.next_neuron_id() == 5

    def test_no_connectivity(self, small_config):
        small_config.initial_cxn_policy = "none"
        population = Population.from_topology(["a", "b", "c"], ["out"], small_config)

        assert all(not genome.links for genome in population.genomes)

        # Identical genomes are at distance 0, which never exceeds the threshold
        assert len(population.species) == 10

    def test_one_input(self, small_config):
        small_config.initial_cxn_policy = "one-input"
        population = Population.from_topology(["a", "b", "c"], ["out", "other"], small_config)

        for genome in population.genomes:
            assert len(genome.links) == 2
            assert len({link.node_in for link in genome.links.values()}) == 1

    def test_partial(self, small_population):
        for genome in small_population.genomes:
            assert len(genome.links) == 1

    def test_bad_policy(self, small_config):
        small_config.initial_cxn_policy = "some"
        with pytest.raises(ConfigurationError):
            Population.from_topology(["a"], ["out"], small_config)

    def test_given_ledger(self, small_config):
        ledger = InnovationLedger()
        population = Population.from_topology(["a", "b", "c"], ["out"], small_config, ledger)
        assert population.ledger is ledger
        assert ledger.next_neuron_id() == 5


# ============================================================================
# Test Population accessors
# ============================================================================

class TestPopulationAccessors:
    """Test genomes and get_fittest_genome."""

    def test_genomes_flattens_species(self, two_species_population):
        population, _ = two_species_population
        assert [genome.genome_id for genome in population.genomes] == [1, 2, 3, 4, 5, 6]

    def test_get_fittest_genome(self, two_species_population):
        population, fitness = two_species_population
        fitness[5] = 100.0
        assert population.get_fittest_genome(fitness).genome_id == 5

    def test_get_fittest_genome_empty(self, config):
        assert Population(config, InnovationLedger()).get_fittest_genome({}) is None


# ============================================================================
# Test Population iteration
# ============================================================================

class TestPopulationIterate:
    """Test Population.iterate()."""

    def test_end_to_end(self, small_population):
        """Several generations keep the population at its target size, fully speciated."""
        for _ in range(5):
            fitness = {genome.genome_id: score(genome) for genome in small_population.genomes}
            small_population.iterate(fitness)

            assert len(small_population.genomes) == 10
            assert_partition(small_population)

    def test_species_age(self, two_species_population):
        population, fitness = two_species_population
        population._config.age_threshold = 100

        # Every genome is compatible with every representative => one species survives
        population._config.compatibility_threshold = -1.0
        population.iterate(fitness)

        assert [spec.id for spec in population.species] == [1]
        assert population.species[0].age == 1

    def test_underperforming_species_goes_extinct(self, two_species_population):
        """
        Global median (rank 3 of [10, 9, 8, 3, 2, 1]) is 3. Species 2 keeps
        [3, 2] whose median is 2, so it goes extinct. Species 1 keeps [10, 9].
        """
        population, fitness = two_species_population
        population.iterate(fitness)

        ids = {genome.genome_id for genome in population.genomes}
        assert len(ids) == 6
        assert ids.isdisjoint({3, 4, 5, 6})
        assert {1, 2} <= ids

    def test_parents_drawn_from_survivors(self, two_species_population):
        """Without mutations, offspring weights come from the surviving genomes only."""
        population, fitness = two_species_population
        population.iterate(fitness)

        weights = {genome.links[1].weight for genome in population.genomes}
        assert weights <= {0.1, 0.2}

    def test_offspring_get_new_ids(self, two_species_population):
        population, fitness = two_species_population
        population.iterate(fitness)

        new_ids = sorted(genome.genome_id for genome in population.genomes if genome.genome_id > 6)
        assert new_ids == [7, 8, 9, 10]

    def test_missing_fitness(self, small_population):
        genomes = small_population.genomes
        fitness = {genome.genome_id: 1.0 for genome in genomes[1:]}

        with pytest.raises(MissingFitnessError) as excinfo:
            small_population.iterate(fitness)

        assert excinfo.value.genome_ids == [genomes[0].genome_id]

        # Nothing changed
        assert small_population.genomes == genomes
        assert all(spec.age == 0 for spec in small_population.species)

    def test_empty_population_cannot_repopulate(self, config):
        population = Population(config, InnovationLedger())
        with pytest.raises(ExtinctionError):
            population.iterate({})

    def test_extinction(self, small_population):
        """When pruning empties every species, the population is left empty."""
        fitness = {genome.genome_id: 1.0 for genome in small_population.genomes}

        def wipe_out(spec, *args):
            spec.genomes = []

        with patch.object(Species, 'prune', autospec=True, side_effect=wipe_out):
            with pytest.raises(ExtinctionError):
                small_population.iterate(fitness)

        assert small_population.species == []
        assert small_population.genomes == []

    def test_str(self, two_species_population):
        population, _ = two_species_population
        assert str(population).count("Genome ") == 6
