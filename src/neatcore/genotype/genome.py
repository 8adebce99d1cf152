"""
NEAT Genome Module

This module implements the Genome class for the NEAT
(NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    Genome: Complete genome representing a neural network structure
"""

import random
from typing import Any, Callable, Iterable, TYPE_CHECKING

from neatcore.activations                import thresholded_logistic_activation
from neatcore.genotype.innovation_ledger import InnovationLedger
from neatcore.genotype.link              import Link
from neatcore.genotype.neuron            import Neuron, NeuronType
if TYPE_CHECKING:
    from neatcore.run.config import Config

# Fitness differences smaller than this are treated as a tie during crossover
MATING_TOLERANCE = 0.01

InputValueAdapter = Callable[[Any], float]

class Genome:
    """
    A NEAT genome representing a neural network as a collection of neurons and links.

    In the NEAT (NeuroEvolution of Augmenting Topologies) algorithm, a genome encodes
    the structure and parameters of a neural network at the genotype level. It consists of:
    - Neurons: describe network nodes (input, hidden, output), keyed by neuron ID
    - Links: describe weighted connections between neurons, keyed by innovation
      number (a historical marking used to align genomes during crossover)

    Genomes grow by mutation (splitting links with new hidden neurons, inserting
    new links) while always remaining a directed acyclic graph. Neurons are never
    removed: links are disabled instead of being deleted.

    Public Attributes:
        genome_id:  Unique genome identifier (allocated by the InnovationLedger)
        species_id: ID of the species holding this genome (None when unassigned)
        neurons:    Dictionary mapping neuron IDs to Neuron objects
        links:      Dictionary mapping innovation numbers to Link objects

    Public Properties:
        input_neurons:  List of all input neurons
        output_neurons: List of all output neurons
        hidden_neurons: List of all hidden neurons
        enabled_links:  List of all enabled links

    Public Methods:
        reduce(output_key):                    Build one evaluation function per output neuron
        evaluate(adapter, output_key):         Evaluate all output neurons
        clone():                               Copy links, share neurons
        mutate(ledger, config):                Mutated copy of this genome
        mate(other, fitness_delta, ledger):    Create offspring by crossing this genome with another
        distance(other, config):               Genetic distance to another genome
        is_compatible_with(other, config):     Whether the distance exceeds the compatibility threshold
    """

    def __init__(self,
                 genome_id : int,
                 neurons   : Iterable[Neuron],
                 links     : Iterable[Link] = (),
                 species_id: int | None     = None):
        """
        Initialize a Genome.

        Parameters:
            genome_id:  Unique genome identifier
            neurons:    The neurons of the network
            links:      The links of the network (their endpoints must be among 'neurons')
            species_id: ID of the species holding this genome, None if unassigned

        Raises:
            ValueError: if two different neurons share an ID, or a link references
                        a neuron which is not part of the genome
        """
        self.genome_id : int        = genome_id
        self.species_id: int | None = species_id

        self.neurons: dict[int, Neuron] = {}  # neuron ID           => neuron
        self.links  : dict[int, Link]   = {}  # innovation number   => link

        for neuron in neurons:
            self._add_neuron(neuron)

        for link in links:
            if link.node_in not in self.neurons:
                raise ValueError(f"Link {link.innovation} references non-existent source neuron: {link.node_in}")
            if link.node_out not in self.neurons:
                raise ValueError(f"Link {link.innovation} references non-existent destination neuron: {link.node_out}")
            self.links[link.innovation] = link

    def _add_neuron(self, neuron: Neuron) -> None:
        existing = self.neurons.get(neuron.id)
        if existing is None:
            self.neurons[neuron.id] = neuron
        elif existing != neuron:
            raise ValueError(f"Neuron ID {neuron.id} is already used by {existing.label}")

    @property
    def input_neurons(self) -> list[Neuron]:
        return [neuron for neuron in self.neurons.values() if neuron.type == NeuronType.INPUT]

    @property
    def output_neurons(self) -> list[Neuron]:
        return [neuron for neuron in self.neurons.values() if neuron.type == NeuronType.OUTPUT]

    @property
    def hidden_neurons(self) -> list[Neuron]:
        return [neuron for neuron in self.neurons.values() if neuron.type == NeuronType.HIDDEN]

    @property
    def enabled_links(self) -> list[Link]:
        return [link for link in self.links.values() if link.enabled]

    def has_neuron(self, neuron: Neuron) -> bool:
        """
        Whether this genome contains a neuron with the same identity (type, ID and payload).
        """
        return self.neurons.get(neuron.id) == neuron

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def reduce(self, output_key: Callable[[Any], str] | None = None) -> dict[str, Callable[[InputValueAdapter], float]]:
        """
        Reduce the genome to one function per output neuron.

        Each function takes an input value adapter (mapping the payload of an
        input neuron to a number) and returns the activation of its output neuron.

        Parameters:
            output_key: maps the payload of an output neuron to its key in the
                        result; defaults to the payload's string form

        Returns:
            dictionary: output key => function(adapter) -> activation
        """
        key_of = output_key if output_key is not None else str

        functions = {}
        for neuron in self.output_neurons:
            functions[key_of(neuron.payload)] = self._reduce_neuron(neuron.id)
        return functions

    def evaluate(self, adapter: InputValueAdapter, output_key: Callable[[Any], str] | None = None) -> dict[str, float]:
        """
        Evaluate all output neurons for one input frame.

        Activations shared by several output neurons are calculated only once.

        Parameters:
            adapter:    maps the payload of an input neuron to a number
            output_key: maps the payload of an output neuron to its key in the result

        Returns:
            dictionary: output key => activation
        """
        key_of   = output_key if output_key is not None else str
        incoming = self._incoming_links()
        memo     = {}
        return {key_of(neuron.payload): self._activation(neuron.id, adapter, incoming, memo)
                for neuron in self.output_neurons}

    def _reduce_neuron(self, neuron_id: int) -> Callable[[InputValueAdapter], float]:
        def activate(adapter: InputValueAdapter) -> float:
            return self._activation(neuron_id, adapter, self._incoming_links(), {})
        return activate

    def _incoming_links(self) -> dict[int, list[Link]]:
        """
        For each neuron, the list of enabled links ending at it.
        """
        incoming = {}
        for link in self.links.values():
            if link.enabled:
                incoming.setdefault(link.node_out, []).append(link)
        return incoming

    def _activation(self,
                    neuron_id: int,
                    adapter  : InputValueAdapter,
                    incoming : dict[int, list[Link]],
                    memo     : dict[int, float]) -> float:
        """
        Activation of a (non-input) neuron: thresholded logistic of the
        weighted sum of its upstream signals over enabled links.
        The value of an input neuron is only ever used through the adapter.
        """
        if neuron_id in memo:
            return memo[neuron_id]

        signal = 0.0
        for link in incoming.get(neuron_id, []):
            source = self.neurons[link.node_in]
            if source.type == NeuronType.INPUT:
                signal += adapter(source.payload) * link.weight
            else:
                signal += self._activation(source.id, adapter, incoming, memo) * link.weight

        activation = thresholded_logistic_activation(signal)
        memo[neuron_id] = activation
        return activation

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def clone(self) -> 'Genome':
        """
        Copy this genome. Links are copied, neurons are shared (never duplicated).
        """
        cloned = Genome.__new__(Genome)
        cloned.genome_id  = self.genome_id
        cloned.species_id = self.species_id
        cloned.neurons    = dict(self.neurons)
        cloned.links      = {innov: link.clone() for innov, link in self.links.items()}
        return cloned

    def mutate(self, ledger: InnovationLedger, config: 'Config') -> 'Genome':
        """
        Return a mutated copy of this genome (this genome is left untouched).

        Every existing link independently undergoes, in this order:
          + weight replacement (uniform value in [-1, 1])
          + disabling (only if enabled)
          + enabling  (only if disabled)
          + splitting by a new hidden neuron
        Then, at most once per call, a new link may be inserted.

        Links created by splits and insertions are staged and only added once
        all per-link trials have run, so they are never mutated in the same pass.

        Parameters:
            ledger: the innovation ledger shared by the whole population
            config: stores the mutation probabilities

        Returns:
            the mutated genome (same genome ID and species)
        """
        mutated = self.clone()
        staged: dict[int, Link] = {}   # innovation number => new link

        # New hidden neurons must not reuse the ID of a neuron of this genome
        ledger.reserve_neuron_ids(self.neurons.values())

        for link in mutated.links.values():

            if random.random() < config.weight_mutation_prob:
                link.weight = random.uniform(-1.0, 1.0)

            if random.random() < config.disable_mutation_prob and link.enabled:
                link.enabled = False

            if random.random() < config.enable_mutation_prob and not link.enabled:
                link.enabled = True

            if random.random() < config.split_mutation_prob:
                mutated._split_link(link, ledger, staged)

        if random.random() < config.insert_mutation_prob:
            mutated._insert_link(ledger, staged)

        mutated.links.update(staged)
        return mutated

    def _split_link(self, link: Link, ledger: InnovationLedger, staged: dict[int, Link]) -> None:
        """
        Split a link by adding a new hidden neuron.
        The split link is disabled and replaced by two new links:
          from -> new neuron (weight 1.0), new neuron -> to (weight of the split link)
        The split is silently skipped if the new neuron's ID is taken by another neuron.
        """
        # From the ledger, get the ID for the new neuron and the
        # innovation numbers for the two new links
        split = ledger.split_innovation(self.neurons[link.node_in], self.neurons[link.node_out])
        new_neuron = Neuron.hidden(split.neuron)

        # A split recorded before this genome's neurons were known may name
        # an ID this genome already uses for another neuron
        existing = self.neurons.get(new_neuron.id)
        if existing is not None and existing != new_neuron:
            return

        link.enabled = False

        # The same link may have been split before and the new structure inherited
        # by this genome. Only the first link is checked: both links are always
        # created together and links are never removed.
        if split.first_link in self.links:
            return

        self._add_neuron(new_neuron)
        staged[split.first_link]  = Link(split.first_link , link.node_in , new_neuron.id, 1.0)
        staged[split.second_link] = Link(split.second_link, new_neuron.id, link.node_out, link.weight)

    def _insert_link(self, ledger: InnovationLedger, staged: dict[int, Link]) -> None:
        """
        Insert a new link between two existing neurons.

        The link starts at a random input or hidden neuron and ends at a
        random output or hidden neuron. The attempt is silently dropped if
        both ends are the same neuron, if this link already exists, or if it
        would create a cycle in the network graph.
        """
        sources = [n for n in self.neurons.values() if n.type in (NeuronType.INPUT , NeuronType.HIDDEN)]
        targets = [n for n in self.neurons.values() if n.type in (NeuronType.OUTPUT, NeuronType.HIDDEN)]
        if not sources or not targets:
            return

        from_neuron = random.choice(sources)
        to_neuron   = random.choice(targets)

        # Carry out quick checks first
        if from_neuron == to_neuron:
            return
        innovation = ledger.new_link_innovation(from_neuron, to_neuron)
        if innovation in self.links or innovation in staged:
            return

        # Carry out expensive check last
        if self._would_create_cycle(from_neuron.id, to_neuron.id, staged.values()):
            return

        staged[innovation] = Link(innovation, from_neuron.id, to_neuron.id, random.uniform(-1.0, 1.0))

    def _would_create_cycle(self, from_node: int, to_node: int, extra_links: Iterable[Link] = ()) -> bool:
        """
        Check if adding a link from_node -> to_node would create a cycle.
        Uses DFS to check if there's already a path from 'to_node' back to 'from_node'.
        Considers ALL links (both enabled and disabled), plus 'extra_links'.

        Parameters:
            from_node:   proposed start of the new link
            to_node:     proposed end   of the new link
            extra_links: links not yet part of the genome (e.g. staged by a mutation)

        Returns:
            whether adding the new link would create a cycle in the network
        """
        # Avoid trivial links.
        if from_node == to_node:
            return True

        adjacency: dict[int, list[int]] = {}
        for link in list(self.links.values()) + list(extra_links):
            adjacency.setdefault(link.node_in, []).append(link.node_out)

        # If we can reach 'from_node' starting at 'to_node', then adding a
        # link 'from_node' -> 'to_node' would create a network cycle
        visited = set()
        stack   = [to_node]
        while stack:
            current = stack.pop()
            if current == from_node:
                return True
            if current in visited:
                continue
            visited.add(current)
            stack.extend(adjacency.get(current, []))

        return False

    # ------------------------------------------------------------------
    # Crossover
    # ------------------------------------------------------------------

    def mate(self, other: 'Genome', fitness_delta: float, ledger: InnovationLedger) -> 'Genome':
        """
        Perform NEAT crossover between this genome and another to create offspring.

        Crossover rules, per innovation number found in either parent:
        - Matching links:      inherit from either parent at random
        - Non-matching links:  inherit from the fitter parent only; when the
                               parents are (nearly) equally fit, inherit
                               from whichever parent has the link
        A link that would close a cycle in the offspring is not inherited.

        Parameters:
            other:         the other parent genome
            fitness_delta: fitness of this genome minus fitness of 'other'
            ledger:        allocates the offspring's genome ID

        Returns:
            New offspring genome, not yet assigned to any species
        """
        # Neurons found in both parents are always inherited
        common = [neuron for neuron in self.neurons.values() if other.has_neuron(neuron)]
        offspring = Genome(ledger.next_genome_id(), common)

        for innov in sorted(set(self.links) | set(other.links)):
            link_self  = self.links.get(innov)
            link_other = other.links.get(innov)

            if link_self is not None and link_other is not None:
                parent, link = random.choice([(self, link_self), (other, link_other)])
            elif link_self is not None and fitness_delta >= -MATING_TOLERANCE:
                parent, link = self, link_self
            elif link_other is not None and fitness_delta <= MATING_TOLERANCE:
                parent, link = other, link_other
            else:
                continue

            # Links inherited from different parents may close a cycle
            if offspring._would_create_cycle(link.node_in, link.node_out):
                continue

            # The ends of an inherited link come from the parent it was inherited from
            for neuron_id in (link.node_in, link.node_out):
                if neuron_id not in offspring.neurons:
                    offspring.neurons[neuron_id] = parent.neurons[neuron_id]
            offspring.links[innov] = link.clone()

        return offspring

    # ------------------------------------------------------------------
    # Distance
    # ------------------------------------------------------------------

    def distance(self, other: 'Genome', config: 'Config') -> float:
        """
        Calculate genetic distance between this genome and another.

        Only enabled links take part in the calculation.
           distance = c_w * W̄ + (c_e * E / N) + (c_d * D / N)

        Where:
        - E = number of excess links (beyond the other genome's max innovation number)
        - D = number of disjoint links (within the other genome's innovation range)
        - N = number of enabled links in the larger genome (at least 1)
        - W̄ = average weight difference of matching links (0 if there are none)
        - c_w, c_e, c_d = coefficients (from configuration)

        Parameters:
            other:  the genome relative to which we are calculating the distance
            config: stores the distance coefficients

        Returns:
            the genetic distance between this genome and 'other'
        """
        links1 = {link.innovation: link for link in self.links.values()  if link.enabled}
        links2 = {link.innovation: link for link in other.links.values() if link.enabled}

        max_innov1 = max(links1, default=0)
        max_innov2 = max(links2, default=0)

        matching_innovs = links1.keys() & links2.keys()

        # Excess   links: beyond the other genome's max innovation number
        # Disjoint links: within the other genome's range but not matching
        num_excess   = 0
        num_disjoint = 0
        for innov in links1.keys() - matching_innovs:
            if innov > max_innov2:
                num_excess += 1
            else:
                num_disjoint += 1
        for innov in links2.keys() - matching_innovs:
            if innov > max_innov1:
                num_excess += 1
            else:
                num_disjoint += 1

        # Average link weight difference for matching links
        avg_weight_diff = 0.0
        if matching_innovs:
            weight_diff = sum(abs(links1[i].weight - links2[i].weight) for i in matching_innovs)
            avg_weight_diff = weight_diff / len(matching_innovs)

        N = max(1, len(links1), len(links2))
        distance = (config.distance_weight_coeff   * avg_weight_diff  +
                    config.distance_excess_coeff   * num_excess   / N +
                    config.distance_disjoint_coeff * num_disjoint / N)
        return distance

    def is_compatible_with(self, other: 'Genome', config: 'Config') -> bool:
        """
        Whether 'other' belongs with this genome during speciation.
        NOTE: compatibility holds when the distance is GREATER than the threshold.
        """
        return self.distance(other, config) > config.compatibility_threshold

    def __str__(self):
        neurons_str  = ''.join(f"[{neuron.label}]" for neuron in self.input_neurons)
        neurons_str += ''.join(f"[{neuron.label}]" for neuron in self.hidden_neurons)
        neurons_str += ''.join(f"[{neuron.label}]" for neuron in self.output_neurons)
        links_str    = ''.join(str(link) for link in self.links.values())
        return f"Genome {self.genome_id} | Species {self.species_id}\nNeurons: {neurons_str}\nLinks: {links_str}"

    def __repr__(self):
        return f"Genome(genome_id={self.genome_id}, species_id={self.species_id}, neurons={len(self.neurons)}, links={len(self.links)})"
