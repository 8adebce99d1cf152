"""
NEAT Innovation Ledger Module

This module implements the InnovationLedger class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    SplitInnovation: The IDs produced by splitting a link
    InnovationLedger: Tracker for innovation numbers, neuron, species and genome IDs
"""

from itertools import count
from typing    import Iterable, NamedTuple

from neatcore.genotype.neuron import Neuron

class SplitInnovation(NamedTuple):
    first_link : int   # innovation number of the link: original 'from' -> new neuron
    second_link: int   # innovation number of the link: new neuron -> original 'to'
    neuron     : int   # ID of the new hidden neuron

class InnovationLedger:
    """
    Tracks structural changes across all genomes of a population.
    Ensures the same structural change gets the same innovation
    number (for links) and ID (for neurons), wherever it occurs.

    Structural events are keyed by the identity of the neurons involved
    (type, ID and payload), not by the identity of the Python objects.

    Public Properties:
        gene_pool_size: Number of link innovations allocated so far

    Public Methods:
        new_link_innovation(from_neuron, to_neuron): Innovation number for a link
        split_innovation(from_neuron, to_neuron):    IDs for splitting a link
        next_neuron_id():                            Allocate a hidden neuron ID
        next_species_id():                           Allocate a species ID
        next_genome_id():                            Allocate a genome ID
        reserve_neuron_ids(neurons):                 Skip hidden IDs already in use
    """

    def __init__(self, first_neuron_id: int = 1):
        """
        Parameters:
            first_neuron_id: the first ID handed out to hidden neurons
        """
        self._next_innovation_number = count(1)
        self._next_species_id        = count(1)
        self._next_genome_id         = count(1)
        self._next_neuron_id: int    = first_neuron_id

        # For each link ever created, map its endpoints to its innovation number
        self._innovation_numbers: dict[tuple[Neuron, Neuron], int] = {}

        # When a link is split, tracks what neuron was created and
        # what innovation numbers were assigned to the new links.
        self._split_IDs: dict[tuple[Neuron, Neuron], SplitInnovation] = {}

    @property
    def gene_pool_size(self) -> int:
        return len(self._innovation_numbers)

    def new_link_innovation(self, from_neuron: Neuron, to_neuron: Neuron) -> int:
        """
        Get the innovation number for a link, identified by its endpoints.
        Returns the existing innovation number if this link was created
        before (anywhere), otherwise assigns a new innovation number.

        Parameters:
            from_neuron: the neuron at the 'from' end of the link
            to_neuron:   the neuron at the 'to'   end of the link

        Returns:
            link ID (a.k.a. innovation number)
        """
        key = (from_neuron, to_neuron)

        # This is a new link
        if key not in self._innovation_numbers:
            self._innovation_numbers[key] = next(self._next_innovation_number)

        return self._innovation_numbers[key]

    def split_innovation(self, from_neuron: Neuron, to_neuron: Neuron) -> SplitInnovation:
        """
        Get the neuron ID and innovation numbers for splitting the link
        between two neurons. If this link has been split before, returns
        the same values, otherwise creates new ones.

        Parameters:
            from_neuron: the neuron at the 'from' end of the link being split
            to_neuron:   the neuron at the 'to'   end of the link being split

        Returns:
            (first_link, second_link, neuron)
            first_link  is for the link from 'from_neuron' to the new neuron
            second_link is for the link from the new neuron to 'to_neuron'
        """
        key = (from_neuron, to_neuron)

        # This link hasn't been split before
        if key not in self._split_IDs:
            new_neuron = Neuron.hidden(self.next_neuron_id())
            first_link  = self.new_link_innovation(from_neuron, new_neuron)
            second_link = self.new_link_innovation(new_neuron, to_neuron)
            self._split_IDs[key] = SplitInnovation(first_link, second_link, new_neuron.id)

        return self._split_IDs[key]

    def next_neuron_id(self) -> int:
        neuron_id = self._next_neuron_id
        self._next_neuron_id += 1
        return neuron_id

    def next_species_id(self) -> int:
        return next(self._next_species_id)

    def next_genome_id(self) -> int:
        return next(self._next_genome_id)

    def reserve_neuron_ids(self, neurons: Iterable[Neuron]) -> None:
        """
        Make sure hidden neuron IDs allocated from now on do not
        collide with the IDs of the given (externally created) neurons.
        """
        highest = max((neuron.id for neuron in neurons), default=None)
        if highest is not None and highest >= self._next_neuron_id:
            self._next_neuron_id = highest + 1
