"""
NEAT Neuron Module.

This module implements the Neuron class and NeuronType enumeration
for the NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    NeuronType:    Enumeration for neuron types (INPUT, HIDDEN, OUTPUT)
    HiddenPayload: Constant payload carried by hidden neurons
    Neuron:        Immutable descriptor of a single network node
"""

from enum   import Enum
from typing import Any

class NeuronType(Enum):
    """
    Neurons come in three types: input, hidden, output.
    """
    INPUT  = "in"
    HIDDEN = "hidden"
    OUTPUT = "out"

class HiddenPayload:
    """
    The payload of a hidden neuron.

    Hidden neurons have no meaningful payload: any two hidden payloads compare
    equal, so hidden neuron identity reduces to the neuron ID. The string form
    is the neuron ID.
    """

    def __init__(self, neuron_id: int):
        self._neuron_id = neuron_id

    def __eq__(self, other):
        return isinstance(other, HiddenPayload)

    def __hash__(self):
        return hash(HiddenPayload)

    def __str__(self):
        return str(self._neuron_id)

    def __repr__(self):
        return f"HiddenPayload({self._neuron_id})"

class Neuron:
    """
    A node descriptor in a Neural Network.

    A neuron is identified by its type, its ID and its payload. The payload is
    any object supporting equality ('==') and a stable string form ('str()');
    for input and output neurons it names what the neuron reads or produces
    (a board cell, a sensor, an action...), for hidden neurons it is a
    constant 'HiddenPayload'.

    Neurons are immutable: the same Neuron object is shared by every genome
    that contains it. Cloning or crossing over genomes never duplicates neuron
    identity.

    Public Attributes:
        type:    Type of neuron (INPUT, HIDDEN, or OUTPUT)
        id:      Innovation ID of the neuron
        payload: The value carried by the neuron

    Public Properties:
        label: Human readable label ('[INPUT] x', '[OUTPUT] y', '[HIDDEN] #7')
    """

    __slots__ = ('type', 'id', 'payload')

    def __init__(self, neuron_type: NeuronType, neuron_id: int, payload: Any):
        """
        Parameters:
            neuron_type: Type of neuron (INPUT, HIDDEN, or OUTPUT)
            neuron_id:   Innovation ID of the neuron
            payload:     Value carried by the neuron (equality + string form)
        """
        object.__setattr__(self, 'type'   , neuron_type)
        object.__setattr__(self, 'id'     , neuron_id)
        object.__setattr__(self, 'payload', payload)

    @classmethod
    def hidden(cls, neuron_id: int) -> 'Neuron':
        """
        Create a hidden neuron with the given ID and a constant payload.
        """
        return cls(NeuronType.HIDDEN, neuron_id, HiddenPayload(neuron_id))

    @property
    def label(self) -> str:
        if self.type == NeuronType.INPUT:
            return f"[INPUT] {self.payload}"
        elif self.type == NeuronType.OUTPUT:
            return f"[OUTPUT] {self.payload}"
        else:
            return f"[HIDDEN] #{self.id}"

    def __setattr__(self, name, value):
        raise AttributeError(f"Neuron is immutable, cannot set '{name}'")

    def __reduce__(self):
        return (Neuron, (self.type, self.id, self.payload))

    def __eq__(self, other):
        if not isinstance(other, Neuron):
            return NotImplemented
        return (self.type    == other.type and
                self.id      == other.id   and
                self.payload == other.payload)

    def __hash__(self):
        return hash((self.type, self.id, str(self.payload)))

    def __repr__(self):
        return f"Neuron(neuron_type=NeuronType.{self.type.name}, neuron_id={self.id}, payload={self.payload!r})"

    def __str__(self):
        return self.label
