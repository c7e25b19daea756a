"""
Neuron Module

This module implements the Neuron class and the NeuronKind enumeration
used to describe the nodes of a learner-built circuit.

Classes:
    NeuronKind: Enumeration of the functional neuron classes (SENSORY, INTERNEURON, COMMAND, MOTOR)
    Neuron:     An identified neuron of a given kind
"""

from dataclasses import dataclass
from enum        import Enum

class NeuronKind(Enum):
    """
    Neurons come in four kinds, following the OpenWorm classification
    used by the teaching tool: sensory, interneuron, command, motor.
    """
    SENSORY     = "sensory"
    INTERNEURON = "interneuron"
    COMMAND     = "command"
    MOTOR       = "motor"

    @classmethod
    def parse(cls, value: 'str | NeuronKind') -> 'NeuronKind':
        """
        Convert a (case-insensitive) name into a NeuronKind.

        Parameters:
            value: A NeuronKind, or one of "sensory", "interneuron", "command", "motor"

        Returns:
            The matching NeuronKind
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown neuron kind: {value!r}") from None

    @property
    def is_processing(self) -> bool:
        """
        Command neurons and interneurons sit between the sensory and motor layers.
        """
        return self in (NeuronKind.COMMAND, NeuronKind.INTERNEURON)

@dataclass(frozen=True)
class Neuron:
    """
    A neuron placed in a circuit.

    A neuron is identified by its id (e.g. "ALML", "AVAL", "DA1"); its kind
    decides which propagation and scoring rules apply to it and never changes
    once the neuron has been placed.

    Public Attributes:
        id:   Unique identifier of the neuron
        kind: Functional class of the neuron
    """
    id  : str
    kind: NeuronKind

    def __post_init__(self):
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"Neuron id must be a non-empty string, got {self.id!r}")
        object.__setattr__(self, 'kind', NeuronKind.parse(self.kind))

    @classmethod
    def from_palette(cls, neuron_id: str) -> 'Neuron':
        """
        Create a neuron whose kind is taken from the reference neuron palette.

        Parameters:
            neuron_id: Id of a neuron listed in the reference palette

        Returns:
            The neuron, with its reference kind
        """
        # Import here to avoid circular import
        from wormevo.circuit.connectome import REFERENCE_CONNECTOME
        return cls(neuron_id, REFERENCE_CONNECTOME.kind_of(neuron_id))

    def __str__(self):
        return f"{self.id}({self.kind.value})"
