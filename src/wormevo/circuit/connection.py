"""
Connection Module

This module implements the Connection class and the SynapseKind and
WeightScale enumerations.

Classes:
    SynapseKind: Enumeration of synapse types (CHEMICAL, ELECTRICAL)
    WeightScale: Enumeration of the scales connection weights are expressed on
    Connection:  A weighted, directed link between two neurons
"""

import math
import numpy as np
from dataclasses import dataclass
from enum        import Enum

# Largest synapse count accepted as a weight. The reference
# connectome expresses chemical links as counts between 1 and 15.
MAX_SYNAPSE_COUNT = 15.0

class SynapseKind(Enum):
    """
    Chemical synapses and electrical synapses (gap junctions).
    """
    CHEMICAL   = "chemical"
    ELECTRICAL = "electrical"

    @classmethod
    def parse(cls, value: 'str | SynapseKind') -> 'SynapseKind':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown synapse kind: {value!r}") from None

class WeightScale(Enum):
    """
    The scale the weights of a circuit are expressed on. A circuit uses one
    scale for all its connections.

    AUTO lets the circuit infer the scale from its weights (see 'Circuit.uses_synapse_counts').
    """
    AUTO          = "auto"
    NORMALIZED    = "normalized"
    SYNAPSE_COUNT = "synapse_count"

    @classmethod
    def parse(cls, value: 'str | WeightScale') -> 'WeightScale':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower().replace('-', '_'))
        except ValueError:
            raise ValueError(f"Unknown weight scale: {value!r}") from None

@dataclass(frozen=True)
class Connection:
    """
    A directed, weighted connection from a source neuron to a target neuron.

    The weight may be given either on the normalized scale [-1, 1] or as a
    synapse count (the reference data uses counts 1..15). Weights are clamped
    into [-MAX_SYNAPSE_COUNT, MAX_SYNAPSE_COUNT] on creation; 'normalized_weight()'
    maps either scale onto [-1, 1] once the caller says which one applies.

    Two connections with the same (source, target) pair are the same logical
    edge; a circuit keeps only the last one written.

    Public Attributes:
        source:       Id of the presynaptic neuron
        target:       Id of the postsynaptic neuron
        weight:       Synaptic weight (normalized or synapse count)
        synapse_kind: Chemical or electrical

    Public Properties:
        key: The (source, target) pair identifying the edge
    """
    source      : str
    target      : str
    weight      : float
    synapse_kind: SynapseKind = SynapseKind.CHEMICAL

    def __post_init__(self):
        weight = float(self.weight)
        if math.isnan(weight):
            raise ValueError(f"Connection {self.source}->{self.target} has a NaN weight")
        weight = float(np.clip(weight, -MAX_SYNAPSE_COUNT, MAX_SYNAPSE_COUNT))
        object.__setattr__(self, 'weight', weight)
        object.__setattr__(self, 'synapse_kind', SynapseKind.parse(self.synapse_kind))

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.target)

    def normalized_weight(self, synapse_scale: float = 10.0, is_count: bool = True) -> float:
        """
        Return the weight on the normalized scale [-1, 1].

        The scale of a weight cannot be told from the weight alone (a weight
        of 1 is full strength when normalized but a single synapse when counted),
        so the caller states it; circuits decide it once for all their connections.

        Parameters:
            synapse_scale: Synapse count that maps onto a normalized weight of 1
            is_count:      True if the weight is a synapse count, False if it is already normalized

        Returns:
            The normalized weight, clamped to [-1, 1]
        """
        weight = self.weight / synapse_scale if is_count else self.weight
        return float(np.clip(weight, -1.0, 1.0))

    def __str__(self):
        return f"{self.source} → {self.target}"
