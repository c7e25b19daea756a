"""
Circuit Module

This module implements the Circuit class, the learner-built graph of neurons
and connections that the simulator and the validator consume.

Classes:
    Circuit: A set of neurons plus the weighted connections between them
"""

import copy
from typing import Iterable

from wormevo.circuit.connection import Connection, SynapseKind, WeightScale
from wormevo.circuit.neuron     import Neuron, NeuronKind

class Circuit:
    """
    A neural circuit: a set of neurons plus a set of directed connections.

    Neurons are keyed by id, connections by their (source, target) pair; writing
    a connection for an existing pair replaces the previous one. Iteration order
    is insertion order, which keeps simulations reproducible.

    Circuits come from two places. Built through the API ('add_neuron', 'connect'),
    every connection is guaranteed to join placed neurons. Loaded from an external
    snapshot (constructor or 'from_dict'), the circuit is kept exactly as given,
    including connections whose endpoints were never placed. Such dangling
    connections are listed by 'dangling_connections' and skipped by the simulator
    and the validator.

    Public Properties:
        neurons:              Tuple of all neurons, in placement order
        connections:          Tuple of all connections, dangling ones included
        valid_connections:    Connections whose endpoints are both placed
        dangling_connections: Connections referencing a missing neuron
        neuron_ids:           Frozen set of the placed neuron ids
        weight_scale:         Declared scale of the connection weights
        uses_synapse_counts:  Whether the weights are read as synapse counts

    Public Methods:
        add_neuron(neuron):                     Place a neuron
        remove_neuron(neuron_id):               Remove a neuron and its connections
        connect(source, target, weight, kind):  Add (or replace) a connection
        disconnect(source, target):             Remove a connection
        without_neuron(neuron_id):              Ablated copy of the circuit
        neurons_of_kind(kind):                  Placed neurons of a given kind
        to_dict():                              Snapshot in collaborator format

    Class Methods:
        from_dict(snapshot): Create a circuit from a collaborator snapshot
    """

    def __init__(self,
                 neurons     : Iterable[Neuron]     = (),
                 connections : Iterable[Connection] = (),
                 weight_scale: WeightScale | str    = WeightScale.AUTO):
        """
        Initialize a circuit from a snapshot of neurons and connections.

        Parameters:
            neurons:      The placed neurons
            connections:  The connections; duplicates of a (source, target) pair
                          are resolved in favour of the last one
            weight_scale: Scale of all connection weights; inferred from the weights when AUTO
        """
        self._neurons     : dict[str, Neuron]                 = {}  # neuron id => neuron
        self._connections : dict[tuple[str, str], Connection] = {}  # (source, target) => connection
        self._weight_scale: WeightScale                       = WeightScale.parse(weight_scale)

        for neuron in neurons:
            self.add_neuron(neuron)
        for connection in connections:
            self._connections[connection.key] = connection

    @classmethod
    def from_dict(cls, snapshot: dict) -> 'Circuit':
        """
        Create a Circuit from a collaborator snapshot.

        Dictionary format:
            {
                "neurons": [
                    {"id": "ASEL", "kind": "sensory"},
                    {"id": "AIYL", "kind": "interneuron"}
                ],
                "connections": [
                    {"from": "ASEL", "to": "AIYL", "weight": 0.8, "synapseKind": "chemical"}
                ]
            }

        "type" is accepted in place of "kind", and "source"/"target" in place of
        "from"/"to". "synapseKind" defaults to chemical. An optional top-level
        "weightScale" ("normalized" or "synapse_count") declares the scale of
        the weights; without it the scale is inferred.

        Parameters:
            snapshot: Dictionary describing the circuit

        Returns:
            The circuit, dangling connections included
        """
        neurons = [Neuron(n['id'], n.get('kind', n.get('type')))
                   for n in snapshot.get('neurons', [])]

        connections = []
        for c in snapshot.get('connections', []):
            kind = c.get('synapseKind', c.get('synapse_kind', SynapseKind.CHEMICAL))
            connections.append(Connection(c.get('from', c.get('source')),
                                          c.get('to',   c.get('target')),
                                          c['weight'],
                                          kind))
        return cls(neurons, connections, snapshot.get('weightScale', WeightScale.AUTO))

    def to_dict(self) -> dict:
        """
        Convert the circuit to the collaborator snapshot format read by 'from_dict'.
        """
        snapshot = {
            'neurons'    : [{'id': n.id, 'kind': n.kind.value} for n in self._neurons.values()],
            'connections': [{'from'       : c.source,
                             'to'         : c.target,
                             'weight'     : c.weight,
                             'synapseKind': c.synapse_kind.value} for c in self._connections.values()],
        }
        if self._weight_scale is not WeightScale.AUTO:
            snapshot['weightScale'] = self._weight_scale.value
        return snapshot

    @property
    def neurons(self) -> tuple[Neuron, ...]:
        return tuple(self._neurons.values())

    @property
    def connections(self) -> tuple[Connection, ...]:
        return tuple(self._connections.values())

    @property
    def neuron_ids(self) -> frozenset[str]:
        return frozenset(self._neurons)

    @property
    def valid_connections(self) -> tuple[Connection, ...]:
        return tuple(c for c in self._connections.values()
                     if c.source in self._neurons and c.target in self._neurons)

    @property
    def dangling_connections(self) -> tuple[Connection, ...]:
        return tuple(c for c in self._connections.values()
                     if c.source not in self._neurons or c.target not in self._neurons)

    @property
    def weight_scale(self) -> WeightScale:
        return self._weight_scale

    @property
    def uses_synapse_counts(self) -> bool:
        """
        Whether the connection weights are synapse counts rather than normalized weights.

        A declared scale is used as is. With WeightScale.AUTO the weights are read
        as synapse counts when any valid connection is stronger than 1, or when
        every non-zero weight is a whole number (so a lone weight of 1 is one
        synapse, not full strength). Mixed fractional weights are normalized.
        """
        if self._weight_scale is not WeightScale.AUTO:
            return self._weight_scale is WeightScale.SYNAPSE_COUNT

        weights = [abs(c.weight) for c in self.valid_connections if c.weight != 0]
        if any(w > 1.0 for w in weights):
            return True
        return bool(weights) and all(w.is_integer() for w in weights)

    def neuron(self, neuron_id: str) -> Neuron:
        """
        Return the placed neuron with the given id (KeyError if absent).
        """
        return self._neurons[neuron_id]

    def has_neuron(self, neuron_id: str) -> bool:
        return neuron_id in self._neurons

    def has_connection(self, source: str, target: str) -> bool:
        return (source, target) in self._connections

    def neurons_of_kind(self, kind: NeuronKind) -> list[Neuron]:
        """
        Return the placed neurons of a given kind, in placement order.
        """
        kind = NeuronKind.parse(kind)
        return [n for n in self._neurons.values() if n.kind is kind]

    def add_neuron(self, neuron: Neuron) -> None:
        """
        Place a neuron in the circuit.

        Placing the same neuron twice is a no-op; placing a neuron whose id is
        already used by a neuron of a different kind is an error, since the
        kind of a placed neuron never changes.

        Parameters:
            neuron: The neuron to place
        """
        existing = self._neurons.get(neuron.id)
        if existing is not None and existing.kind is not neuron.kind:
            raise ValueError(f"Neuron {neuron.id} is already placed as {existing.kind.value}, "
                             f"cannot place it again as {neuron.kind.value}")
        self._neurons[neuron.id] = neuron

    def remove_neuron(self, neuron_id: str) -> None:
        """
        Remove a neuron together with every connection touching it.

        Parameters:
            neuron_id: Id of the neuron to remove
        """
        if neuron_id not in self._neurons:
            raise KeyError(f"Neuron {neuron_id} is not part of the circuit")
        del self._neurons[neuron_id]
        self._connections = {key: conn for key, conn in self._connections.items()
                             if neuron_id not in key}

    def connect(self,
                source      : str,
                target      : str,
                weight      : float,
                synapse_kind: SynapseKind = SynapseKind.CHEMICAL) -> Connection:
        """
        Add a connection between two placed neurons, replacing any existing
        connection between the same pair.

        Parameters:
            source:       Id of the presynaptic neuron
            target:       Id of the postsynaptic neuron
            weight:       Synaptic weight
            synapse_kind: Chemical or electrical

        Returns:
            The new connection
        """
        if source not in self._neurons:
            raise KeyError(f"Connection references non-existent source neuron: {source}")
        if target not in self._neurons:
            raise KeyError(f"Connection references non-existent target neuron: {target}")

        connection = Connection(source, target, weight, synapse_kind)
        self._connections[connection.key] = connection
        return connection

    def disconnect(self, source: str, target: str) -> None:
        if (source, target) not in self._connections:
            raise KeyError(f"Connection {source} → {target} does not exist in the circuit")
        del self._connections[(source, target)]

    def copy(self) -> 'Circuit':
        return copy.deepcopy(self)

    def without_neuron(self, neuron_id: str) -> 'Circuit':
        """
        Return an ablated copy of the circuit, lacking the given neuron and its connections.
        The current circuit is not modified.
        """
        ablated = self.copy()
        ablated.remove_neuron(neuron_id)
        return ablated

    def __len__(self):
        return len(self._neurons)

    def __contains__(self, neuron_id):
        return neuron_id in self._neurons

    def __repr__(self):
        return f"Circuit(neurons={len(self._neurons)}, connections={len(self._connections)})"

    def __str__(self):
        lines  = [', '.join(str(n) for n in self._neurons.values())]
        lines += [f"  {c} ({c.weight:+.2f}, {c.synapse_kind.value})" for c in self._connections.values()]
        return '\n'.join(lines)
