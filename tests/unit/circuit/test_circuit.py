"""
Unit tests for wormevo.circuit.circuit module.
"""

import pytest

from wormevo.circuit import Circuit, Connection, Neuron, NeuronKind, SynapseKind, WeightScale


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def snapshot():
    """A collaborator snapshot with one dangling connection."""
    return {
        "neurons": [
            {"id": "ALML", "kind": "sensory"},
            {"id": "AVAL", "type": "Command"},
            {"id": "DA1",  "kind": "motor"},
        ],
        "connections": [
            {"from": "ALML", "to": "AVAL", "weight": 8},
            {"source": "AVAL", "target": "DA1", "weight": 12, "synapseKind": "electrical"},
            {"from": "AVAL", "to": "VA1", "weight": 10},
        ],
    }


# ============================================================================
# Test Circuit Construction
# ============================================================================

class TestCircuitInit:
    """Test Circuit construction from snapshots."""

    def test_empty_circuit(self):
        circuit = Circuit()
        assert len(circuit) == 0
        assert circuit.connections == ()
        assert circuit.neuron_ids == frozenset()

    def test_from_dict_reads_aliases(self, snapshot):
        circuit = Circuit.from_dict(snapshot)

        assert circuit.neuron("AVAL").kind is NeuronKind.COMMAND
        conn = [c for c in circuit.connections if c.key == ("AVAL", "DA1")][0]
        assert conn.synapse_kind is SynapseKind.ELECTRICAL
        assert conn.weight == 12

    def test_dangling_connections_are_kept_but_separated(self, snapshot):
        circuit = Circuit.from_dict(snapshot)

        assert len(circuit.connections) == 3
        assert [c.key for c in circuit.valid_connections] == [("ALML", "AVAL"), ("AVAL", "DA1")]
        assert [c.key for c in circuit.dangling_connections] == [("AVAL", "VA1")]

    def test_duplicate_pairs_last_write_wins(self):
        circuit = Circuit([Neuron("A", "sensory"), Neuron("B", "motor")],
                          [Connection("A", "B", 0.2), Connection("A", "B", 0.9)])
        assert len(circuit.connections) == 1
        assert circuit.connections[0].weight == 0.9

    def test_to_dict_round_trip(self, snapshot):
        circuit = Circuit.from_dict(snapshot)
        again   = Circuit.from_dict(circuit.to_dict())

        assert again.neurons == circuit.neurons
        assert again.connections == circuit.connections

    def test_to_dict_format(self):
        circuit = Circuit([Neuron("A", "sensory")])
        assert circuit.to_dict() == {"neurons": [{"id": "A", "kind": "sensory"}], "connections": []}


# ============================================================================
# Test Circuit Editing
# ============================================================================

class TestCircuitEditing:
    """Test the mutating API."""

    def test_add_neuron_twice_is_noop(self):
        circuit = Circuit()
        circuit.add_neuron(Neuron("A", "sensory"))
        circuit.add_neuron(Neuron("A", "sensory"))
        assert len(circuit) == 1

    def test_add_neuron_with_other_kind_raises(self):
        circuit = Circuit([Neuron("A", "sensory")])
        with pytest.raises(ValueError, match="already placed"):
            circuit.add_neuron(Neuron("A", "motor"))

    def test_connect_requires_placed_endpoints(self):
        circuit = Circuit([Neuron("A", "sensory")])
        with pytest.raises(KeyError):
            circuit.connect("A", "B", 0.5)
        with pytest.raises(KeyError):
            circuit.connect("B", "A", 0.5)

    def test_connect_replaces_existing_edge(self):
        circuit = Circuit([Neuron("A", "sensory"), Neuron("B", "motor")])
        circuit.connect("A", "B", 0.3)
        circuit.connect("A", "B", 0.7, SynapseKind.ELECTRICAL)

        assert len(circuit.connections) == 1
        assert circuit.connections[0].weight == 0.7
        assert circuit.connections[0].synapse_kind is SynapseKind.ELECTRICAL

    def test_disconnect(self):
        circuit = Circuit([Neuron("A", "sensory"), Neuron("B", "motor")])
        circuit.connect("A", "B", 0.3)
        circuit.disconnect("A", "B")
        assert not circuit.has_connection("A", "B")

    def test_disconnect_missing_raises(self):
        with pytest.raises(KeyError):
            Circuit().disconnect("A", "B")

    def test_remove_neuron_drops_its_connections(self):
        circuit = Circuit([Neuron("A", "sensory"), Neuron("B", "interneuron"), Neuron("C", "motor")])
        circuit.connect("A", "B", 0.5)
        circuit.connect("B", "C", 0.5)
        circuit.connect("A", "C", 0.5)

        circuit.remove_neuron("B")

        assert "B" not in circuit
        assert [c.key for c in circuit.connections] == [("A", "C")]

    def test_remove_missing_neuron_raises(self):
        with pytest.raises(KeyError):
            Circuit().remove_neuron("A")

    def test_without_neuron_leaves_original_untouched(self, head_wiggle_circuit):
        ablated = head_wiggle_circuit.without_neuron("AIYL")

        assert "AIYL" in head_wiggle_circuit
        assert len(head_wiggle_circuit.connections) == 2
        assert "AIYL" not in ablated
        assert ablated.connections == ()

    def test_copy_is_independent(self, head_wiggle_circuit):
        clone = head_wiggle_circuit.copy()
        clone.disconnect("ASEL", "AIYL")
        assert head_wiggle_circuit.has_connection("ASEL", "AIYL")


# ============================================================================
# Test Circuit Queries
# ============================================================================

class TestCircuitQueries:
    """Test read-only queries."""

    def test_neurons_of_kind_keeps_placement_order(self):
        circuit = Circuit([Neuron("B", "motor"), Neuron("S", "sensory"), Neuron("A", "motor")])
        assert [n.id for n in circuit.neurons_of_kind(NeuronKind.MOTOR)] == ["B", "A"]
        assert [n.id for n in circuit.neurons_of_kind("sensory")] == ["S"]

    def test_neuron_lookup(self, head_wiggle_circuit):
        assert head_wiggle_circuit.neuron("SMBD").kind is NeuronKind.MOTOR
        with pytest.raises(KeyError):
            head_wiggle_circuit.neuron("DA1")

    def test_membership_and_length(self, head_wiggle_circuit):
        assert len(head_wiggle_circuit) == 3
        assert "ASEL" in head_wiggle_circuit
        assert head_wiggle_circuit.has_neuron("AIYL")
        assert not head_wiggle_circuit.has_neuron("AVAL")

    def test_repr(self, head_wiggle_circuit):
        assert repr(head_wiggle_circuit) == "Circuit(neurons=3, connections=2)"


# ============================================================================
# Test Weight Scale
# ============================================================================

def pair(*weights):
    """Circuit S -> M1, S -> M2, ... with the given weights."""
    motors = [Neuron(f"M{i}", "motor") for i in range(len(weights))]
    return Circuit([Neuron("S", "sensory")] + motors,
                   [Connection("S", m.id, w) for m, w in zip(motors, weights)])


class TestWeightScale:
    """Test how a circuit decides the scale of its weights."""

    @pytest.mark.parametrize("weights", [(1,), (1, 2), (3, 4), (0.8, 5), (0, 1)])
    def test_auto_reads_counts(self, weights):
        assert pair(*weights).uses_synapse_counts

    @pytest.mark.parametrize("weights", [(0.8,), (0.8, 1.0), (-0.9, 0.3), (0, 0.5)])
    def test_auto_reads_normalized(self, weights):
        assert not pair(*weights).uses_synapse_counts

    def test_auto_ignores_dangling_connections(self):
        circuit = Circuit([Neuron("S", "sensory"), Neuron("M", "motor")],
                          [Connection("S", "M", 0.9), Connection("S", "X", 8)])
        assert not circuit.uses_synapse_counts

    def test_declared_scale_overrides_inference(self):
        circuit = Circuit([Neuron("S", "sensory"), Neuron("M", "motor")],
                          [Connection("S", "M", 1)], WeightScale.NORMALIZED)
        assert not circuit.uses_synapse_counts

        circuit = Circuit([Neuron("S", "sensory"), Neuron("M", "motor")],
                          [Connection("S", "M", 0.8)], "synapse-count")
        assert circuit.weight_scale is WeightScale.SYNAPSE_COUNT
        assert circuit.uses_synapse_counts

    def test_unknown_scale_raises(self):
        with pytest.raises(ValueError):
            Circuit(weight_scale="grams")

    def test_snapshot_carries_declared_scale(self):
        circuit = Circuit([Neuron("S", "sensory")], weight_scale=WeightScale.NORMALIZED)
        data    = circuit.to_dict()
        assert data["weightScale"] == "normalized"
        assert Circuit.from_dict(data).weight_scale is WeightScale.NORMALIZED
        assert "weightScale" not in Circuit().to_dict()

    def test_scale_survives_ablation(self):
        circuit = Circuit([Neuron("S", "sensory"), Neuron("M", "motor")],
                          [Connection("S", "M", 1)], WeightScale.NORMALIZED)
        assert circuit.without_neuron("M").weight_scale is WeightScale.NORMALIZED
