"""
Circuit Package

This package implements the graph model shared by the simulator, the validator
and the surrounding application: neurons, connections, learner-built circuits,
and the fixed reference connectome they are compared against.

Modules:
    neuron:     NeuronKind enumeration and Neuron class
    connection: SynapseKind and WeightScale enumerations, Connection class
    circuit:    Circuit class
    behavior:   BehaviorLabel enumeration and motor-neuron groups
    connectome: Reference palette, connections and pathways

Exported Classes:
    NeuronKind:          Enumeration of neuron kinds (SENSORY, INTERNEURON, COMMAND, MOTOR)
    Neuron:              A placed neuron
    SynapseKind:         Enumeration of synapse kinds (CHEMICAL, ELECTRICAL)
    WeightScale:         Enumeration of weight scales (AUTO, NORMALIZED, SYNAPSE_COUNT)
    Connection:          A weighted, directed connection
    Circuit:             A learner-built graph of neurons and connections
    BehaviorLabel:       Behaviors a circuit can produce
    MotorGroup:          Motor-neuron groups driving the behaviors
    Pathway:             A named sensory -> command -> motor grouping
    ReferenceConnectome: Immutable ground-truth table

Exported Data:
    REFERENCE_CONNECTOME: The process-wide reference connectome
"""

from wormevo.circuit.behavior   import BehaviorLabel, MotorGroup, motor_group
from wormevo.circuit.circuit    import Circuit
from wormevo.circuit.connection import Connection, SynapseKind, WeightScale
from wormevo.circuit.connectome import Pathway, PaletteEntry, ReferenceConnectome, REFERENCE_CONNECTOME
from wormevo.circuit.neuron     import Neuron, NeuronKind

__all__ = ['BehaviorLabel',
           'Circuit',
           'Connection',
           'MotorGroup',
           'motor_group',
           'Neuron',
           'NeuronKind',
           'PaletteEntry',
           'Pathway',
           'ReferenceConnectome',
           'REFERENCE_CONNECTOME',
           'SynapseKind',
           'WeightScale']
