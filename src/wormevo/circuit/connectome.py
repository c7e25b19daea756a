"""
Reference Connectome Module

A small, fixed excerpt of the OpenWorm C. elegans connectome (after White et
al. 1986 and the c302 model) that learner circuits are scored against: a
palette of identified neurons, the ground-truth connections between them, and
a catalog of named sensory -> command -> motor pathways.

Classes:
    PaletteEntry:        An identified neuron of the reference palette
    Pathway:             A named, biologically motivated neuron grouping
    ReferenceConnectome: Immutable table of reference connections and pathways

Module Attributes:
    REFERENCE_CONNECTOME: The process-wide reference connectome
"""

from dataclasses import dataclass
from types       import MappingProxyType

from wormevo.circuit.behavior   import BehaviorLabel
from wormevo.circuit.circuit    import Circuit
from wormevo.circuit.connection import Connection, SynapseKind, WeightScale
from wormevo.circuit.neuron     import Neuron, NeuronKind

@dataclass(frozen=True)
class PaletteEntry:
    id         : str
    kind       : NeuronKind
    function   : str
    description: str

@dataclass(frozen=True)
class Pathway:
    """
    A named pathway: the sensory neurons that start it, the command (or
    integrating) neurons that relay it, the motor neurons that execute it,
    and the behavior it is expected to produce.
    """
    key              : str
    name             : str
    required_sensory : tuple[str, ...]
    command_neurons  : tuple[str, ...]
    motor_neurons    : tuple[str, ...]
    expected_behavior: BehaviorLabel
    description      : str

    @property
    def all_neurons(self) -> tuple[str, ...]:
        return self.required_sensory + self.command_neurons + self.motor_neurons

class ReferenceConnectome:
    """
    Immutable ground-truth table of connections and pathways.

    Connections are looked up by their (source, target) pair. Pathways are kept
    in their declared order, which is also the priority order used when a
    circuit realizes more than one of them.

    Public Properties:
        connections: Tuple of reference connections
        pathways:    Tuple of pathways, in priority order
        palette:     Read-only mapping from neuron id to PaletteEntry

    Public Methods:
        has_connection(source, target): Whether the edge is in the reference data
        weight(source, target):         Reference weight of an edge (0 if absent)
        connections_among(neuron_ids):  Reference edges whose endpoints are all given
        kind_of(neuron_id):             Reference kind of a palette neuron
        pathway(key):                   Look up a pathway by key
        build_pathway_circuit(key):     Circuit wiring a pathway as in the reference data
    """

    def __init__(self,
                 palette    : tuple[PaletteEntry, ...],
                 connections: tuple[Connection, ...],
                 pathways   : tuple[Pathway, ...]):
        self._palette     = MappingProxyType({entry.id: entry for entry in palette})
        self._connections = MappingProxyType({conn.key: conn for conn in connections})
        self._pathways    = tuple(pathways)

    @property
    def connections(self) -> tuple[Connection, ...]:
        return tuple(self._connections.values())

    @property
    def pathways(self) -> tuple[Pathway, ...]:
        return self._pathways

    @property
    def palette(self) -> MappingProxyType:
        return self._palette

    def has_connection(self, source: str, target: str) -> bool:
        return (source, target) in self._connections

    def weight(self, source: str, target: str) -> float:
        connection = self._connections.get((source, target))
        return connection.weight if connection is not None else 0.0

    def connections_among(self, neuron_ids) -> list[Connection]:
        """
        Return the reference connections whose source and target are both in 'neuron_ids'.
        """
        neuron_ids = set(neuron_ids)
        return [c for c in self._connections.values()
                if c.source in neuron_ids and c.target in neuron_ids]

    def kind_of(self, neuron_id: str) -> NeuronKind:
        if neuron_id not in self._palette:
            raise KeyError(f"Neuron {neuron_id} is not part of the reference palette")
        return self._palette[neuron_id].kind

    def pathway(self, key: str) -> Pathway:
        for pathway in self._pathways:
            if pathway.key == key:
                return pathway
        raise KeyError(f"Unknown pathway: {key}")

    def build_pathway_circuit(self, key: str) -> Circuit:
        """
        Build a circuit containing all neurons of a pathway, wired with every
        reference connection that runs between them.

        Parameters:
            key: Key of the pathway (e.g. "chemotaxis")

        Returns:
            The new circuit
        """
        pathway = self.pathway(key)
        neurons = [Neuron(nid, self.kind_of(nid)) for nid in dict.fromkeys(pathway.all_neurons)]
        return Circuit(neurons, self.connections_among(pathway.all_neurons), WeightScale.SYNAPSE_COUNT)

S  = NeuronKind.SENSORY
I  = NeuronKind.INTERNEURON
C  = NeuronKind.COMMAND
M  = NeuronKind.MOTOR

_PALETTE = (
    # Touch receptor neurons
    PaletteEntry("ALML", S, "touch_anterior",   "Left anterior touch receptor"),
    PaletteEntry("ALMR", S, "touch_anterior",   "Right anterior touch receptor"),
    PaletteEntry("AVM",  S, "touch_ventral",    "Ventral touch receptor"),
    PaletteEntry("PLML", S, "touch_posterior",  "Left posterior touch receptor"),
    PaletteEntry("PLMR", S, "touch_posterior",  "Right posterior touch receptor"),

    # Chemosensory neurons
    PaletteEntry("ASEL", S, "chemosensory",     "Left amphid sensory neuron (salt attraction)"),
    PaletteEntry("ASER", S, "chemosensory",     "Right amphid sensory neuron (salt avoidance)"),
    PaletteEntry("AWC",  S, "olfactory",        "Olfactory neuron for odor detection"),

    # Command interneurons
    PaletteEntry("AVAL", C, "backward_command", "Left backward command interneuron"),
    PaletteEntry("AVAR", C, "backward_command", "Right backward command interneuron"),
    PaletteEntry("AVBL", C, "forward_command",  "Left forward command interneuron"),
    PaletteEntry("AVBR", C, "forward_command",  "Right forward command interneuron"),
    PaletteEntry("AVDL", C, "backward_command", "Left reversal interneuron"),
    PaletteEntry("AVDR", C, "backward_command", "Right reversal interneuron"),

    # Processing interneurons
    PaletteEntry("AIYL", I, "integration",      "Left integration interneuron"),
    PaletteEntry("AIYR", I, "integration",      "Right integration interneuron"),
    PaletteEntry("AIZL", I, "processing",       "Left processing interneuron"),
    PaletteEntry("AIZR", I, "processing",       "Right processing interneuron"),
    PaletteEntry("RIM",  I, "locomotion",       "Ring motor interneuron"),

    # Motor neurons
    PaletteEntry("DA1",  M, "backward_motion",  "Dorsal A-type motor neuron 1 (backward)"),
    PaletteEntry("DA2",  M, "backward_motion",  "Dorsal A-type motor neuron 2 (backward)"),
    PaletteEntry("DB1",  M, "forward_motion",   "Dorsal B-type motor neuron 1 (forward)"),
    PaletteEntry("DB2",  M, "forward_motion",   "Dorsal B-type motor neuron 2 (forward)"),
    PaletteEntry("VA1",  M, "backward_motion",  "Ventral A-type motor neuron 1 (backward)"),
    PaletteEntry("VB1",  M, "forward_motion",   "Ventral B-type motor neuron 1 (forward)"),
    PaletteEntry("SMBD", M, "head_motion",      "Dorsal head motor neuron"),
    PaletteEntry("SMBV", M, "head_motion",      "Ventral head motor neuron"),
)

CHEM = SynapseKind.CHEMICAL
ELEC = SynapseKind.ELECTRICAL

# Weights are synapse counts
_CONNECTIONS = (
    # Touch reflex
    Connection("ALML", "AVAL",  8, CHEM),
    Connection("ALMR", "AVAR",  8, CHEM),
    Connection("ALML", "AVDL",  5, CHEM),
    Connection("ALMR", "AVDR",  5, CHEM),
    Connection("AVM",  "AVAL",  7, CHEM),
    Connection("AVM",  "AVAR",  7, CHEM),
    Connection("PLML", "AVBL",  6, CHEM),
    Connection("PLMR", "AVBR",  6, CHEM),

    # Command to motor
    Connection("AVAL", "DA1",  12, CHEM),
    Connection("AVAR", "DA1",  12, CHEM),
    Connection("AVAL", "VA1",  10, CHEM),
    Connection("AVAR", "VA1",  10, CHEM),
    Connection("AVBL", "DB1",  12, CHEM),
    Connection("AVBR", "VB1",  10, CHEM),

    # Chemosensation
    Connection("ASEL", "AIYL",  8, CHEM),
    Connection("ASER", "AIYR",  8, CHEM),
    Connection("AIYL", "AIZL",  6, CHEM),
    Connection("AIYR", "AIZR",  6, CHEM),
    Connection("AIZL", "SMBD",  5, CHEM),
    Connection("AIZR", "SMBV",  5, CHEM),

    # Cross connections
    Connection("AVDL", "DA1",   8, CHEM),
    Connection("AVDR", "DA2",   8, CHEM),
    Connection("RIM",  "AVAL",  4, ELEC),
    Connection("RIM",  "AVAR",  4, ELEC),
)

# Declared order is detection priority: the first matching pathway wins
_PATHWAYS = (
    Pathway(key               = "touch_reflex_head",
            name              = "Anterior Touch Reflex",
            required_sensory  = ("ALML", "ALMR", "AVM"),
            command_neurons   = ("AVAL", "AVAR", "AVDL", "AVDR"),
            motor_neurons     = ("DA1", "DA2", "VA1"),
            expected_behavior = BehaviorLabel.MOVE_BACKWARD,
            description       = "Touch to the head triggers backward movement via ALM/AVM sensory neurons"),
    Pathway(key               = "touch_reflex_tail",
            name              = "Posterior Touch Reflex",
            required_sensory  = ("PLML", "PLMR"),
            command_neurons   = ("AVBL", "AVBR"),
            motor_neurons     = ("DB1", "VB1"),
            expected_behavior = BehaviorLabel.MOVE_FORWARD,
            description       = "Touch to the tail triggers forward movement via PLM sensory neurons"),
    Pathway(key               = "chemotaxis",
            name              = "Chemotaxis Pathway",
            required_sensory  = ("ASEL", "ASER", "AWC"),
            command_neurons   = ("AIYL", "AIYR", "AIZL", "AIZR"),
            motor_neurons     = ("SMBD", "SMBV"),
            expected_behavior = BehaviorLabel.HEAD_WIGGLE,
            description       = "Chemical detection guides movement toward food sources"),
    Pathway(key               = "locomotion_forward",
            name              = "Forward Locomotion",
            required_sensory  = (),
            command_neurons   = ("AVBL", "AVBR"),
            motor_neurons     = ("DB1", "DB2", "VB1"),
            expected_behavior = BehaviorLabel.MOVE_FORWARD,
            description       = "Coordinated forward movement via B-type motor neurons"),
    Pathway(key               = "locomotion_backward",
            name              = "Backward Locomotion",
            required_sensory  = (),
            command_neurons   = ("AVAL", "AVAR"),
            motor_neurons     = ("DA1", "DA2", "VA1"),
            expected_behavior = BehaviorLabel.MOVE_BACKWARD,
            description       = "Coordinated backward movement via A-type motor neurons"),
)

REFERENCE_CONNECTOME = ReferenceConnectome(_PALETTE, _CONNECTIONS, _PATHWAYS)
