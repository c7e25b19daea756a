"""
Signal Propagation Simulator Module

This module implements a coarse, discrete-time model of how a stimulus spreads
through a learner-built circuit and which behavior it ends up producing.

The model:
    1. Sensory activation:
       each sensory neuron picks up the stimulus independently, with a
       probability equal to the stimulus strength.
    2. Propagation:
       at every step, each connection whose source is active and whose
       normalized weight magnitude reaches the activation threshold activates
       its target. Active neurons stay active for the rest of the run, so the
       active set only grows and the loop reaches a fixed point after at most
       one step per neuron, whatever cycles the circuit contains. The number
       of steps is additionally capped by 'max_steps'.
    3. Classification:
       the behavior is read off the motor groups that ended up active
       (A-type motor neurons: backward, B-type: forward, SMB/SMD/RMD: head).

Classes:
    SimulationResult:           Outcome of one simulation run
    SignalPropagationSimulator: The simulator
"""

import numpy as np
from dataclasses import dataclass, field

from wormevo.circuit             import BehaviorLabel, Circuit, MotorGroup, NeuronKind, motor_group
from wormevo.circuit.behavior    import GROUP_BEHAVIOR
from wormevo.rng                 import RandomSource, as_generator
from wormevo.run.config          import Config
from wormevo.simulation.stimulus import Stimulus, StimulusKind

@dataclass(frozen=True)
class SimulationResult:
    """
    Outcome of a simulation.

    Public Attributes:
        behavior:          Predicted behavior
        confidence:        Confidence of the prediction, in [0, 1]
        activated_neurons: Every neuron active at the end of the run
        signal_path:       Active neurons in the order they were activated
        steps:             Number of propagation steps that changed the active set
    """
    behavior         : BehaviorLabel
    confidence       : float
    activated_neurons: frozenset[str]
    signal_path      : list[str] = field(default_factory=list)
    steps            : int       = 0

    def to_dict(self) -> dict:
        return {'behavior'        : self.behavior.value,
                'confidence'      : self.confidence,
                'activatedNeurons': sorted(self.activated_neurons),
                'signalPath'      : list(self.signal_path)}

class SignalPropagationSimulator:
    """
    Predicts the behavior of a circuit under a stimulus by spreading activation.

    The simulator holds no state between runs; the only source of randomness
    is the sensory activation step, drawn from the random source passed to
    'simulate()'. Using the same seed therefore reproduces a run exactly.

    Public Methods:
        simulate(circuit, stimulus, rng): Run one simulation
    """

    def __init__(self, config: Config | None = None):
        """
        Parameters:
            config: Provides 'max_steps', 'activation_threshold' and 'synapse_scale'.
                    Defaults are used when None.
        """
        config = config if config is not None else Config()
        self.max_steps           : int   = config.max_steps
        self.activation_threshold: float = config.activation_threshold
        self.synapse_scale       : float = config.synapse_scale

    def simulate(self, circuit: Circuit, stimulus: Stimulus, rng: RandomSource = None) -> SimulationResult:
        """
        Simulate the response of a circuit to a stimulus.

        Parameters:
            circuit:  The circuit to simulate
            stimulus: The stimulus applied to it
            rng:      Random source for the sensory activation step

        Returns:
            The predicted behavior, its confidence and the activated neurons
        """
        rng     = as_generator(rng)
        sensory = circuit.neurons_of_kind(NeuronKind.SENSORY)
        motor   = circuit.neurons_of_kind(NeuronKind.MOTOR)

        # A circuit without sensory neurons cannot react to anything
        if not sensory:
            confidence = 1.0 if not motor else 0.0
            return SimulationResult(BehaviorLabel.RESTING, confidence, frozenset())

        # Step 1: sensory activation, one Bernoulli draw per sensory neuron
        signal_path: list[str] = []
        if stimulus.kind is not StimulusKind.NONE:
            for neuron in sensory:
                if rng.random() < stimulus.strength:
                    signal_path.append(neuron.id)
        active = set(signal_path)

        # Step 2: propagation. Only connections strong enough to pass the signal
        # on matter; connections with a missing endpoint are skipped.
        is_count = circuit.uses_synapse_counts
        outgoing: dict[str, list[str]] = {}
        for conn in circuit.valid_connections:
            if abs(conn.normalized_weight(self.synapse_scale, is_count)) >= self.activation_threshold:
                outgoing.setdefault(conn.source, []).append(conn.target)

        frontier = list(signal_path)
        steps    = 0
        while frontier and steps < self.max_steps:
            newly_active = []
            for source in frontier:
                for target in outgoing.get(source, ()):
                    if target not in active:
                        active.add(target)
                        newly_active.append(target)
            if not newly_active:
                break
            signal_path.extend(newly_active)
            frontier = newly_active
            steps   += 1

        # Step 3: classification
        behavior, confidence = self._classify(active, [n.id for n in motor])
        return SimulationResult(behavior, confidence, frozenset(active), signal_path, steps)

    @staticmethod
    def _classify(active: set[str], motor_ids: list[str]) -> tuple[BehaviorLabel, float]:
        """
        Turn the set of active neurons into a behavior and its confidence.

        The confidence is the fraction of the winning motor group (counting
        only the group members placed in the circuit) that fired. When nothing
        moves, it is the fraction of motor neurons that stayed silent.
        """
        placed: dict[MotorGroup, int] = {group: 0 for group in MotorGroup}
        fired : dict[MotorGroup, int] = {group: 0 for group in MotorGroup}
        for nid in motor_ids:
            group = motor_group(nid)
            if group is None:
                continue
            placed[group] += 1
            if nid in active:
                fired[group] += 1

        def fraction(group):
            return fired[group] / placed[group] if placed[group] else 0.0

        backward = fired[MotorGroup.BACKWARD] > 0
        forward  = fired[MotorGroup.FORWARD]  > 0
        head     = fired[MotorGroup.HEAD]     > 0

        if backward and not forward:
            behavior, confidence = GROUP_BEHAVIOR[MotorGroup.BACKWARD], fraction(MotorGroup.BACKWARD)
        elif forward and not backward:
            behavior, confidence = GROUP_BEHAVIOR[MotorGroup.FORWARD], fraction(MotorGroup.FORWARD)
        elif head:
            behavior, confidence = GROUP_BEHAVIOR[MotorGroup.HEAD], fraction(MotorGroup.HEAD)
        elif backward and forward:
            behavior   = BehaviorLabel.CURL
            confidence = (fraction(MotorGroup.BACKWARD) + fraction(MotorGroup.FORWARD)) / 2
        else:
            behavior = BehaviorLabel.RESTING
            if motor_ids:
                silent     = sum(1 for nid in motor_ids if nid not in active)
                confidence = silent / len(motor_ids)
            else:
                confidence = 1.0

        return behavior, float(np.clip(confidence, 0.0, 1.0))
