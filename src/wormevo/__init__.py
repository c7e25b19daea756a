"""
wormevo - a small neural-circuit engine for C. elegans teaching tools.

This package provides the computational core behind an interactive lesson on
the nematode's nervous system: a graph model of neurons and synapses with the
OpenWorm-derived reference connectome, a discrete signal-propagation simulator
that predicts the resulting behavior, a validator that grades learner circuits
against the reference, and an externally stepped genetic algorithm that
evolves synaptic weight vectors towards a target behavior.

Main components:
- circuit: Neurons, connections, circuits and the reference connectome
- simulation: Stimuli and the signal-propagation simulator
- validation: Pathway detection and multi-factor circuit scoring
- fitness: Closed-form fitness of weight genomes
- genotype / pool: Weight genomes and fitness-ordered populations
- run: Configuration, the evolutionary optimizer, trials and experiments
- optimization: Optuna-based hyperparameter tuning

Example:
    >>> from wormevo import Circuit, SignalPropagationSimulator, Stimulus, StimulusKind
    >>> circuit = Circuit.from_dict({
    ...     "neurons": [{"id": "ASEL", "kind": "sensory"},
    ...                 {"id": "AIYL", "kind": "interneuron"},
    ...                 {"id": "SMBD", "kind": "motor"}],
    ...     "connections": [{"from": "ASEL", "to": "AIYL", "weight": 0.8},
    ...                     {"from": "AIYL", "to": "SMBD", "weight": 0.75}]})
    >>> result = SignalPropagationSimulator().simulate(circuit, Stimulus(StimulusKind.SMELL_FOOD), rng=0)
    >>> result.behavior
    <BehaviorLabel.HEAD_WIGGLE: 'head_wiggle'>
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from wormevo.circuit    import (BehaviorLabel,
                                Circuit,
                                Connection,
                                Neuron,
                                NeuronKind,
                                Pathway,
                                REFERENCE_CONNECTOME,
                                ReferenceConnectome,
                                SynapseKind,
                                WeightScale)
from wormevo.simulation import SignalPropagationSimulator, SimulationResult, Stimulus, StimulusKind
from wormevo.validation import PathwayDetector, ReferenceValidator, ValidationResult
from wormevo.fitness    import FitnessEvaluator, TargetBehavior
from wormevo.genotype   import Genome
from wormevo.pool       import Population
from wormevo.run        import (Config,
                                EvolutionaryOptimizer,
                                Experiment,
                                GenerationStats,
                                OptimizerState,
                                OptimizerStateError,
                                Trial)

__all__ = [
    "BehaviorLabel",
    "Circuit",
    "Config",
    "Connection",
    "EvolutionaryOptimizer",
    "Experiment",
    "FitnessEvaluator",
    "GenerationStats",
    "Genome",
    "Neuron",
    "NeuronKind",
    "OptimizerState",
    "OptimizerStateError",
    "Pathway",
    "PathwayDetector",
    "Population",
    "REFERENCE_CONNECTOME",
    "ReferenceConnectome",
    "ReferenceValidator",
    "SignalPropagationSimulator",
    "SimulationResult",
    "Stimulus",
    "StimulusKind",
    "SynapseKind",
    "TargetBehavior",
    "Trial",
    "ValidationResult",
    "WeightScale",
]
