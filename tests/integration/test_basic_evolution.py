"""
Integration tests for the evolutionary optimizer and the circuit tools.

These tests run complete trials with the configurations shipped in
'examples/configs', and take reference pathway circuits through
simulation, validation and serialization end-to-end.

All runs are seeded, so the results are reproducible.
"""

import pytest

from wormevo.circuit    import REFERENCE_CONNECTOME, BehaviorLabel, Circuit
from wormevo.fitness    import TargetBehavior
from wormevo.run        import Experiment, Trial
from wormevo.simulation import SignalPropagationSimulator, Stimulus, StimulusKind
from wormevo.validation import ReferenceValidator

pytestmark = pytest.mark.integration


# ============================================================================
# Test Evolution with the Example Configurations
# ============================================================================

class TestBasicEvolution:
    """Test that the genetic algorithm makes progress on every target behavior."""

    @pytest.mark.parametrize("target", [t.value for t in TargetBehavior])
    def test_example_config_evolves(self, example_config, target):
        config = example_config(target)
        config.max_number_generations = 15
        assert config.target_behavior == target

        trial = Trial(config, seed=42, suppress_output=True)
        trial.run()

        history = trial.history
        assert 1 <= len(history) <= 15
        assert all(b.best_fitness >= a.best_fitness for a, b in zip(history, history[1:]))
        assert 0.0 <= trial.best_genome.fitness <= 1.0
        assert len(trial.best_genome) == config.genome_size

        # the run stops early only when the threshold is met
        if len(history) < 15:
            assert not trial.failed

    def test_foraging_improves_population(self, example_config):
        config = example_config('foraging')
        config.fitness_termination_check = False
        config.max_number_generations    = 30

        trial = Trial(config, seed=7, suppress_output=True)
        trial.run()

        history = trial.history
        assert history[-1].avg_fitness > history[0].avg_fitness
        assert history[-1].best_fitness >= history[0].best_fitness

    def test_experiment_over_example_config(self, example_config):
        config = example_config('chemotaxis')
        config.max_number_generations = 10

        experiment = Experiment(config, num_trials=3, base_seed=100, suppress_output=True)
        results    = experiment.run()
        summary    = experiment.summary()

        assert [r["seed"] for r in results] == [100, 101, 102]
        assert summary["num_trials"] == 3
        assert 0.0 <= summary["success_rate"] <= 1.0
        assert summary["best_max_fitness"] == max(r["max_fitness"] for r in results)


# ============================================================================
# Test Reference Pathways End-to-End
# ============================================================================

STIMULUS_FOR = {"touch_reflex_head": StimulusKind.TOUCH_HEAD,
                "touch_reflex_tail": StimulusKind.TOUCH_TAIL,
                "chemotaxis"       : StimulusKind.SMELL_FOOD}


class TestReferencePathways:
    """Test that reference pathway circuits behave as their pathway predicts."""

    @pytest.mark.parametrize("key", list(STIMULUS_FOR))
    def test_pathway_produces_expected_behavior(self, key):
        pathway = REFERENCE_CONNECTOME.pathway(key)
        circuit = REFERENCE_CONNECTOME.build_pathway_circuit(key)

        result = SignalPropagationSimulator().simulate(circuit, Stimulus(STIMULUS_FOR[key]), rng=0)
        assert result.behavior is pathway.expected_behavior
        assert result.confidence == 1.0

        validation = ReferenceValidator().validate(circuit)
        assert validation.detected_pathway == pathway
        assert validation.overall_score == 100
        assert validation.grade == "A+"

    def test_lesioned_chemotaxis_rests(self):
        circuit = (REFERENCE_CONNECTOME.build_pathway_circuit("chemotaxis")
                   .without_neuron("AIYL")
                   .without_neuron("AIYR"))

        result = SignalPropagationSimulator().simulate(circuit, Stimulus(StimulusKind.SMELL_FOOD), rng=0)
        assert result.behavior is BehaviorLabel.RESTING
        assert not any(n.startswith("SMB") for n in result.activated_neurons)

        validation = ReferenceValidator().validate(circuit)
        assert validation.overall_score < 100

    def test_lesioned_head_reflex_still_reverses(self):
        circuit = REFERENCE_CONNECTOME.build_pathway_circuit("touch_reflex_head").without_neuron("AVAL")
        result  = SignalPropagationSimulator().simulate(circuit, Stimulus(StimulusKind.TOUCH_HEAD), rng=0)
        assert result.behavior is BehaviorLabel.MOVE_BACKWARD

    def test_snapshot_round_trip_simulates_identically(self):
        circuit  = REFERENCE_CONNECTOME.build_pathway_circuit("touch_reflex_head")
        restored = Circuit.from_dict(circuit.to_dict())
        stimulus = Stimulus(StimulusKind.TOUCH_HEAD, 0.5)

        simulator = SignalPropagationSimulator()
        for seed in range(5):
            assert simulator.simulate(circuit, stimulus, rng=seed) == simulator.simulate(restored, stimulus, rng=seed)
        assert ReferenceValidator().validate(restored).to_dict() == ReferenceValidator().validate(circuit).to_dict()
