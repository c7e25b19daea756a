"""
Unit tests for wormevo.run.trial module.
"""

import numpy as np
import pytest

from wormevo.fitness       import TargetBehavior
from wormevo.run.optimizer import OptimizerState
from wormevo.run.trial     import Trial


# ============================================================================
# Concrete Subclass for Testing
# ============================================================================

class TwoGenerationTrial(Trial):
    """Trial that stops after two generations and records its reports."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reported = []

    def _terminate(self):
        return self.generation_counter >= 2

    def _report_progress(self, stats):
        self.reported.append(stats.generation)

    def _final_report(self):
        pass


# ============================================================================
# Test Trial Initialization
# ============================================================================

class TestTrialInit:

    def test_nothing_before_run(self, small_config):
        trial = Trial(small_config, seed=1)

        assert trial.optimizer is None
        assert trial.best_genome is None
        assert trial.history == []
        assert trial.generation_counter == 0
        assert trial.failed is True


# ============================================================================
# Test Trial Run
# ============================================================================

class TestTrialRun:

    def test_runs_to_max_generations(self, small_config):
        trial = Trial(small_config, seed=1, suppress_output=True)
        trial.run()

        assert trial.generation_counter == 5
        assert len(trial.history) == 5
        assert trial.failed is True
        assert trial.optimizer.state is OptimizerState.STOPPED
        assert trial.best_genome.fitness == trial.history[-1].best_fitness

    def test_zero_generations_only_seeds(self, small_config):
        small_config.max_number_generations = 0
        trial = Trial(small_config, seed=1, suppress_output=True)
        trial.run()

        assert trial.generation_counter == 0
        assert trial.history == []
        assert trial.best_genome is not None

    def test_target_override(self, small_config):
        trial = Trial(small_config, target='foraging', seed=1, suppress_output=True)
        trial.run()
        assert trial.optimizer.target is TargetBehavior.FORAGING

    def test_same_seed_same_result(self, small_config):
        trials = [Trial(small_config, seed=11, suppress_output=True) for _ in range(2)]
        for trial in trials:
            trial.run()

        assert trials[0].history == trials[1].history
        assert np.array_equal(trials[0].best_genome.weights, trials[1].best_genome.weights)

    def test_rerun_starts_over(self, small_config):
        trial = Trial(small_config, seed=4, suppress_output=True)
        trial.run()
        first = trial.history
        trial.run()
        assert trial.history == first

    def test_subclass_terminate_and_progress(self, small_config):
        trial = TwoGenerationTrial(small_config, seed=2)
        trial.run()

        assert trial.generation_counter == 2
        assert trial.reported == [1, 2]


# ============================================================================
# Test Termination on Fitness
# ============================================================================

class TestTrialTerminate:

    @pytest.mark.parametrize("criterion", ['max', 'mean'])
    def test_reached_threshold_succeeds(self, small_config, criterion):
        small_config.fitness_termination_check = True
        small_config.fitness_criterion         = criterion
        small_config.fitness_threshold         = 0.0

        trial = Trial(small_config, seed=3, suppress_output=True)
        trial.run()

        assert trial.failed is False
        assert trial.generation_counter == 0

    def test_unreachable_threshold_fails(self, small_config):
        small_config.fitness_termination_check = True
        small_config.fitness_threshold         = 1.5

        trial = Trial(small_config, seed=3, suppress_output=True)
        trial.run()

        assert trial.failed is True
        assert trial.generation_counter == 5

    def test_threshold_ignored_without_check(self, small_config):
        small_config.fitness_termination_check = False
        small_config.fitness_threshold         = 0.0

        trial = Trial(small_config, seed=3, suppress_output=True)
        trial.run()

        assert trial.generation_counter == 5
        assert trial.failed is True


# ============================================================================
# Test Reports
# ============================================================================

class TestTrialOutput:

    def test_suppress_output_prints_nothing(self, small_config, capsys):
        Trial(small_config, seed=1, suppress_output=True).run()
        assert capsys.readouterr().out == ""

    def test_reports_progress_and_summary(self, small_config, capsys):
        Trial(small_config, seed=1).run()
        out = capsys.readouterr().out

        assert "Generation 0001" in out
        assert "Generation 0005" in out
        assert "Best fitness" in out
        assert "Threshold met   : no" in out
