"""
Unit tests for Config class.
"""

import configparser
import os
import pytest

from wormevo.fitness    import TargetBehavior
from wormevo.run.config import Config


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def test_config_dir():
    """Return the directory containing test configuration files."""
    return os.path.join(os.path.dirname(__file__), 'test_configs')


# ============================================================================
# Test Config Initialization
# ============================================================================

class TestConfigInit:
    """Test Config initialization."""

    def test_init_without_file_uses_defaults(self):
        config = Config()

        assert config.population_size == 20
        assert config.genome_size == 12
        assert config.elitism_count == 2
        assert config.tournament_size == 3
        assert config.crossover_rate == 0.7
        assert config.mutation_rate == 0.1
        assert config.target_behavior == 'chemotaxis'
        assert config.noise_amplitude == 0.1
        assert config.max_steps == 10
        assert config.activation_threshold == 0.5
        assert config.synapse_scale == 10.0

    def test_defaults_are_valid(self):
        assert Config().validate() is not None

    def test_init_with_nonexistent_file_raises_error(self):
        with pytest.raises(FileNotFoundError, match="Configuration file .* not found"):
            Config('nonexistent_file.ini')

    def test_minimal_config_fills_optional_values(self, test_config_dir):
        config = Config(os.path.join(test_config_dir, 'minimal.ini'))

        assert config.population_size == 30
        assert config.genome_size == 16
        assert config.elitism_count == 3
        assert config.crossover_rate == 0.6
        assert config.mutation_rate == 0.2
        assert config.max_number_generations == 25

        assert config.min_weight == 0.0
        assert config.max_weight == 1.0
        assert config.tournament_size == 3
        assert config.mutation_strength == 0.15
        assert config.target_behavior == 'chemotaxis'
        assert config.fitness_termination_check is False
        assert config.fitness_criterion == 'max'
        assert config.fitness_threshold is None
        assert config.max_steps == 10

    def test_full_config(self, test_config_dir):
        config = Config(os.path.join(test_config_dir, 'full.ini'))

        assert config.min_weight == 0.1
        assert config.max_weight == 0.9
        assert config.tournament_size == 5
        assert config.mutation_strength == 0.3
        assert config.target_behavior == 'omega_turn'
        assert config.noise_amplitude == 0.05
        assert config.fitness_termination_check is True
        assert config.fitness_criterion == 'mean'
        assert config.fitness_threshold == 0.8
        assert config.max_steps == 6
        assert config.activation_threshold == 0.4
        assert config.synapse_scale == 12.0

    def test_missing_required_value_raises(self, test_config_dir):
        with pytest.raises(configparser.NoOptionError):
            Config(os.path.join(test_config_dir, 'missing_required.ini'))

    def test_invalid_target_behavior_raises(self, test_config_dir):
        with pytest.raises(ValueError, match="Invalid target behavior"):
            Config(os.path.join(test_config_dir, 'invalid_target.ini'))


# ============================================================================
# Test Target Behavior Normalization
# ============================================================================

class TestTargetBehavior:
    """Test that 'target_behavior' is always stored normalized."""

    @pytest.mark.parametrize("value, expected", [
        ('Foraging',                 'foraging'),
        ('omega-turn',               'omega_turn'),
        (TargetBehavior.AVOIDANCE,   'avoidance'),
    ])
    def test_assignment_is_normalized(self, value, expected):
        config = Config()
        config.target_behavior = value
        assert config.target_behavior == expected

    def test_assignment_of_unknown_target_raises(self):
        config = Config()
        with pytest.raises(ValueError):
            config.target_behavior = 'swimming'


# ============================================================================
# Test Validation
# ============================================================================

class TestConfigValidate:
    """Test Config.validate range checks."""

    @pytest.mark.parametrize("name, value", [
        ('population_size',      0),
        ('genome_size',          3),
        ('elitism_count',        21),
        ('elitism_count',        -1),
        ('tournament_size',      0),
        ('crossover_rate',       1.5),
        ('mutation_rate',        -0.1),
        ('mutation_rate',        float('nan')),
        ('mutation_strength',    -0.1),
        ('noise_amplitude',      0.2),
        ('fitness_criterion',    'median'),
        ('max_steps',            0),
        ('activation_threshold', 0.0),
        ('synapse_scale',        0.0),
    ])
    def test_out_of_range_raises(self, name, value):
        config = Config()
        setattr(config, name, value)
        with pytest.raises(ValueError):
            config.validate()

    def test_min_weight_must_be_below_max_weight(self):
        config = Config()
        config.min_weight = 1.0
        with pytest.raises(ValueError, match="min_weight"):
            config.validate()

    def test_threshold_required_when_termination_check_enabled(self):
        config = Config()
        config.fitness_termination_check = True
        config.fitness_threshold         = None
        with pytest.raises(ValueError, match="fitness_threshold"):
            config.validate()

    def test_boundaries_are_accepted(self):
        config = Config()
        config.elitism_count  = config.population_size
        config.crossover_rate = 0.0
        config.mutation_rate  = 1.0
        config.genome_size    = 4
        assert config.validate() is config


# ============================================================================
# Test Save
# ============================================================================

class TestConfigSave:
    """Test writing a configuration back to disk."""

    def test_save_round_trip(self, tmp_path, test_config_dir):
        original = Config(os.path.join(test_config_dir, 'full.ini'))
        path     = tmp_path / 'saved.ini'
        original.save(str(path))
        loaded   = Config(str(path))

        assert vars(loaded) == vars(original)

    def test_save_defaults_round_trip(self, tmp_path):
        path = tmp_path / 'defaults.ini'
        Config().save(str(path))
        assert vars(Config(str(path))) == vars(Config())
