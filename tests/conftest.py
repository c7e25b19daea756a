"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from wormevo.circuit    import Circuit, Connection, Neuron, NeuronKind
from wormevo.run.config import Config


@pytest.fixture
def rng():
    """Provide a seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def default_config():
    """Provide a configuration holding the default values."""
    return Config()


@pytest.fixture
def small_config():
    """Provide a small, fast configuration for optimizer and trial tests."""
    config = Config()
    config.population_size        = 10
    config.genome_size            = 8
    config.elitism_count          = 2
    config.max_number_generations = 5
    return config


@pytest.fixture
def head_wiggle_circuit():
    """The ASEL -> AIYL -> SMBD chemotaxis fragment."""
    return Circuit([Neuron("ASEL", NeuronKind.SENSORY),
                    Neuron("AIYL", NeuronKind.INTERNEURON),
                    Neuron("SMBD", NeuronKind.MOTOR)],
                   [Connection("ASEL", "AIYL", 0.8),
                    Connection("AIYL", "SMBD", 0.75)])
