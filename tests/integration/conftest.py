"""
Shared fixtures for integration tests.
"""

import os
import pytest

from wormevo.run.config import Config

CONFIG_DIR = os.path.join(os.path.dirname(__file__), '..', '..', 'examples', 'configs')


@pytest.fixture
def example_config():
    """Return a loader for the configuration files shipped in 'examples/configs'."""
    def load(target):
        return Config(os.path.join(CONFIG_DIR, f'config_{target}.ini'))
    return load
