"""
Run Package

Configuration, the evolutionary optimizer and the drivers that step it.

Modules:
    config:     Config class (INI files)
    optimizer:  EvolutionaryOptimizer and its lifecycle types
    trial:      Trial class (one seeded run)
    experiment: Experiment class (many seeded runs)
"""

from wormevo.run.config     import Config
from wormevo.run.optimizer  import (EvolutionaryOptimizer,
                                    GenerationStats,
                                    OptimizerState,
                                    OptimizerStateError)
from wormevo.run.trial      import Trial
from wormevo.run.experiment import Experiment

__all__ = ['Config',
           'EvolutionaryOptimizer',
           'Experiment',
           'GenerationStats',
           'OptimizerState',
           'OptimizerStateError',
           'Trial']
