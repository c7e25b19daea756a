"""
Hyperparameter tuning for the genetic algorithm, built on Optuna.
"""

from wormevo.optimization.search_space import (CategoricalParameter,
                                               FloatParameter,
                                               IntParameter,
                                               SearchSpace,
                                               default_search_space)
from wormevo.optimization.tuner        import HyperparameterTuner

__all__ = ['CategoricalParameter',
           'FloatParameter',
           'HyperparameterTuner',
           'IntParameter',
           'SearchSpace',
           'default_search_space']
