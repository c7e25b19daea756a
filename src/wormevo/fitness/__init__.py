"""
Fitness Package

Closed-form fitness of a weight genome for a target behavior, used by the
evolutionary optimizer.

Modules:
    evaluator: TargetBehavior enumeration and FitnessEvaluator class

Exported Classes:
    TargetBehavior:   Behaviors the weights can be optimized for
    FitnessEvaluator: Computes fitness values in [0, 1]
"""

from wormevo.fitness.evaluator import FitnessEvaluator, SLICE_NAMES, TargetBehavior

__all__ = ['FitnessEvaluator',
           'SLICE_NAMES',
           'TargetBehavior']
