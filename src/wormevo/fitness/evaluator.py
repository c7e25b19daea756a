"""
Fitness Evaluator Module

This module maps a weight genome and a target behavior onto a scalar fitness.

The weight vector is read as four consecutive slices of (nearly) equal length:

    sensory_inter | inter_command | command_motor | inhibitory

and each target behavior rewards a closed-form combination of them:

    chemotaxis: mean(sensory_inter) * mean(inter_command)
                strong sensory drive relayed to the command layer
    avoidance:  mean(command_motor) * (1 - 0.5 * mean(inhibitory))
                fast motor output, not held back by inhibition
    foraging:   1 - 2 * |mean(weights) - 0.5|
                balanced weights around the middle of the range
    omega_turn: |mean(first half of command_motor) - mean(second half)|
                asymmetric motor drive, bending the body into an omega

A small uniform noise term, shrinking as the run progresses, is then added and
the result is clamped to [0, 1].

Classes:
    TargetBehavior:   Enumeration of the behaviors weights can be optimized for
    FitnessEvaluator: Computes fitness values
"""

import math
import numpy as np
from enum import Enum

from wormevo.genotype import Genome
from wormevo.rng      import RandomSource, as_generator

class TargetBehavior(Enum):
    CHEMOTAXIS = "chemotaxis"
    AVOIDANCE  = "avoidance"
    FORAGING   = "foraging"
    OMEGA_TURN = "omega_turn"

    @classmethod
    def parse(cls, value: 'str | TargetBehavior') -> 'TargetBehavior':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower().replace('-', '_').replace(' ', '_'))
        except ValueError:
            raise ValueError(f"Unknown target behavior: {value!r}") from None

SLICE_NAMES = ('sensory_inter', 'inter_command', 'command_motor', 'inhibitory')

class FitnessEvaluator:
    """
    Computes the fitness of weight vectors for a target behavior.

    The evaluator has no state besides its noise amplitude. 'score()' is a pure
    function of its arguments; 'evaluate()' takes exactly one uniform draw from
    the given random source and passes it on to 'score()'.

    Public Methods:
        slices(weights):                                Split weights into the four named slices
        base_fitness(weights, target):                  Noise-free fitness
        score(weights, target, noise_draw, progress):   Fitness for a given noise draw
        evaluate(genome, target, rng, progress):        Fitness of a genome, drawing the noise
    """

    def __init__(self, noise_amplitude: float = 0.1):
        """
        Parameters:
            noise_amplitude: Peak-to-peak width of the noise term, at most 0.1
        """
        if not 0.0 <= noise_amplitude <= 0.1:
            raise ValueError(f"noise_amplitude must lie in [0, 0.1], got {noise_amplitude}")
        self.noise_amplitude: float = noise_amplitude

    @staticmethod
    def slices(weights: np.ndarray) -> dict[str, np.ndarray]:
        return dict(zip(SLICE_NAMES, np.array_split(np.asarray(weights, dtype=float), 4)))

    def base_fitness(self, weights: np.ndarray, target: TargetBehavior) -> float:
        """
        Compute the noise-free fitness of a weight vector.

        Parameters:
            weights: The weight vector
            target:  The behavior to reward

        Returns:
            The fitness, clamped to [0, 1]
        """
        target = TargetBehavior.parse(target)
        parts  = self.slices(weights)

        def mean(values):
            return float(np.mean(values)) if len(values) else 0.0

        if target is TargetBehavior.CHEMOTAXIS:
            fitness = mean(parts['sensory_inter']) * mean(parts['inter_command'])
        elif target is TargetBehavior.AVOIDANCE:
            fitness = mean(parts['command_motor']) * (1 - 0.5 * mean(parts['inhibitory']))
        elif target is TargetBehavior.FORAGING:
            fitness = 1 - 2 * abs(mean(weights) - 0.5)
        elif target is TargetBehavior.OMEGA_TURN:
            motor = parts['command_motor']
            if len(motor) < 2:
                fitness = 0.0
            else:
                half    = len(motor) // 2
                fitness = abs(mean(motor[:half]) - mean(motor[half:]))
        else:
            raise ValueError(f"Unknown target behavior: {target}")

        return self._clamp(fitness)

    def score(self,
              weights   : np.ndarray,
              target    : TargetBehavior,
              noise_draw: float,
              progress  : float = 0.0) -> float:
        """
        Compute the fitness of a weight vector for a given noise draw.

        Parameters:
            weights:    The weight vector
            target:     The behavior to reward
            noise_draw: A uniform draw from [0, 1)
            progress:   Fraction of the run already completed, in [0, 1];
                        the noise shrinks linearly to zero as it approaches 1

        Returns:
            The fitness, clamped to [0, 1]
        """
        progress = min(1.0, max(0.0, progress))
        noise    = (noise_draw - 0.5) * self.noise_amplitude * (1.0 - progress)
        return self._clamp(self.base_fitness(weights, target) + noise)

    def evaluate(self,
                 genome  : Genome,
                 target  : TargetBehavior,
                 rng     : RandomSource,
                 progress: float = 0.0) -> float:
        """
        Compute the fitness of a genome, drawing the noise from 'rng'.
        """
        rng = as_generator(rng)
        return self.score(genome.weights, target, float(rng.random()), progress)

    @staticmethod
    def _clamp(fitness: float) -> float:
        # Invalid weights get the worst possible fitness
        if math.isnan(fitness):
            return 0.0
        return min(1.0, max(0.0, float(fitness)))
