"""
Genome Module

This module implements the Genome class: a fixed-length vector of synaptic
weights evolved by the genetic algorithm.

Classes:
    Genome: Weight vector, fitness and generation tag of one candidate solution
"""

import numpy as np
from typing import Optional

from wormevo.rng import RandomSource, as_generator

class Genome:
    """
    A candidate set of synaptic weights.

    The weight vector has a fixed length for the whole run and every gene stays
    within [min_weight, max_weight]. Genetic operators never modify a genome in
    place: crossover and mutation return new genomes, and 'clone()' returns a
    copy that differs at most in its generation tag. The fitness is None until
    the genome has been evaluated.

    Public Attributes:
        weights:    The gene values (1D float array)
        fitness:    Fitness in [0, 1], or None if not evaluated yet
        generation: Generation in which the genome belongs to the population

    Public Methods:
        clone(generation):                 Copy, optionally with a new generation tag
        crossover(other, rng):             Single-point crossover with another genome
        mutate(rate, strength, rng, ...):  Per-gene uniform perturbation
        distance(other):                   Mean absolute difference of the weights
        to_dict():                         Dictionary representation

    Class Methods:
        random(size, rng, ...): Genome with uniformly drawn weights
        from_dict(data):        Create a genome from its dictionary representation
    """

    def __init__(self,
                 weights   : np.ndarray,
                 fitness   : Optional[float] = None,
                 generation: int             = 0):
        """
        Parameters:
            weights:    The gene values
            fitness:    Fitness, if already known
            generation: Generation tag
        """
        self.weights   : np.ndarray      = np.array(weights, dtype=float)
        self.fitness   : Optional[float] = fitness
        self.generation: int             = generation

        if self.weights.ndim != 1 or self.weights.size == 0:
            raise ValueError(f"Genome weights must be a non-empty 1D vector, got shape {self.weights.shape}")

    @classmethod
    def random(cls,
               size      : int,
               rng       : RandomSource,
               min_weight: float = 0.0,
               max_weight: float = 1.0,
               generation: int   = 0) -> 'Genome':
        """
        Create a genome whose weights are drawn uniformly from [min_weight, max_weight).
        """
        rng = as_generator(rng)
        return cls(rng.uniform(min_weight, max_weight, size), generation=generation)

    def __len__(self):
        return self.weights.size

    def clone(self, generation: Optional[int] = None) -> 'Genome':
        """
        Create a copy of this genome (same weights and fitness).

        Parameters:
            generation: Generation tag of the copy; the current tag is kept if None
        """
        return Genome(self.weights.copy(),
                      self.fitness,
                      self.generation if generation is None else generation)

    def crossover(self, other: 'Genome', rng: RandomSource) -> 'Genome':
        """
        Create a child by single-point crossover: the genes before a random cut
        point come from this genome, the rest from 'other'. The cut point lies
        strictly inside the vector, so that both parents contribute.

        Parameters:
            other: The second parent (same length)
            rng:   Random source for the cut point

        Returns:
            The (unevaluated) child
        """
        if len(other) != len(self):
            raise ValueError(f"Cannot cross genomes of length {len(self)} and {len(other)}")
        if len(self) < 2:
            return Genome(self.weights.copy())

        rng   = as_generator(rng)
        point = int(rng.integers(1, len(self)))
        return Genome(np.concatenate([self.weights[:point], other.weights[point:]]))

    def mutate(self,
               rate      : float,
               strength  : float,
               rng       : RandomSource,
               min_weight: float = 0.0,
               max_weight: float = 1.0) -> 'Genome':
        """
        Create a mutated copy of this genome.

        Each gene is perturbed independently with probability 'rate', by a value
        drawn uniformly from [-strength, strength]; the result is clamped back
        into [min_weight, max_weight].

        Returns:
            The (unevaluated) mutated copy
        """
        rng     = as_generator(rng)
        mask    = rng.random(len(self)) < rate
        deltas  = rng.uniform(-strength, strength, len(self))
        weights = np.where(mask, np.clip(self.weights + deltas, min_weight, max_weight), self.weights)
        return Genome(weights)

    def distance(self, other: 'Genome') -> float:
        """
        L1 distance between the weight vectors, normalized by the genome length.
        """
        return float(np.abs(self.weights - other.weights).sum() / len(self))

    def to_dict(self) -> dict:
        return {'weights'   : self.weights.tolist(),
                'fitness'   : self.fitness,
                'generation': self.generation}

    @classmethod
    def from_dict(cls, data: dict) -> 'Genome':
        return cls(data['weights'], data.get('fitness'), data.get('generation', 0))

    def __repr__(self):
        return f"Genome(weights={self.weights.tolist()}, fitness={self.fitness}, generation={self.generation})"

    def __str__(self):
        fitness = 'n/a' if self.fitness is None else f"{self.fitness:.4f}"
        genes   = ','.join(f"{w:.2f}" for w in self.weights)
        return f"[gen {self.generation:03d}, fitness {fitness}] {genes}"
