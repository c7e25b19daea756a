"""
Population Module

This module implements the Population class, the container of genomes evolved
by the genetic algorithm. The population is kept sorted by descending fitness,
so that its first genome is always the fittest one.

Classes:
    Population: Fitness-ordered collection of genomes
"""

import numpy as np
from typing import Iterable, Iterator

from wormevo.genotype import Genome
from wormevo.rng      import RandomSource, as_generator

class Population:
    """
    A collection of genomes, ordered by descending fitness.

    Genomes that have not been evaluated yet (fitness None) are placed after
    all evaluated ones. Sorting is stable: genomes with equal fitness keep
    their relative order.

    Public Attributes:
        genomes: The genomes, fittest first

    Public Methods:
        sort():                     Restore the fitness ordering
        best():                     The fittest genome
        fitnesses():                Fitness values as an array
        average_fitness():          Mean fitness of the evaluated genomes
        diversity():                Mean pairwise normalized L1 distance
        tournament_select(rng, k):  Pick a parent by tournament selection

    Class Methods:
        random(size, genome_size, rng, ...): Population of random genomes
    """

    def __init__(self, genomes: Iterable[Genome] = ()):
        self.genomes: list[Genome] = list(genomes)
        self.sort()

    @classmethod
    def random(cls,
               size       : int,
               genome_size: int,
               rng        : RandomSource,
               min_weight : float = 0.0,
               max_weight : float = 1.0) -> 'Population':
        """
        Create a population of unevaluated genomes with uniformly drawn weights.

        Parameters:
            size:        Number of genomes
            genome_size: Number of weights per genome
            rng:         Random source
            min_weight:  Lower bound of the weights
            max_weight:  Upper bound of the weights
        """
        rng = as_generator(rng)
        return cls(Genome.random(genome_size, rng, min_weight, max_weight) for _ in range(size))

    def sort(self):
        self.genomes.sort(key=lambda g: (g.fitness is None, -(g.fitness or 0.0)))

    def best(self) -> Genome | None:
        """
        Return the fittest genome, or None if the population is empty.
        """
        return self.genomes[0] if self.genomes else None

    def fitnesses(self) -> np.ndarray:
        return np.array([g.fitness for g in self.genomes if g.fitness is not None], dtype=float)

    def average_fitness(self) -> float:
        fitnesses = self.fitnesses()
        return float(fitnesses.mean()) if fitnesses.size else 0.0

    def diversity(self) -> float:
        """
        Mean L1 distance over all unordered pairs of genomes, divided by the
        genome length. Populations with fewer than two genomes have zero diversity.
        """
        if len(self.genomes) < 2:
            return 0.0

        # Accumulated row by row, never materializing the n x n x g differences
        weights = np.stack([g.weights for g in self.genomes])
        n       = len(self.genomes)
        total   = sum(np.abs(weights[i + 1:] - weights[i]).sum() for i in range(n - 1))
        pairs   = n * (n - 1) / 2
        return float(total / pairs / weights.shape[1])

    def tournament_select(self, rng: RandomSource, k: int) -> Genome:
        """
        Draw 'k' genomes uniformly at random (with replacement) and return the
        fittest of them. Ties go to the contestant drawn first.

        Parameters:
            rng: Random source
            k:   Tournament size

        Returns:
            The winning genome (not a copy)
        """
        if not self.genomes:
            raise ValueError("Cannot select from an empty population")
        rng         = as_generator(rng)
        contestants = [self.genomes[i] for i in rng.integers(0, len(self.genomes), size=max(1, k))]
        return max(contestants, key=lambda g: -np.inf if g.fitness is None else g.fitness)

    def __len__(self):
        return len(self.genomes)

    def __iter__(self) -> Iterator[Genome]:
        return iter(self.genomes)

    def __getitem__(self, index: int) -> Genome:
        return self.genomes[index]

    def __str__(self):
        return '\n'.join(str(genome) for genome in self.genomes)
