"""
Pool Package

Management of the evolving genomes.

Modules:
    population: Population class

Exported Classes:
    Population: Fitness-ordered collection of genomes
"""

from wormevo.pool.population import Population

__all__ = ['Population']
