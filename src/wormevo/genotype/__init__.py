"""
Genotype Package

Genetic encoding used by the optimizer: a fixed-length vector of synaptic
weights together with its fitness and generation tag.

Modules:
    genome: Genome class

Exported Classes:
    Genome: Weight vector evolved by the genetic algorithm
"""

from wormevo.genotype.genome import Genome

__all__ = ['Genome']
