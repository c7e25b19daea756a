"""
Unit tests for wormevo.genotype.genome module.
"""

import numpy as np
import pytest

from wormevo.genotype import Genome


# ============================================================================
# Test Genome Creation
# ============================================================================

class TestGenomeInit:
    """Test Genome construction."""

    def test_weights_are_copied_to_float_array(self):
        source = [1, 0, 1]
        genome = Genome(source)
        source[0] = 5

        assert genome.weights.dtype == float
        assert genome.weights.tolist() == [1.0, 0.0, 1.0]
        assert genome.fitness is None
        assert genome.generation == 0

    @pytest.mark.parametrize("weights", [[], [[0.1, 0.2], [0.3, 0.4]]])
    def test_bad_shape_raises(self, weights):
        with pytest.raises(ValueError):
            Genome(weights)

    def test_random_respects_bounds(self, rng):
        genome = Genome.random(50, rng, min_weight=0.2, max_weight=0.4, generation=3)

        assert len(genome) == 50
        assert np.all(genome.weights >= 0.2)
        assert np.all(genome.weights < 0.4)
        assert genome.generation == 3

    def test_random_is_reproducible(self):
        a = Genome.random(12, 7)
        b = Genome.random(12, 7)
        assert np.array_equal(a.weights, b.weights)


# ============================================================================
# Test Genetic Operators
# ============================================================================

class TestGeneticOperators:
    """Test clone, crossover and mutation."""

    def test_clone_keeps_fitness_and_weights(self):
        genome = Genome([0.1, 0.2], fitness=0.7, generation=2)
        clone  = genome.clone(generation=5)

        assert clone is not genome
        assert clone.weights is not genome.weights
        assert np.array_equal(clone.weights, genome.weights)
        assert clone.fitness == 0.7
        assert clone.generation == 5
        assert genome.clone().generation == 2

    def test_crossover_takes_prefix_and_suffix(self, rng):
        a = Genome(np.zeros(10))
        b = Genome(np.ones(10))
        child = a.crossover(b, rng)

        cut = int(np.argmax(child.weights))
        assert 1 <= cut <= 9
        assert np.all(child.weights[:cut] == 0)
        assert np.all(child.weights[cut:] == 1)
        assert child.fitness is None

    def test_crossover_length_mismatch_raises(self, rng):
        with pytest.raises(ValueError):
            Genome([0.1, 0.2]).crossover(Genome([0.1, 0.2, 0.3]), rng)

    def test_crossover_single_gene(self, rng):
        child = Genome([0.3]).crossover(Genome([0.9]), rng)
        assert child.weights.tolist() == [0.3]

    def test_mutate_zero_rate_is_identity(self, rng):
        genome  = Genome.random(20, rng)
        mutated = genome.mutate(0.0, 0.5, rng)
        assert np.array_equal(mutated.weights, genome.weights)
        assert mutated is not genome

    def test_mutate_full_rate_changes_every_gene_within_bounds(self, rng):
        genome  = Genome(np.full(200, 0.5))
        mutated = genome.mutate(1.0, 0.1, rng)

        assert np.all(np.abs(mutated.weights - 0.5) <= 0.1)
        assert np.count_nonzero(mutated.weights != 0.5) == 200

    def test_mutate_clamps(self, rng):
        mutated = Genome(np.full(100, 0.99)).mutate(1.0, 0.5, rng)
        assert mutated.weights.max() <= 1.0
        assert mutated.weights.min() >= 0.49

    def test_mutate_does_not_touch_original(self, rng):
        genome = Genome(np.full(10, 0.5))
        genome.mutate(1.0, 0.3, rng)
        assert np.all(genome.weights == 0.5)


# ============================================================================
# Test Distance and Serialization
# ============================================================================

class TestGenomeMisc:

    def test_distance(self):
        assert Genome([0.0, 0.0, 1.0, 1.0]).distance(Genome([1.0, 0.0, 1.0, 0.0])) == pytest.approx(0.5)
        assert Genome([0.3, 0.3]).distance(Genome([0.3, 0.3])) == 0.0

    def test_dict_round_trip(self):
        genome = Genome([0.25, 0.75], fitness=0.4, generation=8)
        again  = Genome.from_dict(genome.to_dict())

        assert again.weights.tolist() == [0.25, 0.75]
        assert again.fitness == 0.4
        assert again.generation == 8

    def test_str(self):
        assert str(Genome([0.25, 0.5], fitness=0.5, generation=3)) == "[gen 003, fitness 0.5000] 0.25,0.50"
        assert "n/a" in str(Genome([0.1]))
