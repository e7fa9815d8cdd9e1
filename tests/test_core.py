"""
Tests for colony_evo/core/

Tests configuration, individuals and populations.
"""

import math

import numpy as np
import pytest

from colony_evo.core.config import ConfigurationError, EvolutionConfig
from colony_evo.core.individual import FOUNDER_PARENTS, Individual, new_id
from colony_evo.core.population import Population, random_order


# ==================== Config Tests ====================

class TestEvolutionConfig:
    """Tests for EvolutionConfig."""

    def test_default_config(self):
        """Default config has expected values."""
        config = EvolutionConfig()
        assert config.population_size == 100
        assert config.num_genes == 30
        assert config.children_per_generation == 2
        assert config.winners_per_generation == 4
        assert config.mutation_rate == 0.01

    def test_winners_default_to_twice_children(self):
        """Winners are derived from the children count."""
        config = EvolutionConfig(children_per_generation=5)
        assert config.winners_per_generation == 10

    def test_replication_factor(self):
        """Replication factor is population size over children."""
        config = EvolutionConfig(num_colonies=10, individuals_per_colony=10, children_per_generation=2)
        assert config.replication_factor == 50

    def test_max_workers_optional(self):
        """Worker count is left unset unless given."""
        assert EvolutionConfig(num_colonies=4).max_workers is None
        assert EvolutionConfig(num_colonies=4, max_workers=2).max_workers == 2

    def test_config_is_immutable(self):
        """Config cannot be changed after construction."""
        config = EvolutionConfig()
        with pytest.raises(Exception):
            config.num_genes = 5

    def test_winners_must_be_twice_children(self):
        """Mismatched winners and children is rejected."""
        with pytest.raises(ConfigurationError):
            EvolutionConfig(children_per_generation=2, winners_per_generation=6)

    def test_winners_cannot_exceed_population(self):
        """More winners than individuals is rejected."""
        with pytest.raises(ConfigurationError):
            EvolutionConfig(num_colonies=1, individuals_per_colony=3, children_per_generation=2)

    def test_children_must_divide_population(self):
        """Uneven replication is rejected."""
        with pytest.raises(ConfigurationError):
            EvolutionConfig(num_colonies=3, individuals_per_colony=3, children_per_generation=2)

    def test_counts_must_be_positive(self):
        """Zero colonies or genes is rejected."""
        with pytest.raises(ConfigurationError):
            EvolutionConfig(num_colonies=0)
        with pytest.raises(ConfigurationError):
            EvolutionConfig(num_genes=0)

    def test_zero_generations_allowed(self):
        """A run of zero generations is valid."""
        assert EvolutionConfig(num_generations=0).num_generations == 0

    def test_mutation_rate_bounds(self):
        """Mutation rate outside [0, 1] is rejected."""
        with pytest.raises(ConfigurationError):
            EvolutionConfig(mutation_rate=1.5)

    def test_configuration_error_is_value_error(self):
        """ConfigurationError can be caught as ValueError."""
        with pytest.raises(ValueError):
            EvolutionConfig(num_colonies=-1)

    def test_from_dict_rejects_unknown_keys(self):
        """Typos in configuration keys are caught."""
        with pytest.raises(ConfigurationError):
            EvolutionConfig.from_dict({"num_colonys": 3})

    def test_dict_round_trip(self):
        """to_dict output rebuilds an equal config."""
        config = EvolutionConfig(num_colonies=2, individuals_per_colony=3, seed=7)
        assert EvolutionConfig.from_dict(config.to_dict()) == config

    def test_from_yaml_flat(self, tmp_path):
        """Flat YAML mapping is loaded."""
        path = tmp_path / "config.yaml"
        path.write_text("num_colonies: 2\nindividuals_per_colony: 3\nnum_genes: 4\nseed: 1\n")

        config = EvolutionConfig.from_yaml(path)

        assert config.population_size == 6
        assert config.num_genes == 4
        assert config.seed == 1

    def test_from_yaml_nested(self, tmp_path):
        """YAML nested under an evolution key is loaded."""
        path = tmp_path / "config.yaml"
        path.write_text("evolution:\n  num_generations: 3\n")

        config = EvolutionConfig.from_yaml(path)

        assert config.num_generations == 3

    def test_from_yaml_invalid_values(self, tmp_path):
        """Invalid YAML values raise ConfigurationError."""
        path = tmp_path / "config.yaml"
        path.write_text("children_per_generation: 200\n")

        with pytest.raises(ConfigurationError):
            EvolutionConfig.from_yaml(path)


# ==================== Individual Tests ====================

class TestIndividual:
    """Tests for Individual."""

    def test_random_founder(self):
        """Random individual is a founder with genes in [0, 1)."""
        rng = np.random.default_rng(42)
        ind = Individual.random(30, rng)

        assert ind.parent_ids == FOUNDER_PARENTS
        assert ind.is_founder
        assert ind.fitness_score == 0.0
        assert len(ind.genome) == 30
        assert np.all(ind.genome >= 0.0)
        assert np.all(ind.genome < 1.0)

    def test_new_id_never_sentinel(self):
        """Fresh ids are never the founder sentinel."""
        rng = np.random.default_rng(42)
        ids = [new_id(rng) for _ in range(1000)]
        assert all(i > 0 for i in ids)
        assert len(set(ids)) == 1000

    def test_genome_converted_to_array(self):
        """Lists are converted to float arrays."""
        ind = Individual(id=1, genome=[0.1, 0.2])
        assert isinstance(ind.genome, np.ndarray)
        assert ind.genome.dtype == np.float64

    def test_copy_is_independent(self):
        """Copies do not share the genome array."""
        ind = Individual(id=1, genome=[0.1, 0.2], parent_ids=(3, 4), fitness_score=2.0)
        clone = ind.copy()

        clone.genome[0] = 0.9
        clone.id = 99

        assert ind.genome[0] == 0.1
        assert ind.id == 1
        assert clone.parent_ids == (3, 4)
        assert clone.fitness_score == 2.0

    def test_record_format(self):
        """Record is space-separated with six-decimal floats."""
        ind = Individual(id=12, genome=[0.5, 0.25], parent_ids=(3, 4), fitness_score=1.5)
        assert ind.to_record() == "12 3 4 1.500000 0.500000 0.250000"
        assert str(ind) == ind.to_record()

    def test_from_record(self):
        """Records parse back into individuals."""
        ind = Individual.from_record("12 3 4 1.500000 0.500000 0.250000")

        assert ind.id == 12
        assert ind.parent_ids == (3, 4)
        assert ind.fitness_score == 1.5
        assert list(ind.genome) == [0.5, 0.25]

    def test_from_record_malformed(self):
        """Short records are rejected."""
        with pytest.raises(ValueError):
            Individual.from_record("1 2")

    def test_equality_is_identity(self):
        """Individuals compare by identity, so list lookups work."""
        a = Individual(id=1, genome=[0.1, 0.2])
        b = Individual(id=1, genome=[0.1, 0.2])
        crowd = [b, a]

        assert a == a
        assert a != b
        assert a in crowd
        assert crowd.index(a) == 1

    def test_nan_fitness_selection_key(self):
        """NaN fitness ranks lowest."""
        ind = Individual(id=1, genome=[0.1], fitness_score=float("nan"))
        assert ind.selection_key == -math.inf


# ==================== Population Tests ====================

class TestPopulation:
    """Tests for Population."""

    def test_random_population(self):
        """Random population has the right shape and founder ancestry."""
        rng = np.random.default_rng(42)
        pop = Population.random(12, 5, rng)

        assert len(pop) == 12
        assert all(len(ind.genome) == 5 for ind in pop)
        assert all(ind.parent_ids == (0, 0) for ind in pop)

    def test_sorted_by_fitness(self):
        """Fitness ordering is descending and leaves the population alone."""
        pop = Population(
            Individual(id=i, genome=[0.0], fitness_score=score)
            for i, score in enumerate([1.0, 5.0, 3.0, 2.0])
        )

        ranked = pop.sorted_by_fitness()

        assert [ind.fitness_score for ind in ranked] == [5.0, 3.0, 2.0, 1.0]
        assert [ind.id for ind in pop] == [0, 1, 2, 3]

    def test_nan_sorts_last(self):
        """NaN fitness does not break the ordering."""
        pop = Population(
            Individual(id=i, genome=[0.0], fitness_score=score)
            for i, score in enumerate([1.0, float("nan"), 3.0])
        )
        ranked = pop.sorted_by_fitness()
        assert [ind.id for ind in ranked] == [2, 0, 1]

    def test_shuffled_is_permutation(self):
        """Shuffle keeps the same members."""
        rng = np.random.default_rng(42)
        pop = Population.random(50, 2, rng)

        shuffled = pop.shuffled(rng)

        assert len(shuffled) == len(pop)
        assert sorted(ind.id for ind in shuffled) == sorted(ind.id for ind in pop)
        assert [ind.id for ind in shuffled] != [ind.id for ind in pop]

    def test_random_order_covers_all_indices(self):
        """Random order is a permutation of range(n)."""
        rng = np.random.default_rng(42)
        order = random_order(20, rng)
        assert sorted(order.tolist()) == list(range(20))

    def test_colonies_partition(self):
        """Colonies cover the population exactly once, in contiguous blocks."""
        rng = np.random.default_rng(42)
        pop = Population.random(12, 2, rng)

        colonies = pop.colonies(4, 3)

        assert len(colonies) == 4
        assert all(len(c) == 3 for c in colonies)
        flat = [ind for colony in colonies for ind in colony]
        assert [id(ind) for ind in flat] == [id(ind) for ind in pop]

    def test_colonies_share_individuals(self):
        """Fitness written through a colony is visible in the population."""
        rng = np.random.default_rng(42)
        pop = Population.random(4, 2, rng)

        pop.colonies(2, 2)[1][0].fitness_score = 7.0

        assert pop[2].fitness_score == 7.0

    def test_colonies_size_mismatch(self):
        """Colony layout must match the population size."""
        rng = np.random.default_rng(42)
        pop = Population.random(10, 2, rng)
        with pytest.raises(ValueError):
            pop.colonies(3, 3)

    def test_fitness_summary(self):
        """Summary reports best, mean and worst."""
        pop = Population(
            Individual(id=i, genome=[0.0], fitness_score=score)
            for i, score in enumerate([1.0, 2.0, 6.0])
        )
        summary = pop.fitness_summary()
        assert summary == {"best_fitness": 6.0, "mean_fitness": 3.0, "worst_fitness": 1.0}

    def test_records(self):
        """Each individual becomes one record line."""
        rng = np.random.default_rng(42)
        pop = Population.random(6, 2, rng)

        records = pop.to_records()
        restored = Population.from_records(records)

        assert len(records) == 6
        assert [ind.id for ind in restored] == [ind.id for ind in pop]
