"""
core/population.py

All individuals of one generation, in order.

A population is replaced wholesale every generation. The breeder reads
the old one and builds a new one; nothing is shared between them.
"""

from __future__ import annotations
from typing import Dict, Iterable, Iterator, List, Sequence, overload

import numpy as np

from .individual import Individual


def random_order(n: int, rng: np.random.Generator) -> np.ndarray:
    """
    Unbiased random permutation of range(n).

    One uniform key is drawn per position and the keys are argsorted, so
    the ordering lives in an index array and never touches the items.
    """
    keys = rng.random(n)
    return np.argsort(keys, kind="stable")


class Population:
    """Ordered, fixed-size collection of Individuals."""

    def __init__(self, individuals: Iterable[Individual] = ()):
        self.individuals: List[Individual] = list(individuals)

    @classmethod
    def random(cls, size: int, num_genes: int, rng: np.random.Generator) -> "Population":
        """First generation: random ids, founder parents, uniform genes."""
        return cls(Individual.random(num_genes, rng) for _ in range(size))

    def __len__(self) -> int:
        return len(self.individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.individuals)

    @overload
    def __getitem__(self, index: int) -> Individual: ...

    @overload
    def __getitem__(self, index: slice) -> List[Individual]: ...

    def __getitem__(self, index):
        return self.individuals[index]

    # ==================== Orderings ====================

    def sorted_by_fitness(self) -> List[Individual]:
        """Members by fitness, best first. The population itself is untouched."""
        return sorted(self.individuals, key=lambda ind: ind.selection_key, reverse=True)

    def shuffled(self, rng: np.random.Generator) -> "Population":
        """A new Population holding the same members in random order."""
        order = random_order(len(self.individuals), rng)
        return Population(self.individuals[i] for i in order)

    # ==================== Colonies ====================

    def colonies(self, num_colonies: int, individuals_per_colony: int) -> List[List[Individual]]:
        """
        Split into contiguous, equal, non-overlapping colonies.

        Each colony is its own list but holds the very same Individual
        objects, so fitness written through a colony lands in the population.
        """
        expected = num_colonies * individuals_per_colony
        if expected != len(self.individuals):
            raise ValueError(
                f"Cannot split {len(self.individuals)} individuals into "
                f"{num_colonies} colonies of {individuals_per_colony}"
            )
        return [
            self.individuals[c * individuals_per_colony:(c + 1) * individuals_per_colony]
            for c in range(num_colonies)
        ]

    # ==================== Reporting ====================

    def fitness_summary(self) -> Dict[str, float]:
        """Best, mean and worst fitness. NaN scores are ignored."""
        scores = np.array([ind.fitness_score for ind in self.individuals], dtype=np.float64)
        scores = scores[~np.isnan(scores)]
        if scores.size == 0:
            return {"best_fitness": 0.0, "mean_fitness": 0.0, "worst_fitness": 0.0}
        return {
            "best_fitness": float(scores.max()),
            "mean_fitness": float(scores.mean()),
            "worst_fitness": float(scores.min()),
        }

    def to_records(self) -> List[str]:
        return [ind.to_record() for ind in self.individuals]

    @classmethod
    def from_records(cls, lines: Sequence[str]) -> "Population":
        return cls(Individual.from_record(line) for line in lines if line.strip())
