"""
core/individual.py

One candidate solution from one generation.

An individual is an identity, a pair of parents, a score and a genome.
Nothing more. The random key used for shuffling is never stored here.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import math

import numpy as np

# Parent id pair carried by founders: "no ancestry"
FOUNDER_PARENTS: Tuple[int, int] = (0, 0)

# Ids are drawn from [ID_LOW, ID_HIGH) so they never collide with the sentinel
ID_LOW = 1
ID_HIGH = 2 ** 63 - 1


def new_id(rng: np.random.Generator) -> int:
    """Draw a fresh random identity. Not guaranteed unique."""
    return int(rng.integers(ID_LOW, ID_HIGH))


@dataclass(eq=False)
class Individual:
    """
    A single member of a population.

    `fitness_score` stays 0.0 until an evaluator writes it; higher is better.
    """
    id: int
    genome: np.ndarray                                  # Genes in [0.0, 1.0)
    parent_ids: Tuple[int, int] = FOUNDER_PARENTS
    fitness_score: float = 0.0

    def __post_init__(self):
        self.genome = np.asarray(self.genome, dtype=np.float64)
        self.parent_ids = (int(self.parent_ids[0]), int(self.parent_ids[1]))

    @property
    def is_founder(self) -> bool:
        return self.parent_ids == FOUNDER_PARENTS

    @property
    def selection_key(self) -> float:
        """Fitness as a sortable key; NaN ranks below every real score."""
        if math.isnan(self.fitness_score):
            return -math.inf
        return self.fitness_score

    def copy(self) -> "Individual":
        """Independent copy; the genome array is not shared."""
        return Individual(
            id=self.id,
            genome=self.genome.copy(),
            parent_ids=self.parent_ids,
            fitness_score=self.fitness_score,
        )

    @classmethod
    def random(cls, num_genes: int, rng: np.random.Generator) -> "Individual":
        """A founder with uniformly random genes and no parents."""
        return cls(
            id=new_id(rng),
            genome=rng.random(num_genes),
            parent_ids=FOUNDER_PARENTS,
        )

    # ==================== Serialization ====================

    def to_record(self) -> str:
        """
        Single-line record: id, both parent ids, fitness, then every gene.

        Floats are rendered with six decimals, fields separated by spaces.
        """
        parts = [str(self.id), str(self.parent_ids[0]), str(self.parent_ids[1])]
        parts.append(f"{self.fitness_score:.6f}")
        parts.extend(f"{gene:.6f}" for gene in self.genome)
        return " ".join(parts)

    @classmethod
    def from_record(cls, line: str) -> "Individual":
        """Parse a line produced by to_record()."""
        tokens = line.split()
        if len(tokens) < 4:
            raise ValueError(f"Malformed individual record: {line!r}")
        return cls(
            id=int(tokens[0]),
            parent_ids=(int(tokens[1]), int(tokens[2])),
            fitness_score=float(tokens[3]),
            genome=np.array([float(t) for t in tokens[4:]]),
        )

    def __str__(self) -> str:
        return self.to_record()
