"""
colony_evo/evolution/genome.py

Recombination of real-valued genomes.

A genome is a fixed-length float vector with every gene in [0.0, 1.0).
Children inherit each gene whole from one parent; they never blend.
"""

from __future__ import annotations

import numpy as np

from colony_evo.core.individual import Individual

DEFAULT_MUTATION_RATE = 0.01


def recombine(
    genome1: np.ndarray,
    genome2: np.ndarray,
    rng: np.random.Generator,
    mutation_rate: float = DEFAULT_MUTATION_RATE,
) -> np.ndarray:
    """
    Uniform crossover with point mutation.

    Each gene independently:
    - with probability `mutation_rate`, is replaced by a fresh uniform draw
    - otherwise is copied from genome1 or genome2 with equal odds
    """
    if genome1.shape != genome2.shape:
        raise ValueError(
            f"Cannot recombine genomes of different lengths: {genome1.shape} vs {genome2.shape}"
        )

    n = len(genome1)
    mutated = rng.random(n) < mutation_rate
    from_first = rng.random(n) < 0.5
    fresh = rng.random(n)

    child = np.where(from_first, genome1, genome2)
    return np.where(mutated, fresh, child)


def mate(
    parent1: Individual,
    parent2: Individual,
    rng: np.random.Generator,
    mutation_rate: float = DEFAULT_MUTATION_RATE,
) -> Individual:
    """
    Produce one child from two parents.

    The child records both parent ids and starts unscored. Its id is left
    at 0; the breeder assigns a fresh one to every replicate.
    """
    return Individual(
        id=0,
        genome=recombine(parent1.genome, parent2.genome, rng, mutation_rate),
        parent_ids=(parent1.id, parent2.id),
        fitness_score=0.0,
    )
