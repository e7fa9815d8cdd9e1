"""
colony_evo/evolution/breeding.py

Turning one evaluated generation into the next.

The breeder is strictly sequential and owns every random draw it makes:
1. Select the fittest `winners_per_generation` individuals
2. Pair them at random and mate each pair into one unique child
3. Replicate the unique children, each copy with a fresh id, to refill
   the population
4. Shuffle the result so colony boundaries do not follow family lines
"""

from __future__ import annotations
from typing import List, Tuple
import logging

import numpy as np

from colony_evo.core.config import EvolutionConfig
from colony_evo.core.individual import Individual, new_id
from colony_evo.core.population import Population, random_order

from .genome import mate

logger = logging.getLogger(__name__)


class GenerationBreeder:
    """
    Selection, random pairing, recombination and replication.

    The evaluated population passed to breed() is never modified; every
    member of the returned population is an independent copy.
    """

    def __init__(self, config: EvolutionConfig, rng: np.random.Generator):
        self.config = config
        self.rng = rng

    def select_winners(self, population: Population) -> List[Individual]:
        """The top `winners_per_generation` members, best first, as copies."""
        ranked = population.sorted_by_fitness()
        return [ind.copy() for ind in ranked[:self.config.winners_per_generation]]

    def pair_winners(self, winners: List[Individual]) -> List[Tuple[Individual, Individual]]:
        """Shuffle the winners, then take consecutive pairs."""
        order = random_order(len(winners), self.rng)
        shuffled = [winners[i] for i in order]
        return [(shuffled[2 * j], shuffled[2 * j + 1]) for j in range(len(shuffled) // 2)]

    def produce_children(self, winners: List[Individual]) -> List[Individual]:
        """One child per random pair of winners."""
        return [
            mate(p1, p2, self.rng, self.config.mutation_rate)
            for p1, p2 in self.pair_winners(winners)
        ]

    def replicate(self, children: List[Individual], size: int) -> Population:
        """
        Cycle through the unique children until `size` offspring exist.

        Copy k is derived from child k mod len(children) and gets a fresh
        random id; the result is returned in random order.
        """
        offspring = []
        for k in range(size):
            replicate = children[k % len(children)].copy()
            replicate.id = new_id(self.rng)
            offspring.append(replicate)
        return Population(offspring).shuffled(self.rng)

    def breed(self, population: Population) -> Population:
        """Build the next generation, same size as `population`."""
        winners = self.select_winners(population)
        children = self.produce_children(winners)

        logger.debug(
            f"Bred {len(children)} unique children from {len(winners)} winners "
            f"(top fitness {winners[0].fitness_score:.6f}), "
            f"replicating each {self.config.replication_factor} times"
        )

        return self.replicate(children, len(population))
