"""
colony_evo/evolution/fitness.py

Fitness evaluation for colonies.

The evaluator is supplied by the caller and is the only domain-specific
piece of a run. It receives one colony at a time, possibly from a worker
thread, and must score every member of that colony. It must not assume
anything about other colonies or about the global order of the population.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Union

import numpy as np

from colony_evo.core.individual import Individual


class EvaluatorContractError(RuntimeError):
    """Raised when an evaluator's output cannot be applied to its colony."""


class ColonyEvaluator(ABC):
    """
    Abstract base for colony evaluators.

    Implementations either write `fitness_score` on each member in place
    and return None, or return one score per member in colony order.
    """

    @abstractmethod
    def evaluate(self, colony: List[Individual]) -> Optional[Sequence[float]]:
        """Score every individual in `colony`."""
        pass

    def __call__(self, colony: List[Individual]) -> Optional[Sequence[float]]:
        return self.evaluate(colony)


EvaluatorLike = Union[ColonyEvaluator, Callable[[List[Individual]], Optional[Sequence[float]]]]


def apply_scores(colony: List[Individual], scores: Optional[Sequence[float]]) -> None:
    """Write returned scores onto the colony; None means already written."""
    if scores is None:
        return

    scores = list(scores)
    if len(scores) != len(colony):
        raise EvaluatorContractError(
            f"Evaluator returned {len(scores)} scores for a colony of {len(colony)}"
        )

    for individual, score in zip(colony, scores):
        individual.fitness_score = float(score)


class GeneSumFitness(ColonyEvaluator):
    """
    Example game: fitness is the scaled sum of all genes.

    Selects for genomes whose genes all drift towards 1.0.
    """

    def __init__(self, scale: float = 100000.0):
        self.scale = scale

    def evaluate(self, colony: List[Individual]) -> None:
        for individual in colony:
            individual.fitness_score = float(np.sum(individual.genome)) * self.scale
