"""
colony_evo/evolution/

Generational breeding and fitness evaluation.

Evaluation is embarrassingly parallel across colonies; everything else
(selection, pairing, mating, replication) happens in one thread.
"""

from .breeding import GenerationBreeder
from .fitness import (
    ColonyEvaluator,
    EvaluatorContractError,
    EvaluatorLike,
    GeneSumFitness,
    apply_scores,
)
from .genome import DEFAULT_MUTATION_RATE, mate, recombine

__all__ = [
    "GenerationBreeder",
    "ColonyEvaluator",
    "EvaluatorContractError",
    "EvaluatorLike",
    "GeneSumFitness",
    "apply_scores",
    "DEFAULT_MUTATION_RATE",
    "mate",
    "recombine",
]
