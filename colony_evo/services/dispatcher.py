"""
colony_evo/services/dispatcher.py

Concurrent colony evaluation.

The population is cut into contiguous colonies and each colony is handed
to the evaluator on its own worker thread. Colonies never overlap, so no
locking is needed when fitness is written. The dispatcher then waits for
every colony to finish before returning: a barrier, not a stream.

There is no timeout. A colony that never finishes stalls the run.
"""

from __future__ import annotations
from concurrent.futures import ALL_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import List, Optional
import logging
import time

from colony_evo.core.individual import Individual
from colony_evo.core.population import Population
from colony_evo.evolution.fitness import EvaluatorLike, apply_scores

logger = logging.getLogger(__name__)


class ColonyDispatcher:
    """Fan-out/fan-in of one evaluator call per colony."""

    def __init__(
        self,
        evaluator: EvaluatorLike,
        num_colonies: int,
        individuals_per_colony: int,
        max_workers: Optional[int] = None,
    ):
        if not callable(evaluator):
            raise TypeError(f"Evaluator must be callable, got {type(evaluator).__name__}")

        self.evaluator = evaluator
        self.num_colonies = num_colonies
        self.individuals_per_colony = individuals_per_colony
        self.max_workers = max_workers or num_colonies

        # Completion signals received during the last evaluate() call
        self.completed_colonies = 0

    def _run_colony(self, index: int, colony: List[Individual]) -> int:
        start = time.time()
        scores = self.evaluator(colony)
        apply_scores(colony, scores)
        logger.debug(f"Colony {index} evaluated in {time.time() - start:.4f}s")
        return index

    def evaluate(self, population: Population) -> Population:
        """
        Score every individual, one concurrent task per colony.

        Fitness is written in place and the same population is returned.
        If any evaluator raises, the first failure (in colony order) is
        re-raised once all colonies have finished.
        """
        colonies = population.colonies(self.num_colonies, self.individuals_per_colony)
        self.completed_colonies = 0

        with ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="colony",
        ) as executor:
            futures: List[Future] = [
                executor.submit(self._run_colony, index, colony)
                for index, colony in enumerate(colonies)
            ]
            done, _ = wait(futures, return_when=ALL_COMPLETED)

        self.completed_colonies = len(done)

        failures = [f.exception() for f in futures if f.exception() is not None]
        if failures:
            logger.error(f"{len(failures)} of {len(colonies)} colonies failed evaluation")
            raise failures[0]

        return population
