"""
colony_evo/services/controller.py

The generation loop.

The controller drives a run:
1. Creates the founder population
2. Evaluates it concurrently, colony by colony
3. Hands the scored generation to the reporting sink
4. Breeds the next generation
5. Repeats 2-4 for exactly `num_generations` rounds

The population bred in the last round is never evaluated or reported.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import numpy as np

from colony_evo.core.config import ConfigurationError, EvolutionConfig
from colony_evo.core.population import Population
from colony_evo.evolution.breeding import GenerationBreeder
from colony_evo.evolution.fitness import EvaluatorLike, GeneSumFitness

from .dispatcher import ColonyDispatcher
from .reporting import GenerationReporter, StreamReporter

logger = logging.getLogger(__name__)


class EvolutionController:
    """
    Orchestrates evaluate -> report -> breed for a fixed number of rounds.

    All randomness flows from one seeded generator owned here.
    """

    def __init__(
        self,
        config: EvolutionConfig,
        evaluator: EvaluatorLike,
        reporter: GenerationReporter | None = None,
    ):
        self.config = config
        self.reporter = reporter or StreamReporter()

        # Initialize RNG
        self.rng = np.random.default_rng(config.seed)

        self.dispatcher = ColonyDispatcher(
            evaluator,
            num_colonies=config.num_colonies,
            individuals_per_colony=config.individuals_per_colony,
            max_workers=config.max_workers,
        )
        self.breeder = GenerationBreeder(config, self.rng)

        # State tracking
        self.population: Population | None = None
        self.generation = 0
        self.history: list[dict[str, Any]] = []

        # Status
        self.running = False
        self.start_time: float | None = None

        logger.info(
            f"Controller initialized: {config.num_colonies} colonies x "
            f"{config.individuals_per_colony} individuals, {config.num_genes} genes"
        )

    def initialize(self) -> Population:
        """Create generation 0 from random founders."""
        self.population = Population.random(
            self.config.population_size,
            self.config.num_genes,
            self.rng,
        )
        self.generation = 0
        self.history = []
        return self.population

    def step(self) -> dict[str, Any]:
        """
        Execute one generation: evaluate, report, breed.

        Returns generation statistics.
        """
        if self.population is None:
            self.initialize()

        gen_start = time.time()

        evaluated = self.dispatcher.evaluate(self.population)
        self.reporter.report(evaluated, self.generation)
        self.population = self.breeder.breed(evaluated)

        gen_time = time.time() - gen_start

        stats = {
            "generation": self.generation,
            "population_size": len(evaluated),
            "colonies_completed": self.dispatcher.completed_colonies,
            "generation_time": gen_time,
            **evaluated.fitness_summary(),
        }
        self.history.append(stats)

        logger.info(
            f"Generation {self.generation}: "
            f"best {stats['best_fitness']:.4f}, "
            f"mean {stats['mean_fitness']:.4f}, "
            f"worst {stats['worst_fitness']:.4f} "
            f"({gen_time:.3f}s)"
        )

        self.generation += 1
        return stats

    def run(self, generations: int | None = None) -> dict[str, Any]:
        """
        Run evolution for the configured number of generations.

        Args:
            generations: Override of config.num_generations

        Returns:
            Final statistics
        """
        generations = self.config.num_generations if generations is None else generations
        if generations < 0:
            raise ConfigurationError(f"generations must be non-negative, got {generations}")

        self.initialize()
        self.running = True
        self.start_time = time.time()

        logger.info(f"Starting evolution for {generations} generations")

        try:
            for _ in range(generations):
                self.step()
        finally:
            self.running = False

        total_time = time.time() - self.start_time
        best_fitness = max((s["best_fitness"] for s in self.history), default=0.0)

        logger.info(
            f"Evolution complete: {self.generation} generations, "
            f"best fitness: {best_fitness:.4f}"
        )

        return {
            "total_generations": self.generation,
            "total_evaluations": self.generation * self.config.population_size,
            "total_time": total_time,
            "best_fitness": best_fitness,
        }

    def get_status(self) -> dict[str, Any]:
        """Get current controller status."""
        elapsed = 0.0
        if self.start_time:
            elapsed = time.time() - self.start_time

        return {
            "running": self.running,
            "generation": self.generation,
            "population_size": self.config.population_size,
            "num_colonies": self.config.num_colonies,
            "elapsed_time": elapsed,
        }


def run_from_args(argv: list[str] | None = None) -> dict[str, Any]:
    """
    Parse command-line flags, run the example gene-sum game, return final stats.

    Command-line flags override values loaded from --config.
    """
    import argparse

    parser = argparse.ArgumentParser(description="Colony evolution")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    parser.add_argument("--colonies", type=int, default=None)
    parser.add_argument("--colony-size", type=int, default=None)
    parser.add_argument("--genes", type=int, default=None)
    parser.add_argument("--generations", type=int, default=None)
    parser.add_argument("--children", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--log-level", default="INFO")

    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        base = EvolutionConfig.from_yaml(args.config) if args.config else EvolutionConfig()
    except ConfigurationError as e:
        parser.error(str(e))

    overrides = {
        "num_colonies": args.colonies,
        "individuals_per_colony": args.colony_size,
        "num_genes": args.genes,
        "num_generations": args.generations,
        "children_per_generation": args.children,
        "seed": args.seed,
        "max_workers": args.workers,
    }
    data = base.to_dict()
    data.update({k: v for k, v in overrides.items() if v is not None})
    if args.children is not None:
        # Winners always follow an overridden children count
        data["winners_per_generation"] = None

    try:
        config = EvolutionConfig.from_dict(data)
    except ConfigurationError as e:
        parser.error(str(e))

    controller = EvolutionController(config, GeneSumFitness())
    return controller.run()


def run_controller(argv: list[str] | None = None) -> None:
    """
    Run the controller as a standalone program.

    This is the entry point for the `colony-evo` console script.
    """
    run_from_args(argv)


if __name__ == "__main__":
    run_controller()
