"""
core/config.py

The fixed shape of a run.

Everything here is decided once, before the first generation is born,
and never changes afterwards. Invalid relationships between the counts
are rejected at construction time rather than discovered mid-run.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

import yaml

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when the run configuration is internally inconsistent."""


@dataclass(frozen=True)
class EvolutionConfig:
    """
    Immutable configuration for a generational run.

    The population is laid out as `num_colonies` contiguous colonies of
    `individuals_per_colony` members each.
    """
    num_colonies: int = 10
    individuals_per_colony: int = 10
    num_genes: int = 30
    num_generations: int = 10
    children_per_generation: int = 2
    winners_per_generation: Optional[int] = None   # Defaults to 2 x children
    mutation_rate: float = 0.01                    # Per-gene probability
    seed: Optional[int] = None                     # None = fresh entropy
    max_workers: Optional[int] = None              # None = one thread per colony

    def __post_init__(self):
        if self.winners_per_generation is None:
            object.__setattr__(
                self, "winners_per_generation", self.children_per_generation * 2
            )
        self.validate()

    @property
    def population_size(self) -> int:
        return self.num_colonies * self.individuals_per_colony

    @property
    def replication_factor(self) -> int:
        """How many copies of each unique child fill the next generation."""
        return self.population_size // self.children_per_generation

    def validate(self) -> None:
        """Raise ConfigurationError if the configuration cannot run."""
        for name in ("num_colonies", "individuals_per_colony", "num_genes",
                     "children_per_generation", "winners_per_generation"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")

        if not isinstance(self.num_generations, int) or self.num_generations < 0:
            raise ConfigurationError(
                f"num_generations must be a non-negative integer, got {self.num_generations!r}"
            )

        if self.winners_per_generation != self.children_per_generation * 2:
            raise ConfigurationError(
                f"winners_per_generation ({self.winners_per_generation}) must equal "
                f"2 x children_per_generation ({self.children_per_generation * 2})"
            )

        if self.winners_per_generation > self.population_size:
            raise ConfigurationError(
                f"winners_per_generation ({self.winners_per_generation}) exceeds "
                f"population size ({self.population_size})"
            )

        if self.population_size % self.children_per_generation != 0:
            raise ConfigurationError(
                f"population size ({self.population_size}) is not divisible by "
                f"children_per_generation ({self.children_per_generation})"
            )

        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ConfigurationError(
                f"mutation_rate must lie in [0, 1], got {self.mutation_rate!r}"
            )

        if self.max_workers is not None and self.max_workers <= 0:
            raise ConfigurationError(f"max_workers must be positive, got {self.max_workers!r}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EvolutionConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "EvolutionConfig":
        """
        Load configuration from a YAML file.

        Accepts either a flat mapping or one nested under an `evolution` key.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping in {path}, got {type(data).__name__}")

        if "evolution" in data:
            data = data["evolution"] or {}

        logger.debug(f"Loaded configuration from {path}: {data}")
        return cls.from_dict(data)
