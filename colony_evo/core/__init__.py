"""
Core components of the colony_evo system.

- individual: one candidate solution and its textual record
- population: an ordered generation and its two orderings
- config: the immutable, validated shape of a run
"""

from .config import ConfigurationError, EvolutionConfig
from .individual import FOUNDER_PARENTS, Individual, new_id
from .population import Population, random_order

__all__ = [
    "ConfigurationError",
    "EvolutionConfig",
    "FOUNDER_PARENTS",
    "Individual",
    "new_id",
    "Population",
    "random_order",
]
