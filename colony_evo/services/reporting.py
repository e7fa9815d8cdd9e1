"""
colony_evo/services/reporting.py

Generation reporting sinks.

A sink is called once per generation, after evaluation and before
breeding, with the scored population and the generation index.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, TextIO
import sys

from colony_evo.core.population import Population


class GenerationReporter(ABC):
    """Abstract base for generation sinks."""

    @abstractmethod
    def report(self, population: Population, generation: int) -> None:
        pass


class StreamReporter(GenerationReporter):
    """
    Writes each generation as text.

    A `Generation <n>` header line, then one record per individual.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so a redirected sys.stdout is honoured
        return self._stream if self._stream is not None else sys.stdout

    def report(self, population: Population, generation: int) -> None:
        out = self.stream
        out.write(f"Generation {generation}\n")
        for record in population.to_records():
            out.write(record + "\n")
        out.flush()


class MemoryReporter(GenerationReporter):
    """Keeps every generation's records in memory, keyed by generation."""

    def __init__(self):
        self.generations: Dict[int, List[str]] = {}

    def report(self, population: Population, generation: int) -> None:
        self.generations[generation] = population.to_records()

    def snapshot(self, generation: int) -> Population:
        """Rebuild a reported generation from its records."""
        return Population.from_records(self.generations[generation])
