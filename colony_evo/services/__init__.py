"""
colony_evo/services/

Running a generational loop.

Architecture:
- Dispatcher: evaluates colonies concurrently and joins on all of them
- Reporting: sinks that receive each scored generation
- Controller: owns the RNG and drives evaluate -> report -> breed
"""

from .controller import EvolutionController, run_controller
from .dispatcher import ColonyDispatcher
from .reporting import GenerationReporter, MemoryReporter, StreamReporter

__all__ = [
    "EvolutionController",
    "run_controller",
    "ColonyDispatcher",
    "GenerationReporter",
    "MemoryReporter",
    "StreamReporter",
]
