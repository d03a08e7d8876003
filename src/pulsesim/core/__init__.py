"""
Core engine primitives.

This layer knows NOTHING about periods, feeders or least common multiples.
It only knows:
- Modules with local state (broadcast, flip-flop, conjunction)
- Pulses and the single global FIFO they travel through
- The static graph of names and destinations
- Running one button press to quiescence

Everything derived from repeated presses lives in the analysis layer.
"""

from pulsesim.core.pulses import LOW, HIGH, Pulse, PulseQueue
from pulsesim.core.modules import (
    Broadcast,
    FlipFlop,
    Conjunction,
    Module,
    ModuleKind,
    create_kind,
)
from pulsesim.core.graph import BROADCASTER, GraphBuildError, ModuleDeclaration, ModuleGraph
from pulsesim.core.parser import parse_modules, parse_graph, load_graph
from pulsesim.core.scheduler import (
    DrainedPress,
    InterruptedPress,
    PressResult,
    PulseLimitExceeded,
    PulseScheduler,
    SchedulerConfig,
)

__all__ = [
    "LOW",
    "HIGH",
    "Pulse",
    "PulseQueue",
    "Broadcast",
    "FlipFlop",
    "Conjunction",
    "Module",
    "ModuleKind",
    "create_kind",
    "BROADCASTER",
    "GraphBuildError",
    "ModuleDeclaration",
    "ModuleGraph",
    "parse_modules",
    "parse_graph",
    "load_graph",
    "DrainedPress",
    "InterruptedPress",
    "PressResult",
    "PulseLimitExceeded",
    "PulseScheduler",
    "SchedulerConfig",
]
