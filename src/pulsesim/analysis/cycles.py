"""
Cycle analysis: the two questions asked of a pulse network.

1. Bulk counting: press N times on one graph, multiply total lows by
   total highs.
2. Combined period: for each feeder edge, count presses from the initial
   state until the edge first carries a low pulse, then combine the
   periods by least common multiple.

The period search assumes each feeder fires low periodically from press 1
with no warm-up, and that its first firing press equals its period. That
is a property of the network being analysed; nothing here checks it.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

import numpy as np

from pulsesim.core.scheduler import Edge, PulseScheduler, SchedulerConfig

if TYPE_CHECKING:
    from pulsesim.core.graph import ModuleGraph

logger = logging.getLogger(__name__)


class PeriodNotFoundError(RuntimeError):
    """Raised when a feeder edge does not fire low within the press budget."""


@dataclass
class CycleAnalyzerConfig:
    """Configuration for cycle analysis."""

    max_presses: int | None = 1_000_000  # Period search budget; None = unbounded
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)


def lcm_of(values: Sequence[int]) -> int:
    """Least common multiple of positive integers."""
    if len(values) == 0:
        raise ValueError("need at least one value")
    # Python ints: exact past 2**64
    arr = np.asarray([int(v) for v in values], dtype=object)
    if np.any(arr <= 0):
        raise ValueError("periods must be positive")
    return int(np.lcm.reduce(arr))


@dataclass
class CycleAnalyzer:
    """
    Runs repeated presses to count pulses and discover feeder periods.

    Every period search starts from a fresh copy of the graph it is given,
    so trials never share module state. periods records what was found
    by the last find_combined_period() call, keyed by edge.
    """

    config: CycleAnalyzerConfig = field(default_factory=CycleAnalyzerConfig)

    periods: dict[Edge, int] = field(default_factory=dict, init=False)

    def count_pulses(self, graph: "ModuleGraph", presses: int) -> int:
        """
        Press `presses` times on the same mutable graph; state persists
        between presses. Returns total_low * total_high.
        """
        if presses < 0:
            raise ValueError(f"presses must be >= 0 (got {presses})")

        # Full drains only: a short-circuit would leave partial totals
        cfg = self.config.scheduler
        scheduler = PulseScheduler(
            SchedulerConfig(
                entry=cfg.entry,
                short_circuit=False,
                max_pulses_per_press=cfg.max_pulses_per_press,
            )
        )
        stats = scheduler.run(graph, presses)
        logger.debug(
            "%d presses: low=%d high=%d", presses, stats["total_low"], stats["total_high"]
        )
        return stats["product"]

    def find_period(self, graph: "ModuleGraph", target_edge: Edge, entry: str | None = None) -> int:
        """
        Count presses until target_edge first carries a low pulse.

        Operates on `graph` directly; pass an isolated copy.

        Args:
            graph: Network in its initial state
            target_edge: (from, to) edge to watch
            entry: Module receiving the button pulse (defaults to the config's)

        Raises:
            PeriodNotFoundError: Not fired within config.max_presses
        """
        cfg = self.config.scheduler
        scheduler = PulseScheduler(
            SchedulerConfig(
                entry=entry or cfg.entry,
                short_circuit=True,
                max_pulses_per_press=cfg.max_pulses_per_press,
            )
        )
        target_edge = tuple(target_edge)
        limit = self.config.max_presses

        presses = 0
        while limit is None or presses < limit:
            presses += 1
            if scheduler.press(graph, target=target_edge).target_fired:
                logger.info("edge %s->%s fires low at press %d", *target_edge, presses)
                return presses

        raise PeriodNotFoundError(
            f"edge {target_edge[0]}->{target_edge[1]} did not fire low within {limit} presses"
        )

    def find_combined_period(
        self,
        graph: "ModuleGraph",
        feeder_edges: Sequence[Edge],
        entry: str | None = None,
    ) -> int:
        """
        Period of each feeder on its own copy of graph, combined by LCM.

        graph itself is never mutated.
        """
        if not feeder_edges:
            raise ValueError("feeder_edges must not be empty")

        self.periods = {}
        for edge in feeder_edges:
            edge = tuple(edge)
            self.periods[edge] = self.find_period(graph.copy(), edge, entry=entry)

        combined = lcm_of(list(self.periods.values()))
        logger.info("combined period of %d feeders: %d", len(self.periods), combined)
        return combined


def count_pulses(graph: "ModuleGraph", presses: int) -> int:
    """Product of total low and total high pulses over `presses` presses."""
    return CycleAnalyzer().count_pulses(graph, presses)


def find_period(graph: "ModuleGraph", target_edge: Edge, entry: str | None = None) -> int:
    """Presses until target_edge first fires low, starting from graph's state."""
    return CycleAnalyzer().find_period(graph, target_edge, entry=entry)


def find_combined_period(graph: "ModuleGraph", feeder_edges: Sequence[Edge]) -> int:
    """LCM of the feeder periods, each found on an isolated copy of graph."""
    return CycleAnalyzer().find_combined_period(graph, feeder_edges)
