"""
Per-press recordings for inspection and plotting.

IMPORTANT: Recording is read-only with respect to the engine rules. It
runs ordinary full presses and observes the pulses as they go by.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from pulsesim.core.scheduler import Edge, PulseScheduler, SchedulerConfig

if TYPE_CHECKING:
    from pulsesim.core.graph import ModuleGraph
    from pulsesim.core.pulses import Pulse


@dataclass
class PressHistory:
    """Low and high pulse counts for each press, in press order."""

    low: np.ndarray   # [presses] int64
    high: np.ndarray  # [presses] int64

    @property
    def presses(self) -> int:
        return len(self.low)

    def totals(self) -> tuple[int, int]:
        return int(self.low.sum()), int(self.high.sum())

    def product(self) -> int:
        """Same quantity as count_pulses() over the recorded presses."""
        total_low, total_high = self.totals()
        return total_low * total_high

    def cumulative(self) -> tuple[np.ndarray, np.ndarray]:
        """Running totals after each press."""
        return np.cumsum(self.low), np.cumsum(self.high)


def record_presses(
    graph: "ModuleGraph",
    presses: int,
    config: SchedulerConfig | None = None,
) -> PressHistory:
    """
    Press `presses` times on graph (mutating it) and record each press's counts.
    """
    if presses < 0:
        raise ValueError(f"presses must be >= 0 (got {presses})")

    scheduler = PulseScheduler(config or SchedulerConfig())
    low = np.zeros(presses, dtype=np.int64)
    high = np.zeros(presses, dtype=np.int64)

    for i in range(presses):
        result = scheduler.press(graph)
        low[i] = result.low_count
        high[i] = result.high_count

    return PressHistory(low=low, high=high)


def record_edge_lows(
    graph: "ModuleGraph",
    edge: Edge,
    presses: int,
    config: SchedulerConfig | None = None,
) -> np.ndarray:
    """
    1-based indices of the presses during which `edge` carried a low pulse.

    Every press is fully drained, so state carries over exactly as in
    normal operation.
    """
    edge = tuple(edge)
    scheduler = PulseScheduler(config or SchedulerConfig())
    fired: list[int] = []
    seen = [False]

    def _watch(pulse: "Pulse"):
        if pulse.matches(edge):
            seen[0] = True

    for i in range(1, presses + 1):
        seen[0] = False
        scheduler.press(graph, on_pulse=_watch)
        if seen[0]:
            fired.append(i)

    return np.asarray(fired, dtype=np.int64)


def is_periodic_from_start(firings: np.ndarray, period: int, presses: int | None = None) -> bool:
    """
    Check that firings are exactly the multiples of period.

    Args:
        firings: 1-based press indices, as from record_edge_lows()
        period: Candidate period
        presses: Recorded range (defaults to the last firing)

    An empirical check over the recorded range only.
    """
    if period <= 0:
        raise ValueError("period must be positive")
    if presses is None:
        presses = int(firings.max()) if len(firings) else 0
    expected = np.arange(period, presses + 1, period, dtype=np.int64)
    return bool(np.array_equal(np.asarray(firings, dtype=np.int64), expected))
