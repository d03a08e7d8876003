"""
Analysis layer: questions answered by running the engine repeatedly.

IMPORTANT: The engine never sees this layer. One-way dependency only.

- count_pulses: low * high totals over N presses
- CycleAnalyzer / find_combined_period: feeder periods combined by LCM
- record_presses / record_edge_lows: per-press numpy recordings for plots
"""

from pulsesim.analysis.cycles import (
    CycleAnalyzer,
    CycleAnalyzerConfig,
    PeriodNotFoundError,
    count_pulses,
    find_period,
    find_combined_period,
    lcm_of,
)
from pulsesim.analysis.history import (
    PressHistory,
    record_presses,
    record_edge_lows,
    is_periodic_from_start,
)

__all__ = [
    "CycleAnalyzer",
    "CycleAnalyzerConfig",
    "PeriodNotFoundError",
    "count_pulses",
    "find_period",
    "find_combined_period",
    "lcm_of",
    "PressHistory",
    "record_presses",
    "record_edge_lows",
    "is_periodic_from_start",
]
