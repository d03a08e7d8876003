"""
Visualization utilities.

- Per-press pulse counts
- Feeder firing timelines
"""

from pulsesim.viz.pulses import (
    plot_press_counts,
    plot_feeder_firings,
    save_figure,
)

__all__ = [
    "plot_press_counts",
    "plot_feeder_firings",
    "save_figure",
]
