"""
Plots of per-press recordings.

- Low/high pulse counts per press (and running totals)
- Feeder firing timelines: one row per edge, one mark per low firing

All plots use matplotlib and return (fig, ax) so callers can compose them.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Mapping

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

if TYPE_CHECKING:
    from pulsesim.analysis.history import PressHistory


COLOR_LOW = "#2b4c7e"   # deep blue
COLOR_HIGH = "#d1495b"  # red


def plot_press_counts(
    history: "PressHistory",
    title: str = "Pulses per Press",
    cumulative: bool = False,
    ax: Axes | None = None,
    figsize: tuple[float, float] = (10, 5),
) -> tuple[Figure, Axes]:
    """
    Plot low and high pulse counts for each press.

    Args:
        history: Recorded per-press counts
        title: Plot title
        cumulative: Plot running totals instead of per-press counts
        ax: Existing axes (creates new figure if None)
        figsize: Figure size if creating new figure

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    presses = np.arange(1, history.presses + 1)
    if cumulative:
        low, high = history.cumulative()
    else:
        low, high = history.low, history.high

    ax.plot(presses, low, color=COLOR_LOW, linewidth=1.2, label="low")
    ax.plot(presses, high, color=COLOR_HIGH, linewidth=1.2, label="high")

    ax.set_title(title)
    ax.set_xlabel("press")
    ax.set_ylabel("total pulses" if cumulative else "pulses")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)

    return fig, ax


def plot_feeder_firings(
    firings: Mapping[tuple[str, str], np.ndarray],
    presses: int,
    periods: Mapping[tuple[str, str], int] | None = None,
    title: str = "Feeder Low Pulses",
    figsize: tuple[float, float] = (10, 4),
) -> tuple[Figure, Axes]:
    """
    Timeline of low firings, one row per feeder edge.

    Args:
        firings: edge -> 1-based press indices where it fired low
        presses: Length of the recorded range (x-axis extent)
        periods: Optional edge -> period, shown in the row label
        title: Plot title

    Returns:
        (fig, ax) tuple
    """
    fig, ax = plt.subplots(figsize=figsize)

    labels = []
    for row, (edge, fired) in enumerate(firings.items()):
        fired = np.asarray(fired)
        ax.scatter(fired, np.full(len(fired), row), marker="|", s=200, color=COLOR_LOW)
        label = f"{edge[0]} -> {edge[1]}"
        if periods is not None and edge in periods:
            label += f"  (T={periods[edge]})"
        labels.append(label)

    ax.set_yticks(range(len(labels)))
    ax.set_yticklabels(labels)
    ax.set_xlim(0, presses + 1)
    ax.set_ylim(-0.5, len(labels) - 0.5)
    ax.set_title(title)
    ax.set_xlabel("press")
    ax.grid(True, axis="x", alpha=0.3)

    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file, creating the parent directory."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
