#!/usr/bin/env python3
"""
Demo: Combined Period of Independent Feeders

Finds the first press on which every feeder of a convergence
conjunction fires low, when the feeders are independent periodic
sub-circuits:

1. The edges into the convergence conjunction are the feeders
2. Each feeder's period = first press at which it fires low
3. All feeders line up at the LCM of the periods

Without an argument a synthetic network with a mod-3 counter and a mod-4
counter feeding `join -> rx` is used (answer: 12).

When every input of the convergence conjunction is itself a single-input
conjunction (an inverter), the feeders are taken one level further up:
the edge into each inverter, which is where the low pulse appears.
Feeders can also be named explicitly as from:to pairs.

Usage: python demo/demo_feeder_periods.py [network.txt [sink [from:to ...]]]
Output: output/demo_feeder_periods/feeder_firings.png
"""

import logging
import sys
from pathlib import Path

import matplotlib.pyplot as plt

from pulsesim.core import Conjunction, load_graph, parse_graph
from pulsesim.analysis import CycleAnalyzer, record_edge_lows, is_periodic_from_start
from pulsesim.viz import plot_feeder_firings, save_figure


TWO_COUNTERS = """
broadcaster -> b0, c0
%b0 -> b1, hub
%b1 -> hub
&hub -> b0, join
%c0 -> c1
%c1 -> join
&join -> rx
"""


def _feeders_for_sink(graph, sink):
    """Convergence conjunction in front of sink, and the feeder edges behind it."""
    parents = graph.inputs_of(sink)
    if len(parents) != 1:
        raise SystemExit(f"expected exactly one module feeding {sink!r}, found {list(parents)}")
    convergence = parents[0]
    feeders = graph.feeder_edges(convergence)

    inverters = [
        src for src, _ in feeders
        if isinstance(graph[src].kind, Conjunction) and len(graph.inputs_of(src)) == 1
    ]
    if len(inverters) == len(feeders):
        feeders = [(graph.inputs_of(inv)[0], inv) for inv in inverters]
    return convergence, feeders


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    print("=" * 60)
    print("  COMBINED FEEDER PERIOD")
    print("=" * 60)

    if len(sys.argv) > 1:
        graph = load_graph(sys.argv[1])
        sink = sys.argv[2] if len(sys.argv) > 2 else "rx"
    else:
        graph = parse_graph(TWO_COUNTERS)
        sink = "rx"

    if len(sys.argv) > 3:
        feeders = [tuple(arg.split(":", 1)) for arg in sys.argv[3:]]
        print("\n1. Feeders given on the command line")
    else:
        convergence, feeders = _feeders_for_sink(graph, sink)
        print(f"\n1. Sink {sink!r} is fed by conjunction {convergence!r}")
    for edge in feeders:
        print(f"   feeder: {edge[0]} -> {edge[1]}")

    print("\n2. Searching for feeder periods...")
    analyzer = CycleAnalyzer()
    answer = analyzer.find_combined_period(graph, feeders)
    for edge, period in analyzer.periods.items():
        print(f"   {edge[0]:>6} -> {edge[1]:<6} period {period}")
    print(f"\n   LCM = {answer}")

    # Empirical look at the periodicity assumption over a short window
    window = min(3 * max(analyzer.periods.values()), 20_000)
    print(f"\n3. Recording feeder firings over {window} presses...")
    firings = {}
    for edge in feeders:
        firings[edge] = record_edge_lows(graph.copy(), edge, window)
        periodic = is_periodic_from_start(firings[edge], analyzer.periods[edge], window)
        print(f"   {edge[0]} -> {edge[1]}: {len(firings[edge])} firings, periodic={periodic}")

    print("\n4. Creating visualization...")
    fig, _ = plot_feeder_firings(firings, window, periods=analyzer.periods)
    output_path = Path("output/demo_feeder_periods/feeder_firings.png")
    save_figure(fig, output_path)
    plt.close(fig)
    print(f"\n   Saved: {output_path}")

    print("\n" + "=" * 60)
    print("  Period analysis complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
