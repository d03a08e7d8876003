"""
Pytest configuration and shared fixtures.

Every fixture builds a fresh graph, so tests never share module state.
"""

import pytest


SAMPLE_SIMPLE = """
broadcaster -> a, b, c
%a -> b
%b -> c
%c -> inv
&inv -> a
"""

SAMPLE_FEEDBACK = """
broadcaster -> a
%a -> inv, con
&inv -> b
%b -> con
&con -> output
"""

# Mod-3 counter (b0, b1, hub) and mod-4 counter (c0, c1) feeding join -> rx
TWO_COUNTERS = """
broadcaster -> b0, c0
%b0 -> b1, hub
%b1 -> hub
&hub -> b0, join
%c0 -> c1
%c1 -> join
&join -> rx
"""


@pytest.fixture
def simple_graph():
    """The four-module sample network."""
    from pulsesim.core import parse_graph
    return parse_graph(SAMPLE_SIMPLE)


@pytest.fixture
def feedback_graph():
    """Sample network with two conjunctions and a sink."""
    from pulsesim.core import parse_graph
    return parse_graph(SAMPLE_FEEDBACK)


@pytest.fixture
def two_counter_graph():
    """Two independent counters with periods 3 and 4."""
    from pulsesim.core import parse_graph
    return parse_graph(TWO_COUNTERS)


@pytest.fixture
def two_counter_feeders():
    return [("hub", "join"), ("c1", "join")]


@pytest.fixture
def two_counter_text():
    return TWO_COUNTERS
