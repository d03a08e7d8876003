"""
Module kinds define the local reaction of each node to a pulse.

The set of kinds is closed:
- Broadcast: stateless, forwards every pulse unchanged
- FlipFlop: toggles on low pulses, ignores high pulses
- Conjunction: remembers the last value from each input, emits low
  only when every remembered value is high

A kind never enqueues anything itself. receive() returns the value the
module emits to all of its destinations, or None when it stays silent.
The scheduler owns the queue.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Protocol

from pulsesim.core.pulses import LOW


FLIP_FLOP_MARKER = "%"
CONJUNCTION_MARKER = "&"


class ModuleKind(Protocol):
    """Protocol for module kinds."""

    def receive(self, source: str | None, value: bool) -> bool | None:
        """
        React to one pulse.

        Args:
            source: Name of the sending module (None for the button)
            value: LOW (False) or HIGH (True)

        Returns:
            Value emitted to every destination, or None for no output
        """
        ...

    def copy(self) -> "ModuleKind":
        """Return an independent copy carrying the same state."""
        ...


@dataclass
class Broadcast:
    """Stateless relay: every received value goes out unchanged."""

    def receive(self, source: str | None, value: bool) -> bool | None:
        return value

    def copy(self) -> "Broadcast":
        return Broadcast()


@dataclass
class FlipFlop:
    """
    Two-state module, initially off.

    A high pulse is discarded: no state change, no output.
    A low pulse toggles the state and the new state is emitted.
    """

    state: bool = False

    def receive(self, source: str | None, value: bool) -> bool | None:
        if value:
            return None
        self.state = not self.state
        return self.state

    def copy(self) -> "FlipFlop":
        return FlipFlop(state=self.state)


@dataclass
class Conjunction:
    """
    Remembers the most recent value received from each input.

    The key set of `remembered` is fixed when the graph is built and
    equals the set of modules with an edge into this one. Memory is
    updated for every pulse, low or high. With an empty table the
    all-high condition holds vacuously and the module emits low.
    """

    remembered: dict[str, bool] = field(default_factory=dict)

    @classmethod
    def with_inputs(cls, inputs: Iterable[str]) -> "Conjunction":
        return cls(remembered={name: LOW for name in inputs})

    @property
    def inputs(self) -> frozenset[str]:
        return frozenset(self.remembered)

    def receive(self, source: str | None, value: bool) -> bool | None:
        if source is not None:
            if source not in self.remembered:
                raise KeyError(f"conjunction has no input from {source!r}")
            self.remembered[source] = value
        return not all(self.remembered.values())

    def copy(self) -> "Conjunction":
        return Conjunction(remembered=dict(self.remembered))


@dataclass
class Module:
    """A named node: its kind (with state) and its ordered destinations."""

    name: str
    kind: ModuleKind
    destinations: tuple[str, ...]

    def copy(self) -> "Module":
        return Module(self.name, self.kind.copy(), self.destinations)


def create_kind(marker: str | None, inputs: Iterable[str] = ()) -> ModuleKind:
    """
    Factory for module kinds.

    Args:
        marker: None or "" for broadcast, "%" for flip-flop, "&" for conjunction
        inputs: Names of modules with an edge into this one (conjunctions only)

    Raises:
        ValueError: Unknown marker
    """
    if not marker:
        return Broadcast()
    if marker == FLIP_FLOP_MARKER:
        return FlipFlop()
    if marker == CONJUNCTION_MARKER:
        return Conjunction.with_inputs(inputs)
    raise ValueError(f"Unknown module marker: {marker!r}")
