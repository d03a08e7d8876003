"""
Pulses and the pulse queue for the propagation engine.

A pulse is one low/high signal travelling along one edge. Every press
produces a burst of pulses that are delivered in strict arrival order
across the whole network: a single global FIFO, not one queue per module.

This ordering is observable in networks with feedback, so the queue
exposes nothing but append-to-back and pop-from-front.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass


LOW = False
HIGH = True

# Source of the externally injected button pulse
BUTTON = None


@dataclass(frozen=True)
class Pulse:
    """
    A pulse sent from one module to a destination.

    source is None for the button pulse that starts every press.
    """

    source: str | None
    value: bool  # LOW (False) or HIGH (True)
    destination: str

    @property
    def is_low(self) -> bool:
        return not self.value

    def matches(self, edge: tuple[str, str]) -> bool:
        """True when this is a low pulse travelling along edge=(from, to)."""
        return self.is_low and (self.source, self.destination) == tuple(edge)


class PulseQueue:
    """
    Global FIFO of pending pulses.

    Also counts how many pulses have been pushed and popped so the
    scheduler can enforce a per-press budget.
    """

    def __init__(self, seed: Pulse | None = None):
        self._pending: deque[Pulse] = deque()
        self.enqueued = 0
        self.processed = 0
        if seed is not None:
            self.push(seed)

    def push(self, pulse: Pulse):
        self._pending.append(pulse)
        self.enqueued += 1

    def broadcast(self, source: str, value: bool, destinations: tuple[str, ...]):
        """Enqueue the same value from source to every destination, in order."""
        for destination in destinations:
            self.push(Pulse(source, value, destination))

    def pop(self) -> Pulse:
        pulse = self._pending.popleft()
        self.processed += 1
        return pulse

    def __len__(self) -> int:
        return len(self._pending)

    def __bool__(self) -> bool:
        return bool(self._pending)
