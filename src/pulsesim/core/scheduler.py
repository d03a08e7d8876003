"""
Pulse Scheduler: the discrete-event engine.

One press:
1. Seed the queue with a single low pulse from the button to the entry
   module (normally "broadcaster")
2. Pop pulses front to back, counting each by value
3. Deliver to the destination module; whatever it emits is appended to
   the back of the queue, one pulse per destination, in order
4. Stop when the queue is empty, or when the target edge carries a low
   pulse and short-circuiting is on

The global FIFO gives wave semantics: every module reacts to the pulses
of one wave before anything reacts to the consequences of that wave.
This order is part of the contract and is observable through feedback
loops.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Union

from pulsesim.core.pulses import BUTTON, LOW, Pulse, PulseQueue

if TYPE_CHECKING:
    from pulsesim.core.graph import ModuleGraph

logger = logging.getLogger(__name__)

Edge = tuple[str, str]


class PulseLimitExceeded(RuntimeError):
    """Raised when one press processes more pulses than the configured cap."""


@dataclass
class SchedulerConfig:
    """Configuration for the pulse scheduler."""

    entry: str = "broadcaster"              # Module receiving the button pulse
    short_circuit: bool = True              # Stop a press as soon as the target fires
    max_pulses_per_press: int | None = 10_000_000  # None disables the cap


@dataclass(frozen=True)
class DrainedPress:
    """A press that ran until the queue was empty. Counts are complete."""

    low_count: int
    high_count: int
    target_fired: bool = False

    @property
    def complete(self) -> bool:
        return True


@dataclass(frozen=True)
class InterruptedPress:
    """
    A press stopped early because the target edge carried a low pulse.

    The counts only cover pulses up to and including the match. They are
    named partial_* so they cannot be mistaken for press totals.
    """

    partial_low: int
    partial_high: int
    pulses_processed: int
    target: Edge

    @property
    def target_fired(self) -> bool:
        return True

    @property
    def complete(self) -> bool:
        return False


PressResult = Union[DrainedPress, InterruptedPress]


@dataclass
class PulseScheduler:
    """
    Runs button presses against a graph.

    The scheduler holds no network state; all state lives in the graph's
    modules. It does keep running totals over the drained presses it has
    processed.
    """

    config: SchedulerConfig = field(default_factory=SchedulerConfig)

    presses: int = field(default=0, init=False)
    total_low: int = field(default=0, init=False)
    total_high: int = field(default=0, init=False)

    def press(
        self,
        graph: "ModuleGraph",
        target: Edge | None = None,
        on_pulse: Callable[[Pulse], None] | None = None,
    ) -> PressResult:
        """
        Simulate one button press.

        Args:
            graph: Network to run; its module state is updated in place
            target: Optional (from, to) edge to watch for a low pulse
            on_pulse: Optional observer called with every pulse as it is dequeued

        Returns:
            DrainedPress, or InterruptedPress when the target matched and
            short-circuiting is enabled

        Raises:
            PulseLimitExceeded: The press did not settle within the cap
        """
        cfg = self.config
        if target is not None:
            target = tuple(target)
        queue = PulseQueue(Pulse(BUTTON, LOW, cfg.entry))
        counts = [0, 0]  # indexed by value: [low, high]
        target_fired = False

        while queue:
            pulse = queue.pop()
            counts[pulse.value] += 1

            if on_pulse is not None:
                on_pulse(pulse)

            if target is not None and pulse.matches(target):
                target_fired = True
                if cfg.short_circuit:
                    logger.debug(
                        "target %s->%s fired after %d pulses", target[0], target[1], queue.processed
                    )
                    return InterruptedPress(counts[0], counts[1], queue.processed, target)

            if cfg.max_pulses_per_press is not None and queue.processed > cfg.max_pulses_per_press:
                raise PulseLimitExceeded(
                    f"press did not settle within {cfg.max_pulses_per_press} pulses"
                )

            module = graph.get(pulse.destination)
            if module is None:
                continue  # sink

            emitted = module.kind.receive(pulse.source, pulse.value)
            if emitted is not None:
                queue.broadcast(module.name, emitted, module.destinations)

        self.presses += 1
        self.total_low += counts[0]
        self.total_high += counts[1]
        logger.debug("press %d drained: low=%d high=%d", self.presses, counts[0], counts[1])
        return DrainedPress(counts[0], counts[1], target_fired)

    def run(self, graph: "ModuleGraph", n_presses: int) -> dict:
        """Run n_presses full presses (no short-circuit) and return running statistics."""
        if n_presses < 0:
            raise ValueError(f"n_presses must be >= 0 (got {n_presses})")

        for _ in range(n_presses):
            self.press(graph)

        return {
            "n_presses": n_presses,
            "presses": self.presses,
            "total_low": self.total_low,
            "total_high": self.total_high,
            "product": self.total_low * self.total_high,
        }

    def reset_statistics(self):
        """Reset running totals (graph state is untouched)."""
        self.presses = 0
        self.total_low = 0
        self.total_high = 0
