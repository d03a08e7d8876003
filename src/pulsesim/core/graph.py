"""
ModuleGraph: the static network of named modules.

The graph stores ONLY engine primitives:
- One Module per declared name (kind + mutable state + ordered destinations)
- The reverse adjacency, computed once at build time

It does NOT know about presses, periods or feeders.

Names that appear as a destination but are never declared are sinks:
they receive and count pulses but never propagate.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from pulsesim.core.modules import (
    CONJUNCTION_MARKER,
    FLIP_FLOP_MARKER,
    Conjunction,
    Module,
    create_kind,
)

logger = logging.getLogger(__name__)

BROADCASTER = "broadcaster"

VALID_MARKERS = {None, "", FLIP_FLOP_MARKER, CONJUNCTION_MARKER}


class GraphBuildError(ValueError):
    """Raised when a module list cannot be turned into a graph."""


@dataclass(frozen=True)
class ModuleDeclaration:
    """One parsed module line: optional kind marker, name, destinations."""

    marker: str | None
    name: str
    destinations: tuple[str, ...]

    @classmethod
    def coerce(cls, raw) -> "ModuleDeclaration":
        """Accept a ModuleDeclaration or a plain (marker, name, destinations) triple."""
        if isinstance(raw, ModuleDeclaration):
            return raw
        try:
            marker, name, destinations = raw
        except (TypeError, ValueError) as e:
            raise GraphBuildError(
                f"declaration must be a (marker, name, destinations) triple: {raw!r}"
            ) from e
        if isinstance(destinations, str):
            raise GraphBuildError(
                f"destinations of {name!r} must be a sequence of names, not a string"
            )
        return cls(marker, name, tuple(destinations))


class ModuleGraph:
    """
    The network's structure and state.

    Mutation happens only through module kinds while the scheduler drains
    its queue. Use copy() before any trial that must start from the
    current state without disturbing it.
    """

    def __init__(self, modules: dict[str, Module], inputs: dict[str, tuple[str, ...]]):
        self.modules = modules
        self._inputs = inputs

    @classmethod
    def build(cls, declarations: Iterable) -> "ModuleGraph":
        """
        Build a graph from module declarations.

        Conjunction memory is pre-populated from the reverse adjacency in
        a single pass over every declared edge, so each conjunction's key
        set is fixed before any pulse is processed.

        Args:
            declarations: ModuleDeclaration objects or (marker, name, destinations)
                          triples. marker is None/"" (broadcast), "%" or "&".

        Raises:
            GraphBuildError: Malformed declaration list
        """
        decls = [ModuleDeclaration.coerce(raw) for raw in declarations]
        _validate(decls)

        # Reverse adjacency: destination -> sources, in declaration order
        inputs: dict[str, list[str]] = {}
        for decl in decls:
            for destination in decl.destinations:
                inputs.setdefault(destination, []).append(decl.name)

        modules: dict[str, Module] = {}
        for decl in decls:
            kind = create_kind(decl.marker, inputs.get(decl.name, ()))
            modules[decl.name] = Module(decl.name, kind, decl.destinations)

        graph = cls(modules, {name: tuple(srcs) for name, srcs in inputs.items()})
        logger.debug(
            "built graph: %d modules, %d edges, %d sinks",
            len(modules), sum(len(m.destinations) for m in modules.values()), len(graph.sinks),
        )
        return graph

    def __contains__(self, name: str) -> bool:
        return name in self.modules

    def __getitem__(self, name: str) -> Module:
        return self.modules[name]

    def __len__(self) -> int:
        return len(self.modules)

    def get(self, name: str) -> Module | None:
        """Module by name, or None for a sink / unknown name."""
        return self.modules.get(name)

    @property
    def names(self) -> list[str]:
        """Declared module names in declaration order."""
        return list(self.modules)

    @property
    def sinks(self) -> frozenset[str]:
        """Destination names that have no module of their own."""
        return frozenset(
            d for m in self.modules.values() for d in m.destinations if d not in self.modules
        )

    def inputs_of(self, name: str) -> tuple[str, ...]:
        """Modules with an edge into name, in declaration order."""
        return self._inputs.get(name, ())

    def edges(self) -> Iterator[tuple[str, str]]:
        """Every (source, destination) edge in declaration order."""
        for module in self.modules.values():
            for destination in module.destinations:
                yield module.name, destination

    def feeder_edges(self, convergence: str) -> list[tuple[str, str]]:
        """
        Edges into the conjunction `convergence`.

        Only names the candidate feeders. Whether they really are
        independent periodic sub-circuits is not checked.
        """
        module = self.get(convergence)
        if module is None or not isinstance(module.kind, Conjunction):
            raise ValueError(f"{convergence!r} is not a conjunction module")
        return [(source, convergence) for source in self.inputs_of(convergence)]

    def copy(self) -> "ModuleGraph":
        """Create an independent copy; no mutable state is shared."""
        return ModuleGraph(
            {name: module.copy() for name, module in self.modules.items()},
            dict(self._inputs),
        )


def _validate(decls: Sequence[ModuleDeclaration]):
    seen: set[str] = set()
    for decl in decls:
        if not isinstance(decl.name, str) or not decl.name.strip():
            raise GraphBuildError(f"module name must be a non-empty string: {decl.name!r}")
        if not isinstance(decl.marker, (str, type(None))) or decl.marker not in VALID_MARKERS:
            raise GraphBuildError(f"{decl.name}: unknown kind marker {decl.marker!r}")
        if decl.name in seen:
            raise GraphBuildError(f"duplicate module declaration: {decl.name}")
        seen.add(decl.name)
        if not decl.destinations:
            raise GraphBuildError(f"{decl.name}: module has no destinations")
        for destination in decl.destinations:
            if not isinstance(destination, str) or not destination.strip():
                raise GraphBuildError(
                    f"{decl.name}: destination must be a non-empty string: {destination!r}"
                )
        if decl.name == BROADCASTER and decl.marker:
            raise GraphBuildError(f"{BROADCASTER} must not carry a kind marker")

    if BROADCASTER not in seen:
        raise GraphBuildError(f"no {BROADCASTER} module declared")
