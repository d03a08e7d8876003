"""
Text format for module networks.

One declaration per line:

    broadcaster -> a, b, c
    %a -> b
    &inv -> a

"%" marks a flip-flop, "&" a conjunction, no marker a broadcast module.
Blank lines are ignored.
"""

from __future__ import annotations
import re
from pathlib import Path

from pulsesim.core.graph import GraphBuildError, ModuleDeclaration, ModuleGraph


_LINE = re.compile(r"^(?P<marker>[%&]?)(?P<name>\w+)\s*->\s*(?P<dests>.+)$")
_NAME = re.compile(r"^\w+$")


def parse_modules(text: str) -> list[ModuleDeclaration]:
    """
    Parse a module list into declarations.

    Raises:
        GraphBuildError: A line does not match `[marker]name -> dest, ...`
    """
    declarations: list[ModuleDeclaration] = []
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        match = _LINE.match(line)
        if match is None:
            raise GraphBuildError(f"line {lineno}: cannot parse {line!r}")

        destinations = tuple(d.strip() for d in match["dests"].split(","))
        for d in destinations:
            if not _NAME.match(d):
                raise GraphBuildError(f"line {lineno}: bad destination name {d!r}")

        declarations.append(
            ModuleDeclaration(match["marker"] or None, match["name"], destinations)
        )
    return declarations


def parse_graph(text: str) -> ModuleGraph:
    """Parse and build in one step."""
    return ModuleGraph.build(parse_modules(text))


def load_graph(path: str | Path) -> ModuleGraph:
    """Load a module list from a UTF-8 file and build the graph."""
    path = Path(path)
    if not path.is_file():
        raise GraphBuildError(f"file not found: {path}")
    return parse_graph(path.read_text(encoding="utf-8"))
