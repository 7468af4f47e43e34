from __future__ import annotations

import json
import logging
import os
import sys
import tempfile
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from pydantic import TypeAdapter, ValidationError

from ._graph import Edge, Graph

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)

STDIO_PATH = Path("-")

_MAPPING_ADAPTER = TypeAdapter(dict[str, list[str]])


class ParseError(Exception):
    """Raised when an input document is malformed."""


class InputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_path(cls, path: Path) -> InputFormat:
        """Guess the input format from the file extension."""
        if path.suffix.lower() == ".json":
            return cls.JSON
        return cls.TEXT


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"
    DOT = "dot"

    @classmethod
    def from_path(cls, path: Path) -> OutputFormat:
        """Guess the output format from the file extension."""
        match path.suffix.lower():
            case ".json":
                return cls.JSON
            case ".dot":
                return cls.DOT
            case _:
                return cls.TEXT


class RankDir(StrEnum):
    """Graphviz rank direction."""

    TB = "TB"
    LR = "LR"
    BT = "BT"
    RL = "RL"


# =============================================================================
# Loading
# =============================================================================


def _parse_text_lines(lines: Iterable[str]) -> Iterator[Edge[str]]:
    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        parts = line.split(maxsplit=1)
        if len(parts) < 2:  # noqa: PLR2004
            msg = f"line {lineno}: expected 'source destination', got {line!r}"
            raise ParseError(msg)
        source, target = parts
        yield Edge(source, target.strip())


def load_text(stream: TextIO) -> Graph[str]:
    """Load a graph from `source destination` lines.

    The line is split at the first run of whitespace, so the destination
    may itself contain spaces. Empty lines are skipped.

    Raises:
        ParseError: If a line has fewer than two fields.

    """
    return Graph.from_edges(_parse_text_lines(stream))


def load_json(stream: TextIO) -> Graph[str]:
    """Load a graph from a JSON object mapping sources to destination lists.

    Raises:
        ParseError: If the document is not valid JSON of that shape.

    """
    try:
        mapping = _MAPPING_ADAPTER.validate_json(stream.read())
    except ValidationError as e:
        msg = f"can't load json: {e}"
        raise ParseError(msg) from e
    return Graph.from_mapping(mapping)


def load(stream: TextIO, fmt: InputFormat) -> Graph[str]:
    match fmt:
        case InputFormat.TEXT:
            return load_text(stream)
        case InputFormat.JSON:
            return load_json(stream)


def load_path(path: Path, fmt: InputFormat | None = None) -> Graph[str]:
    """Load a graph from a file, or from stdin when `path` is `-`.

    Args:
        path: Input file path, `-` for stdin.
        fmt: Input format. Guessed from the extension when None.

    Returns:
        The loaded graph.

    Raises:
        ParseError: If the input is malformed or not valid UTF-8.

    """
    if fmt is None:
        fmt = InputFormat.from_path(path)
    logger.debug(f"Input format: {fmt}")

    try:
        if path == STDIO_PATH:
            graph = load(sys.stdin, fmt)
        else:
            with path.open(encoding="utf-8") as f:
                graph = load(f, fmt)
    except UnicodeDecodeError as e:
        msg = f"can't load {fmt}: {e}"
        raise ParseError(msg) from e

    logger.debug(f"Loaded {len(graph)} nodes from {path}")
    return graph


# =============================================================================
# Dumping
# =============================================================================


def dump_text(stream: TextIO, graph: Graph[str]) -> None:
    """Write one `source destination` line per edge, in canonical order."""
    for edge in graph.to_edges():
        stream.write(f"{edge.source} {edge.target}\n")


def dump_json(stream: TextIO, graph: Graph[str]) -> None:
    """Write the graph as a compact JSON object of destination lists."""
    json.dump(graph.to_mapping(), stream, separators=(",", ":"), ensure_ascii=False)
    stream.write("\n")


def _escape_dot_label(label: str) -> str:
    return label.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def dump_dot(stream: TextIO, graph: Graph[str], *, rankdir: RankDir | None = None) -> None:
    """Write the graph in Graphviz DOT format.

    Nodes are named `n<index>` and labelled with their value.
    """
    stream.write("digraph {\n")
    if rankdir is not None:
        stream.write(f"    rankdir={rankdir};\n")
    for i, value in enumerate(graph.values):
        stream.write(f'    n{i} [label="{_escape_dot_label(value)}"];\n')
    stream.write("\n")
    for source, target in graph.to_index_edges():
        stream.write(f"    n{source} -> n{target};\n")
    stream.write("}\n")


def dump(stream: TextIO, graph: Graph[str], fmt: OutputFormat, *, rankdir: RankDir | None = None) -> None:
    match fmt:
        case OutputFormat.TEXT:
            dump_text(stream, graph)
        case OutputFormat.JSON:
            dump_json(stream, graph)
        case OutputFormat.DOT:
            dump_dot(stream, graph, rankdir=rankdir)


def dump_path(
    path: Path,
    graph: Graph[str],
    fmt: OutputFormat | None = None,
    *,
    rankdir: RankDir | None = None,
) -> None:
    """Write a graph to a file, or to stdout when `path` is `-`.

    Files are written to a temporary sibling first and then moved over the
    destination, so readers never see a partly written file.

    Args:
        path: Output file path, `-` for stdout.
        graph: The graph to write.
        fmt: Output format. Guessed from the extension when None.
        rankdir: Graphviz rank direction, only used for DOT output.

    """
    if fmt is None:
        fmt = OutputFormat.from_path(path)
    logger.debug(f"Output format: {fmt}")

    if path == STDIO_PATH:
        dump(sys.stdout, graph, fmt, rankdir=rankdir)
        sys.stdout.flush()
        return

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}-", suffix=".tmp")
    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            dump(f, graph, fmt, rankdir=rankdir)
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)
    logger.debug(f"Wrote {len(graph)} nodes to {path}")
