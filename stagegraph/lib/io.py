from __future__ import annotations

import math
from typing import Iterable, Iterator, List, Optional

from stagegraph.exceptions import MalformedLayer
from stagegraph.lib.algorithms.base import Edge, Layer


def parse_layer(line: str, line_number: Optional[int] = None) -> Optional[List[Edge]]:
    """
    Parse one line of the layer text format into a list of edges.

    Each edge is written as three tokens, ``from to weight``. Tokens are
    separated by any run of whitespace, so edges may be separated by spaces or
    tabs alike.

    Args:
        line: The input line (a trailing newline is ignored).
        line_number: 1-based line number used in error messages.

    Returns:
        The layer's edges in input order, or None if the line has no tokens.

    Raises:
        MalformedLayer: If the token count is not a multiple of three, a vertex
            id is not a non-negative integer, or a weight is not a finite
            number.
    """
    tokens = line.split()
    if not tokens:
        return None
    if len(tokens) % 3 != 0:
        raise MalformedLayer(
            f"expected 'from to weight' triples, got {len(tokens)} token(s)",
            line_number,
        )

    edges: List[Edge] = []
    for i in range(0, len(tokens), 3):
        from_token, to_token, weight_token = tokens[i : i + 3]
        from_vertex = _parse_vertex(from_token, line_number)
        to_vertex = _parse_vertex(to_token, line_number)
        try:
            weight = float(weight_token)
        except ValueError:
            raise MalformedLayer(
                f"edge weight '{weight_token}' is not a number", line_number
            ) from None
        if not math.isfinite(weight):
            raise MalformedLayer(
                f"edge weight '{weight_token}' is not finite", line_number
            )
        edges.append(Edge(from_vertex, to_vertex, weight))
    return edges


def _parse_vertex(token: str, line_number: Optional[int]) -> int:
    try:
        vertex = int(token)
    except ValueError:
        raise MalformedLayer(
            f"vertex id '{token}' is not an integer", line_number
        ) from None
    if vertex < 0:
        raise MalformedLayer(f"vertex id {vertex} is negative", line_number)
    return vertex


def read_layers(lines: Iterable[str]) -> Iterator[List[Edge]]:
    """
    Lazily yield layers from an iterable of text lines, one layer per line.

    The stream ends at the first line without tokens or at the end of input,
    whichever comes first. Lines after a blank line are not read.

    Args:
        lines: Any iterable of strings, such as an open text file.

    Yields:
        Each layer's edges in input order.
    """
    for line_number, line in enumerate(lines, start=1):
        layer = parse_layer(line, line_number)
        if layer is None:
            return
        yield layer


def format_layer(edges: Layer, separator: str = "\t") -> str:
    """
    Format one layer as a line of the layer text format (without newline).

    Args:
        edges: The layer's edges.
        separator: Separator placed between edges (default is a tab).

    Returns:
        The formatted line; each edge is ``from to weight``.
    """
    return separator.join(
        f"{from_vertex} {to_vertex} {weight!r}"
        for from_vertex, to_vertex, weight in edges
    )


def write_layers(layers: Iterable[Layer]) -> Iterator[str]:
    """
    Yield newline-terminated lines for a sequence of layers.

    Empty layers are skipped because an empty line would end the stream for
    ``read_layers``.
    """
    for edges in layers:
        if edges:
            yield format_layer(edges) + "\n"
