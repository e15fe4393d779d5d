"""Core types shared by the layered shortest-path engine and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, NamedTuple, Sequence, Union

#: Vertex name within one layer, ``>= 0``.
VertexId = int

#: Edge weight or accumulated path weight. Any real number, negative included.
Weight = Union[int, float]


class Edge(NamedTuple):
    """Directed, weighted edge from a vertex of one layer to a vertex of the next.

    Attributes:
        from_vertex: Vertex in the previous layer.
        to_vertex: Vertex in the current layer.
        weight: Edge weight.
    """

    from_vertex: VertexId
    to_vertex: VertexId
    weight: Weight


#: A layer is the ordered sequence of edges between two adjacent stages.
Layer = Sequence[Edge]

#: A source of layers, consumed one layer at a time.
LayerSource = Iterable[Layer]


@dataclass(frozen=True, slots=True)
class PathNode:
    """One vertex of a path together with the least weight of reaching it."""

    vertex: VertexId
    least_total_weight_to_here: Weight

    def __str__(self) -> str:
        return f"{self.vertex} (w={self.least_total_weight_to_here:g})"
