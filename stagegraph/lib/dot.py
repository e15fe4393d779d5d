"""Graphviz rendering of layered graphs and their optimal paths.

Vertex ``v`` of stage ``n`` is named ``node_<n>_<v>``. Stage 0 holds the sources
of the first layer; stage ``n`` holds the targets of layer ``n``.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence, Tuple

import pydot

from stagegraph.config import DOT_STYLE, DotStyle
from stagegraph.lib.algorithms.base import Layer, PathNode, VertexId
from stagegraph.lib.algorithms.layered_spf import OptimalPaths
from stagegraph.lib.persistent_list import PersistentList


def _node_name(stage: int, vertex: VertexId) -> str:
    return f"node_{stage}_{vertex}"


def _cluster(
    stage: int, vertices: Iterable[VertexId], style: DotStyle
) -> pydot.Cluster:
    cluster = pydot.Cluster(
        str(stage), label=f"Layer {stage}", style="filled", color=style.cluster_color
    )
    cluster.set_node_defaults(style="filled", color="white")
    for vertex in sorted(set(vertices)):
        cluster.add_node(pydot.Node(_node_name(stage, vertex), label=str(vertex)))
    return cluster


def path_edges(
    path: PersistentList[PathNode], num_layers: int
) -> Iterator[Tuple[Tuple[int, VertexId], Tuple[int, VertexId]]]:
    """Yield the ``((stage, from), (stage + 1, to))`` edges along a path.

    The path is read front to back, so edges come out from the last stage
    towards the first.

    Args:
        path: An optimal path, final vertex first.
        num_layers: Number of layers the path spans.
    """
    stage = num_layers
    to_vertex: Optional[VertexId] = None
    for node in path:
        if to_vertex is not None:
            yield (stage - 1, node.vertex), (stage, to_vertex)
            stage -= 1
        to_vertex = node.vertex


def layers_to_dot(
    layers: Sequence[Layer],
    result: Optional[OptimalPaths] = None,
    style: Optional[DotStyle] = None,
) -> pydot.Dot:
    """Build a Graphviz ``strict digraph`` of the layers.

    Every stage becomes a filled cluster and every edge is labelled with its
    weight. Edges along the optimal paths in ``result`` are added again with a
    thick highlighted pen; ``strict`` makes Graphviz merge them with the
    labelled originals.

    Args:
        layers: The layers in order.
        result: Optimal paths to highlight, if any.
        style: Presentation settings; defaults to ``DOT_STYLE``.

    Returns:
        pydot.Dot graph.
    """
    style = style or DOT_STYLE
    graph = pydot.Dot(
        graph_type="digraph",
        strict=True,
        fontname=style.fontname,
        rankdir=style.rankdir,
    )
    graph.set_node_defaults(fontname=style.fontname)
    graph.set_edge_defaults(fontname=style.fontname, fontsize=style.edge_fontsize)

    for stage, edges in enumerate(layers, start=1):
        if stage == 1:
            graph.add_subgraph(_cluster(0, (edge[0] for edge in edges), style))
        graph.add_subgraph(_cluster(stage, (edge[1] for edge in edges), style))
        for from_vertex, to_vertex, weight in edges:
            graph.add_edge(
                pydot.Edge(
                    _node_name(stage - 1, from_vertex),
                    _node_name(stage, to_vertex),
                    label=f"{weight:g}",
                )
            )

    if result is not None:
        for path in result:
            for (from_stage, from_vertex), (to_stage, to_vertex) in path_edges(
                path, result.num_layers
            ):
                graph.add_edge(
                    pydot.Edge(
                        _node_name(from_stage, from_vertex),
                        _node_name(to_stage, to_vertex),
                        penwidth=str(style.highlight_penwidth),
                        color=style.highlight_color,
                    )
                )

    return graph


def render_dot(
    layers: Sequence[Layer],
    result: Optional[OptimalPaths] = None,
    style: Optional[DotStyle] = None,
) -> str:
    """Render layers as DOT source; see ``layers_to_dot``.

    Returns:
        The DOT source, newline-terminated.
    """
    text = layers_to_dot(layers, result, style).to_string()
    return text if text.endswith("\n") else text + "\n"
