"""NetworkX export of layered graphs.

Example:
    >>> from stagegraph.lib.algorithms.layered_spf import cheapest_paths
    >>> from stagegraph.lib.nx import layers_to_networkx
    >>>
    >>> layers = [[(0, 0, 1.0), (0, 1, 4.0)], [(0, 0, 2.0), (1, 0, 1.0)]]
    >>> G = layers_to_networkx(layers, cheapest_paths(layers))
    >>> G.nodes[(2, 0)]
    {'stage': 2, 'vertex': 0}
    >>> [(u, v) for u, v, d in G.edges(data=True) if d["optimal"]]
    [((0, 0), (1, 0)), ((1, 0), (2, 0))]
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence, Set, Tuple

from stagegraph.lib.algorithms.base import Layer, VertexId
from stagegraph.lib.algorithms.layered_spf import OptimalPaths
from stagegraph.lib.dot import path_edges

if TYPE_CHECKING:
    import networkx as nx

#: A vertex of the whole graph: ``(stage, vertex id within the stage)``.
StageNode = Tuple[int, VertexId]


def layers_to_networkx(
    layers: Sequence[Layer],
    result: Optional[OptimalPaths] = None,
    *,
    weight_attr: str = "weight",
) -> "nx.MultiDiGraph":
    """Convert a sequence of layers into a NetworkX MultiDiGraph.

    Nodes are ``(stage, vertex)`` tuples with ``stage`` and ``vertex``
    attributes. Parallel edges between the same pair of vertices are kept as
    separate multigraph edges. Every edge carries its weight and an ``optimal``
    flag that is True when the edge lies on one of ``result``'s paths; when a
    pair of vertices has parallel edges, only the lightest is flagged.

    Args:
        layers: The layers in order.
        result: Optimal paths used to flag edges.
        weight_attr: Edge attribute name for the weight (default: "weight").

    Returns:
        nx.MultiDiGraph of the layered graph.
    """
    import networkx as nx

    optimal_pairs: Set[Tuple[StageNode, StageNode]] = set()
    if result is not None:
        for path in result:
            optimal_pairs.update(path_edges(path, result.num_layers))

    G = nx.MultiDiGraph()
    for stage, edges in enumerate(layers, start=1):
        lightest = {}
        for from_vertex, to_vertex, weight in edges:
            u: StageNode = (stage - 1, from_vertex)
            v: StageNode = (stage, to_vertex)
            for node in (u, v):
                if node not in G:
                    G.add_node(node, stage=node[0], vertex=node[1])
            key = G.add_edge(u, v, **{weight_attr: weight, "optimal": False})
            if (u, v) in optimal_pairs and (
                (u, v) not in lightest or weight < lightest[(u, v)][1]
            ):
                lightest[(u, v)] = (key, weight)
        for (u, v), (key, _) in lightest.items():
            G.edges[u, v, key]["optimal"] = True

    return G
