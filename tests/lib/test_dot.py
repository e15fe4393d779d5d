import pydot

from stagegraph.config import DotStyle
from stagegraph.lib.algorithms.layered_spf import cheapest_paths
from stagegraph.lib.dot import layers_to_dot, path_edges, render_dot


def _unquote(value) -> str:
    return str(value).strip('"')


def _attrs(obj) -> dict:
    return {k: _unquote(v) for k, v in obj.get_attributes().items()}


def _labelled_edges(graph):
    return [
        (e.get_source(), e.get_destination(), _attrs(e)["label"])
        for e in graph.get_edge_list()
        if "label" in e.get_attributes()
    ]


def _highlighted_edges(graph, color="red"):
    return [
        (e.get_source(), e.get_destination(), _attrs(e)["penwidth"])
        for e in graph.get_edge_list()
        if _attrs(e).get("color") == color
    ]


def _cluster(graph, stage):
    [cluster] = [
        g
        for g in graph.get_subgraph_list()
        if _unquote(g.get_name()) == f"cluster_{stage}"
    ]
    return cluster


def _cluster_nodes(graph, stage):
    return [
        n.get_name()
        for n in _cluster(graph, stage).get_node_list()
        if n.get_name().startswith("node_")
    ]


def test_graph_without_paths(two_layers):
    graph = layers_to_dot(two_layers)

    assert _attrs(graph)["rankdir"] == "LR"
    for stage in range(3):
        assert _attrs(_cluster(graph, stage))["label"] == f"Layer {stage}"
    assert _cluster_nodes(graph, 0) == ["node_0_0"]
    assert _cluster_nodes(graph, 1) == ["node_1_0", "node_1_1"]
    assert _labelled_edges(graph) == [
        ("node_0_0", "node_1_0", "1"),
        ("node_0_0", "node_1_1", "4"),
        ("node_1_0", "node_2_0", "2"),
        ("node_1_1", "node_2_0", "1"),
    ]
    assert _highlighted_edges(graph) == []


def test_render_is_strict_digraph_source(two_layers):
    dot = render_dot(two_layers, cheapest_paths(two_layers))

    assert dot.startswith("strict digraph")
    assert dot.endswith("}\n")
    [parsed] = pydot.graph_from_dot_data(dot)
    assert len(parsed.get_edge_list()) == 6
    assert ("node_0_0", "node_1_1", "4") in _labelled_edges(parsed)


def test_highlights_optimal_path(two_layers):
    graph = layers_to_dot(two_layers, cheapest_paths(two_layers))

    assert _highlighted_edges(graph) == [
        ("node_1_0", "node_2_0", "3"),
        ("node_0_0", "node_1_0", "3"),
    ]


def test_highlights_every_tied_path(tied_routes):
    graph = layers_to_dot(tied_routes, cheapest_paths(tied_routes))

    highlighted = {(u, v) for u, v, _ in _highlighted_edges(graph)}
    assert len(highlighted) == 4
    assert ("node_0_0", "node_1_1") in highlighted


def test_first_cluster_lists_sorted_unique_sources():
    graph = layers_to_dot([[(2, 0, 1.0), (0, 0, 1.0), (2, 1, 1.0)]])

    assert _cluster_nodes(graph, 0) == ["node_0_0", "node_0_2"]
    assert _cluster_nodes(graph, 1) == ["node_1_0", "node_1_1"]


def test_custom_style():
    style = DotStyle(highlight_color="blue", highlight_penwidth=5, rankdir="TB")
    layers = [[(0, 0, 1.5)]]
    graph = layers_to_dot(layers, cheapest_paths(layers), style=style)

    assert _attrs(graph)["rankdir"] == "TB"
    assert _labelled_edges(graph) == [("node_0_0", "node_1_0", "1.5")]
    assert _highlighted_edges(graph, color="blue") == [("node_0_0", "node_1_0", "5")]


def test_path_edges_of_shortened_path():
    # The optimal path starts at a stage-1 vertex that was never reached.
    result = cheapest_paths([[(0, 0, 5.0)], [(0, 0, 1.0), (2, 1, 0.5)]])
    edges = list(path_edges(result.paths[0], result.num_layers))

    assert edges == [((1, 2), (2, 1))]
