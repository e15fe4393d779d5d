from stagegraph.config import RandomLayersConfig
from stagegraph.lib.generate import random_layers


def test_same_seed_same_graph():
    assert list(random_layers(seed=7)) == list(random_layers(seed=7))


def test_different_seeds_differ():
    assert list(random_layers(seed=1)) != list(random_layers(seed=2))


def test_layers_are_well_formed():
    cfg = RandomLayersConfig()
    layers = list(random_layers(cfg, seed=42))

    assert len(layers) >= cfg.layers_lower_bound - 1
    previous_vertices = None
    for edges in layers:
        assert edges
        targets = sorted({e.to_vertex for e in edges})
        # Every target vertex of a stage receives at least one edge.
        assert targets == list(range(len(targets)))
        if previous_vertices is not None:
            assert all(0 <= e.from_vertex < previous_vertices for e in edges)
        assert all(round(e.weight, cfg.weight_decimals) == e.weight for e in edges)
        previous_vertices = len(targets)


def test_config_controls_shape():
    cfg = RandomLayersConfig(
        layers_lower_bound=4,
        layers_mean=4.0,
        layers_stddev=0.0,
        vertices_lower_bound=2,
        vertices_mean=2.0,
        vertices_stddev=0.0,
        inbound_edges_lower_bound=1,
        inbound_edges_mean=1.0,
        inbound_edges_stddev=0.0,
    )
    layers = list(random_layers(cfg, seed=3))

    assert len(layers) == 3
    for edges in layers:
        assert [e.to_vertex for e in edges] == [0, 1]
        assert all(e.from_vertex in (0, 1) for e in edges)
