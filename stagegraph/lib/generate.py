"""Random layered graphs for demonstrations and stress tests."""

from __future__ import annotations

import random
from typing import Iterator, List, Optional

from stagegraph.config import RANDOM_LAYERS_CONFIG, RandomLayersConfig
from stagegraph.lib.algorithms.base import Edge
from stagegraph.logging import get_logger
from stagegraph.seed_manager import DEFAULT_SEED, SeedManager

logger = get_logger(__name__)


def _bounded_count(
    rng: random.Random, lower_bound: int, mean: float, stddev: float
) -> int:
    return round(max(float(lower_bound), rng.gauss(mean, stddev)))


def random_layers(
    config: Optional[RandomLayersConfig] = None,
    seed: Optional[int] = DEFAULT_SEED,
) -> Iterator[List[Edge]]:
    """Yield the edge layers of a random layered graph.

    The number of stages is drawn first; each following stage draws its vertex
    count, and every vertex of it draws a number of inbound edges whose sources
    are picked uniformly from the previous stage.

    Args:
        config: Distribution settings; defaults to ``RANDOM_LAYERS_CONFIG``.
        seed: Master seed. The same seed always yields the same graph. None
            draws a fresh graph each time.

    Yields:
        One list of edges per layer, ordered by target vertex.
    """
    cfg = config or RANDOM_LAYERS_CONFIG
    rng = SeedManager(seed).create_random_state("random_layers")

    num_stages = _bounded_count(
        rng, cfg.layers_lower_bound, cfg.layers_mean, cfg.layers_stddev
    )
    previous_vertices = _bounded_count(
        rng, cfg.vertices_lower_bound, cfg.vertices_mean, cfg.vertices_stddev
    )
    logger.debug("Generating %d stages (seed=%s)", num_stages, seed)

    for _ in range(1, num_stages):
        num_vertices = _bounded_count(
            rng, cfg.vertices_lower_bound, cfg.vertices_mean, cfg.vertices_stddev
        )
        edges: List[Edge] = []
        for to_vertex in range(num_vertices):
            inbound = _bounded_count(
                rng,
                cfg.inbound_edges_lower_bound,
                cfg.inbound_edges_mean,
                cfg.inbound_edges_stddev,
            )
            for _ in range(inbound):
                from_vertex = rng.randrange(previous_vertices)
                weight = round(
                    rng.gauss(cfg.weight_mean, cfg.weight_stddev), cfg.weight_decimals
                )
                edges.append(Edge(from_vertex, to_vertex, weight))
        yield edges
        previous_vertices = num_vertices
