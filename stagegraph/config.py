"""Configuration classes for StageGraph components."""

from dataclasses import dataclass


@dataclass
class RandomLayersConfig:
    """Distributions used to generate random layered graphs.

    Each count is drawn from a normal distribution, clamped to its lower bound
    and rounded to the nearest integer.
    """

    # Number of vertex stages; a graph of n stages has n - 1 edge layers
    layers_lower_bound: int = 2
    layers_mean: float = 10.0
    layers_stddev: float = 3.0

    # Vertices in each stage
    vertices_lower_bound: int = 1
    vertices_mean: float = 5.0
    vertices_stddev: float = 2.0

    # Inbound edges of each vertex, each from a uniformly chosen previous vertex
    inbound_edges_lower_bound: int = 1
    inbound_edges_mean: float = 3.0
    inbound_edges_stddev: float = 1.0

    # Edge weights, rounded to weight_decimals
    weight_mean: float = 5.0
    weight_stddev: float = 20.0
    weight_decimals: int = 1


@dataclass
class DotStyle:
    """Presentation settings for Graphviz output."""

    fontname: str = "Helvetica,Arial,sans-serif"
    edge_fontsize: str = "8pt"
    rankdir: str = "LR"
    cluster_color: str = "lightgrey"
    highlight_color: str = "red"
    highlight_penwidth: int = 3


# Global configuration instances
RANDOM_LAYERS_CONFIG = RandomLayersConfig()
DOT_STYLE = DotStyle()
