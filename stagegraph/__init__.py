"""StageGraph: cheapest paths through layered directed acyclic graphs.

A layered graph is read as a stream of layers, each layer being the weighted
edges from one stage of vertices to the next. StageGraph finds every path of
least total weight from the first stage to the last, representing paths as
persistent linked lists that share common prefixes.

Primary API:
    cheapest_paths() - Run the dynamic program over a stream of layers
    LayeredPathSolver - Step-by-step access to the same computation
    PersistentList - Reference-counted list used for paths
    read_layers() / write_layers() - Layer text format
    layers_to_dot() / render_dot() - Graphviz output with highlighted optimal paths

Example:
    from stagegraph import cheapest_paths

    result = cheapest_paths([[(0, 0, 1.0), (0, 1, 4.0)], [(0, 0, 2.0), (1, 0, 1.0)]])
    result.weight              # 3.0
    result.vertex_sequences()  # [[0, 0, 0]]
"""

from __future__ import annotations

from stagegraph import cli, logging
from stagegraph._version import __version__
from stagegraph.exceptions import (
    EmptyListAccess,
    MalformedLayer,
    NoReachableVertex,
    StageGraphError,
)
from stagegraph.lib.algorithms.base import Edge, PathNode
from stagegraph.lib.algorithms.layered_spf import (
    LayeredPathSolver,
    OptimalPaths,
    SolverState,
    cheapest_paths,
)
from stagegraph.lib.dot import layers_to_dot, render_dot
from stagegraph.lib.generate import random_layers
from stagegraph.lib.io import format_layer, parse_layer, read_layers, write_layers
from stagegraph.lib.nx import layers_to_networkx
from stagegraph.lib.persistent_list import NodeLedger, PersistentList

__all__ = [
    # Version
    "__version__",
    # Types
    "Edge",
    "PathNode",
    "PersistentList",
    "NodeLedger",
    # Algorithm
    "cheapest_paths",
    "LayeredPathSolver",
    "OptimalPaths",
    "SolverState",
    # Errors
    "StageGraphError",
    "EmptyListAccess",
    "MalformedLayer",
    "NoReachableVertex",
    # I/O and rendering
    "parse_layer",
    "read_layers",
    "format_layer",
    "write_layers",
    "random_layers",
    "layers_to_dot",
    "render_dot",
    "layers_to_networkx",
    # Utilities
    "cli",
    "logging",
]
