"""Shortest paths through a layered directed acyclic graph.

The graph arrives as a stream of layers, where each layer is the list of edges
between one stage of vertices and the next. A forward dynamic program keeps, for
every vertex of the most recent layer, the cheapest path that ends there. Paths
are ``PersistentList`` chains, so candidates that branch from a common prefix
share it instead of copying it.

Example:
    >>> layers = [[(0, 0, 1.0), (0, 1, 4.0)], [(0, 0, 2.0), (1, 0, 1.0)]]
    >>> result = cheapest_paths(layers)
    >>> result.weight, result.vertex_sequences()
    (3.0, [[0, 0, 0]])
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Iterator, List, Optional, Tuple

from stagegraph.exceptions import MalformedLayer, NoReachableVertex
from stagegraph.lib.algorithms.base import (
    Edge,
    LayerSource,
    PathNode,
    VertexId,
    Weight,
)
from stagegraph.lib.persistent_list import NIL, NodeLedger, PersistentList
from stagegraph.logging import get_logger

_logger = get_logger(__name__)

#: Best known path per vertex id; ``None`` marks a vertex without a path.
PathState = List[Optional[PersistentList[PathNode]]]


class SolverState(IntEnum):
    """Where a ``LayeredPathSolver`` is in its walk over the layer stream."""

    AWAITING_LAYER = 1
    PROCESSING_LAYER = 2
    FINALIZED = 3


@dataclass
class OptimalPaths:
    """All paths through the final layer that share the least total weight.

    Attributes:
        paths: One path per optimal final vertex, each read front to back from
            the final vertex to its origin.
        weight: The common least total weight.
        num_layers: Number of edge layers processed. A path holds at most
            ``num_layers + 1`` nodes, one per stage; it is shorter when its
            origin lies in a later stage.
    """

    paths: List[PersistentList[PathNode]]
    weight: Weight
    num_layers: int
    _released: bool = field(default=False, init=False, repr=False)

    def __iter__(self) -> Iterator[PersistentList[PathNode]]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def vertex_sequences(self) -> List[List[VertexId]]:
        """Return each path as a list of vertex ids from origin to final vertex."""
        return [[node.vertex for node in path][::-1] for path in self.paths]

    def release(self) -> None:
        """Release every path. The result is empty afterwards."""
        if self._released:
            return
        self._released = True
        for path in self.paths:
            path.release()
        self.paths = []


class LayeredPathSolver:
    """Step-by-step driver of the layered dynamic program.

    The usual entry point is :func:`cheapest_paths`; this class exposes the
    individual steps so callers can observe the frontier between relaxations.

    A run moves through ``AWAITING_LAYER`` -> ``PROCESSING_LAYER`` ->
    ``AWAITING_LAYER`` for every layer and ends in ``FINALIZED``.

    Args:
        logger: Receives the DEBUG trace of the run. Defaults to this module's
            logger.
        ledger: Allocation ledger attached to every path node the run creates.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        ledger: Optional[NodeLedger] = None,
    ) -> None:
        self._log = logger if logger is not None else _logger
        self._ledger = ledger
        self._previous: PathState = []
        self._current: PathState = []
        self.layer_count = 0
        self.state = SolverState.AWAITING_LAYER

    def _require(self, state: SolverState, action: str) -> None:
        if self.state is not state:
            raise RuntimeError(
                f"Cannot {action} while {self.state.name}; expected {state.name}"
            )

    def begin_layer(self, edges: Iterable[Edge]) -> Tuple[Edge, ...]:
        """Size the previous and current frontiers for a new layer.

        The previous frontier is resized to ``max(from) + 1`` slots and a fresh
        current frontier of ``max(to) + 1`` empty slots is created.

        Args:
            edges: The layer's edges; plain ``(from, to, weight)`` tuples work.

        Returns:
            The layer's edges as a tuple of ``Edge``.

        Raises:
            MalformedLayer: If an edge names a negative vertex id or has a
                weight that is not finite.
        """
        self._require(SolverState.AWAITING_LAYER, "begin a layer")
        layer = tuple(e if isinstance(e, Edge) else Edge(*e) for e in edges)
        layer_number = self.layer_count + 1

        max_previous_vertex = -1
        max_current_vertex = -1
        for edge in layer:
            if edge.from_vertex < 0 or edge.to_vertex < 0:
                raise MalformedLayer(
                    f"layer {layer_number} has a negative vertex id in edge "
                    f"({edge.from_vertex}, {edge.to_vertex}, {edge.weight})"
                )
            if not math.isfinite(edge.weight):
                raise MalformedLayer(
                    f"layer {layer_number} has a non-finite weight in edge "
                    f"({edge.from_vertex}, {edge.to_vertex}, {edge.weight})"
                )
            max_previous_vertex = max(max_previous_vertex, edge.from_vertex)
            max_current_vertex = max(max_current_vertex, edge.to_vertex)

        self.layer_count = layer_number
        self._log.debug("Examining layer %d", layer_number)

        previous_count = max_previous_vertex + 1
        if len(self._previous) > previous_count:
            for path in self._previous[previous_count:]:
                if path is not None:
                    path.release()
            del self._previous[previous_count:]
        else:
            self._previous.extend([None] * (previous_count - len(self._previous)))
        self._current = [None] * (max_current_vertex + 1)

        self._log.debug("    previous layer has %d vertices", len(self._previous))
        self._log.debug("    current layer has %d vertices", len(self._current))

        self.state = SolverState.PROCESSING_LAYER
        return layer

    def relax(self, edge: Edge) -> bool:
        """Offer the path through ``edge`` to its target vertex.

        A vertex of the previous layer with no path yet becomes an origin of
        weight zero. The candidate replaces the incumbent only when strictly
        lighter, so among equal weights the first candidate seen is kept.

        Returns:
            True if the target vertex's best path changed.
        """
        self._require(SolverState.PROCESSING_LAYER, "relax an edge")
        from_vertex, to_vertex, weight = edge
        if not (0 <= from_vertex < len(self._previous)) or not (
            0 <= to_vertex < len(self._current)
        ):
            raise MalformedLayer(
                f"edge ({from_vertex}, {to_vertex}, {weight}) lies outside "
                f"layer {self.layer_count}"
            )

        origin = self._previous[from_vertex]
        if origin is None:
            self._log.debug(
                "    previous vertex %d now has minimum weight zero", from_vertex
            )
            origin = NIL.prepend(PathNode(from_vertex, 0.0), ledger=self._ledger)
            self._previous[from_vertex] = origin

        proposed_total = origin.head().least_total_weight_to_here + weight
        incumbent = self._current[to_vertex]
        if (
            incumbent is not None
            and not proposed_total < incumbent.head().least_total_weight_to_here
        ):
            return False

        self._log.debug(
            "    current vertex %d now has minimum weight %g",
            to_vertex,
            proposed_total,
        )
        self._current[to_vertex] = origin.prepend(
            PathNode(to_vertex, proposed_total)
        )
        if incumbent is not None:
            incumbent.release()
        return True

    def end_layer(self) -> None:
        """Make the current frontier the previous one and await the next layer."""
        self._require(SolverState.PROCESSING_LAYER, "end a layer")
        _release_all(self._previous)
        self._previous, self._current = self._current, []
        self.state = SolverState.AWAITING_LAYER

    def process_layer(self, edges: Iterable[Edge]) -> None:
        """Relax every edge of one layer, in order."""
        for edge in self.begin_layer(edges):
            self.relax(edge)
        self.end_layer()

    def best(self, vertex: VertexId) -> Optional[PersistentList[PathNode]]:
        """Return a new handle on the best path ending at ``vertex``, if any.

        While a layer is being processed this looks at the layer's own vertices,
        otherwise at the vertices of the last completed layer. The caller owns
        the returned handle.
        """
        if self.state is SolverState.PROCESSING_LAYER:
            frontier = self._current
        else:
            frontier = self._previous
        if not 0 <= vertex < len(frontier) or frontier[vertex] is None:
            return None
        return frontier[vertex].copy()

    def finalize(self) -> OptimalPaths:
        """Return every path of least total weight through the final layer.

        Raises:
            NoReachableVertex: If no layer was processed, the final layer has
                no vertex with a path, or no path has a comparable weight.
        """
        self._require(SolverState.AWAITING_LAYER, "finalize")
        self.state = SolverState.FINALIZED
        frontier, self._previous = self._previous, []

        if self.layer_count == 0:
            raise NoReachableVertex("No layers were processed")
        reached = [path for path in frontier if path is not None]
        if not reached:
            raise NoReachableVertex(
                f"Layer {self.layer_count} has no reachable vertex"
            )

        least_total_weight = min(
            path.head().least_total_weight_to_here for path in reached
        )
        optimal: List[PersistentList[PathNode]] = []
        for path in reached:
            if path.head().least_total_weight_to_here == least_total_weight:
                optimal.append(path)
            else:
                path.release()
        if not optimal:
            raise NoReachableVertex(
                f"Layer {self.layer_count} has no path of comparable weight"
            )

        self._log.debug(
            "Found %d optimal path(s) of weight %g after %d layer(s)",
            len(optimal),
            least_total_weight,
            self.layer_count,
        )
        return OptimalPaths(
            paths=optimal, weight=least_total_weight, num_layers=self.layer_count
        )

    def close(self) -> None:
        """Release every path still held by the frontiers."""
        _release_all(self._previous)
        _release_all(self._current)
        self._previous = []
        self._current = []


def _release_all(frontier: PathState) -> None:
    for path in frontier:
        if path is not None:
            path.release()


def cheapest_paths(
    layers: LayerSource,
    *,
    logger: Optional[logging.Logger] = None,
    ledger: Optional[NodeLedger] = None,
) -> OptimalPaths:
    """Find all least-weight paths through a stream of layers.

    Layers are pulled one at a time, so ``layers`` may be a lazy generator.
    Every vertex of the first layer, and any later vertex that is used as an
    edge source without having been reached, starts a path of weight zero.

    Args:
        layers: Iterable of layers, each an ordered sequence of
            ``(from, to, weight)`` edges.
        logger: Receives the DEBUG trace of the run.
        ledger: Allocation ledger attached to every path node created.

    Returns:
        The optimal paths of the final layer.

    Raises:
        MalformedLayer: If a layer names a negative vertex id.
        NoReachableVertex: If there are no layers or the final layer has no
            reachable vertex.
    """
    solver = LayeredPathSolver(logger=logger, ledger=ledger)
    try:
        for layer in layers:
            solver.process_layer(layer)
        return solver.finalize()
    finally:
        solver.close()
