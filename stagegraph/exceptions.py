"""Exception types raised by StageGraph."""

from __future__ import annotations

from typing import Optional


class StageGraphError(Exception):
    """Base class for all StageGraph errors.

    Every error is fatal to the computation that raised it. There is no
    partial result to recover once one of these escapes.
    """

    pass


class EmptyListAccess(StageGraphError, IndexError):
    """Raised when ``head`` or ``tail`` is requested from an empty list."""

    pass


class MalformedLayer(StageGraphError, ValueError):
    """Raised when a layer contains unparseable tokens or negative vertex ids.

    Attributes:
        line_number: 1-based input line the layer came from, when known.
    """

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class NoReachableVertex(StageGraphError, ValueError):
    """Raised when the final layer holds no vertex with a path."""

    pass
