"""Logging for StageGraph.

Every module logs through a child of the ``stagegraph`` logger. The root
handler writes to stderr so DOT or path text written to stdout stays clean.
The shortest-path engine traces each relaxation at DEBUG.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "stagegraph"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach a single handler to the ``stagegraph`` logger.

    Later calls are no-ops until ``reset_logging()`` runs.

    Args:
        level: Logging level (default: INFO).
        format_string: Record format; defaults to ``DEFAULT_FORMAT``.
        handler: Handler to attach; defaults to a stderr StreamHandler.
    """
    global _configured

    if _configured:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # Propagate so pytest's caplog sees the records
    root_logger.propagate = True

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger ``name``, levelled by the ``stagegraph`` logger.

    Args:
        name: Logger name, usually the calling module's ``__name__``.
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the ``stagegraph`` logger and its handlers.

    Args:
        level: Logging level, e.g. ``logging.DEBUG`` to see the engine trace.
    """
    setup_root_logger()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def level_for_flags(verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI's ``--verbose``/``--quiet`` flags to a level; verbose wins."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def reset_logging() -> None:
    """Drop the handler and level so the next setup starts fresh (for tests)."""
    global _configured
    _configured = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
