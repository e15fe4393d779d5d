"""Command-line interface for StageGraph."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from time import perf_counter
from typing import List, Optional, TextIO

from stagegraph.lib.algorithms.base import Layer
from stagegraph.lib.algorithms.layered_spf import OptimalPaths, cheapest_paths
from stagegraph.lib.dot import render_dot
from stagegraph.lib.generate import random_layers
from stagegraph.lib.io import read_layers, write_layers
from stagegraph.logging import get_logger, level_for_flags, set_global_log_level
from stagegraph.seed_manager import DEFAULT_SEED

logger = get_logger(__name__)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    """Return grammatically correct unit for count n."""
    if n == 1:
        return singular
    return plural if plural is not None else singular + "s"


def _format_paths_text(result: OptimalPaths) -> str:
    """Return one line per optimal path: weight, then vertices from the origin."""
    lines = []
    for vertices in result.vertex_sequences():
        lines.append(
            f"weight {result.weight:g}: " + " -> ".join(str(v) for v in vertices)
        )
    return "\n".join(lines) + "\n"


def _write_output(text: str, output: Optional[Path]) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text)
    logger.info(f"Wrote output to: {output}")


def _solve(source: TextIO, output: Optional[Path], output_format: str) -> None:
    """Read layers from ``source``, find the optimal paths and render them."""
    _start_time = perf_counter()

    seen: List[Layer] = []

    def _recorded_layers():
        for layer in read_layers(source):
            seen.append(layer)
            yield layer

    result = cheapest_paths(_recorded_layers())
    try:
        logger.info(
            f"Found {len(result)} optimal {_plural(len(result), 'path')} of "
            f"weight {result.weight:g} across {result.num_layers} "
            f"{_plural(result.num_layers, 'layer')}"
        )
        for vertices in result.vertex_sequences():
            logger.debug(
                "Optimal path: " + " -> ".join(str(v) for v in vertices)
            )

        if output_format == "text":
            text = _format_paths_text(result)
        else:
            text = render_dot(seen, result)
        _write_output(text, output)
    finally:
        result.release()

    _elapsed = perf_counter() - _start_time
    logger.info(f"Solved in {_format_duration(_elapsed)}")


def _run_solve(input_path: str, output: Optional[Path], output_format: str) -> None:
    try:
        if input_path == "-":
            logger.info("Reading layers from stdin")
            _solve(sys.stdin, output, output_format)
        else:
            logger.info(f"Reading layers from: {input_path}")
            with open(input_path, encoding="utf-8") as fh:
                _solve(fh, output, output_format)
    except FileNotFoundError:
        logger.error(f"Input file not found: {input_path}")
        sys.exit(1)
    except UnicodeDecodeError as e:
        logger.error(f"Input is not UTF-8 text: {input_path}: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to solve: {type(e).__name__}: {e}")
        sys.exit(1)


def _run_generate(seed: Optional[int], output: Optional[Path]) -> None:
    layers = list(random_layers(seed=seed))
    logger.info(
        f"Generated {len(layers)} {_plural(len(layers), 'layer')} (seed={seed})"
    )
    try:
        _write_output("".join(write_layers(layers)), output)
    except OSError as e:
        logger.error(f"Failed to write output: {type(e).__name__}: {e}")
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``stagegraph`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="stagegraph",
        description="Find the cheapest paths through layered graphs.",
    )

    # Global options
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging, including the shortest-path trace",
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{solve,generate}",
        help="Available commands",
    )

    solve_parser = subparsers.add_parser(
        "solve", help="Find the optimal paths through layers read from text"
    )
    solve_parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="File with one layer of 'from to weight' edges per line (default: stdin)",
    )
    solve_parser.add_argument(
        "--format",
        "-f",
        dest="output_format",
        choices=("dot", "text"),
        default="dot",
        help="Graphviz DOT with highlighted paths, or one line per path",
    )

    generate_parser = subparsers.add_parser(
        "generate", help="Write a random layered graph in the layer text format"
    )
    generate_parser.add_argument(
        "--seed",
        "-s",
        type=int,
        default=DEFAULT_SEED,
        help=f"Random seed (default: {DEFAULT_SEED})",
    )

    for p in (solve_parser, generate_parser):
        p.add_argument(
            "--output",
            "-o",
            type=Path,
            default=None,
            help="Write to this file instead of stdout",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    set_global_log_level(level_for_flags(args.verbose, args.quiet))
    logger.debug("Debug logging enabled")

    if args.command == "solve":
        _run_solve(args.input, args.output, args.output_format)
    elif args.command == "generate":
        _run_generate(args.seed, args.output)


if __name__ == "__main__":
    main()
