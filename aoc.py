"""
Command-line entry point: run one day's puzzle against its input.

Usage:
    aoc [--debug] [--example] [--inputs-dir DIR] DAY
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable

import requests

import puzzle04
import puzzle06
import puzzle08
import puzzle10
import puzzle12
import puzzle14
import puzzle15
import puzzle16
import puzzle18
import puzzle20
from inputs import default_inputs_dir, resolve_input

logger = logging.getLogger(__name__)

PuzzleRun = Callable[[Path, bool], None]

PUZZLES: dict[int, PuzzleRun] = {
    4: puzzle04.run,
    6: puzzle06.run,
    8: puzzle08.run,
    10: puzzle10.run,
    12: puzzle12.run,
    14: puzzle14.run,
    15: puzzle15.run,
    16: puzzle16.run,
    18: puzzle18.run,
    20: puzzle20.run,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run an Advent of Code grid puzzle.")
    parser.add_argument("day", type=int, help="Puzzle day to run.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("--example", action="store_true", help="Use the example input instead of the real one.")
    parser.add_argument(
        "--inputs-dir",
        type=Path,
        default=None,
        help="Directory holding puzzle inputs (default: $AOC_INPUTS_DIR or ./inputs).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    run = PUZZLES.get(args.day)
    if run is None:
        available = ", ".join(str(day) for day in sorted(PUZZLES))
        logger.error("error: no puzzle for day %d (available: %s)", args.day, available)
        return 1

    try:
        input_path = resolve_input(args.day, args.example, args.inputs_dir or default_inputs_dir())
        logger.info("Running day %d with input from %s", args.day, input_path)
        run(input_path, args.example)
    except (ValueError, LookupError, OSError, requests.RequestException) as e:
        logger.error("error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
