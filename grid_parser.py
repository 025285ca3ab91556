"""
Parsing utilities for puzzle input.

Provides:
1. Character grids: one row per line, one tile per character
2. Marker lookup (e.g. the S/E start and end of a maze)
3. Integer helpers for comma/space separated lines
"""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

from geometry import Grid, GridAddress

__all__ = [
    "ParseError",
    "find_markers",
    "input_lines",
    "parse_char_grid",
    "parse_digit_grid",
    "parse_int",
    "parse_ints",
    "parse_pair",
]

Tile = TypeVar("Tile")


class ParseError(ValueError):
    """Raised for malformed puzzle input; the current puzzle run cannot continue past it."""


def input_lines(text: str) -> list[str]:
    """Non-empty lines of `text`, with trailing whitespace removed."""
    return [line.rstrip() for line in text.splitlines() if line.strip()]


def parse_char_grid(
    text: str | Iterable[str],
    tile_fn: Callable[[str, GridAddress], Tile],
) -> Grid[Tile]:
    """
    Parse a grid where each line is a row and each character is a tile.

    Args:
        text: Whole input text, or an iterable of row strings
        tile_fn: Maps (char, address) to a tile. May raise ValueError for
                 unexpected characters; the error is re-raised as ParseError
                 with the row and column attached.

    Returns:
        Grid of tiles

    Raises:
        ParseError: on an unexpected character or rows of unequal width
    """
    row_strings = input_lines(text) if isinstance(text, str) else [line.rstrip("\n") for line in text]
    rows: list[list[Tile]] = []

    for y, row_str in enumerate(row_strings):
        row: list[Tile] = []
        for x, char in enumerate(row_str):
            try:
                row.append(tile_fn(char, GridAddress(x, y)))
            except ParseError:
                raise
            except ValueError as e:
                error_msg = (
                    f"Invalid tile character: '{char}'\n"
                    f"  Row {y}: \"{row_str}\"\n"
                    f"  Position: column {x}\n"
                    f"  Reason: {e}"
                )
                raise ParseError(error_msg) from e
        rows.append(row)

    # Validate all rows have same length
    if rows:
        width = len(rows[0])
        mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != width]
        if mismatched:
            error_msg = (
                f"Inconsistent row lengths in grid\n"
                f"  Expected: {width} columns (from row 0)\n"
                f"  Mismatched rows:\n"
            )
            for row_idx, actual_width in mismatched:
                error_msg += f"    Row {row_idx}: {actual_width} columns - \"{row_strings[row_idx]}\"\n"
            error_msg += "  All rows must have the same number of tiles"
            raise ParseError(error_msg)

    return Grid(rows)


def parse_digit_grid(text: str) -> Grid[int]:
    """Parse a grid of single decimal digits."""

    def digit(char: str, address: GridAddress) -> int:
        if not char.isdigit():
            raise ValueError("expected a digit 0-9")
        return int(char)

    return parse_char_grid(text, digit)


def find_markers(text: str, markers: str) -> dict[str, GridAddress]:
    """
    Locate marker characters (such as 'S' and 'E') in a character grid.

    Raises:
        ParseError: if any marker is missing or appears more than once
    """
    found: dict[str, GridAddress] = {}
    for y, line in enumerate(input_lines(text)):
        for x, char in enumerate(line):
            if char in markers:
                if char in found:
                    raise ParseError(
                        f"Duplicate marker '{char}' at column {x}, row {y} (first seen at {found[char]})"
                    )
                found[char] = GridAddress(x, y)
    missing = [m for m in markers if m not in found]
    if missing:
        raise ParseError(f"Missing marker(s) {', '.join(repr(m) for m in missing)} in grid input")
    return found


# =============================================================================
# Integer Helpers
# =============================================================================


def parse_int(s: str) -> int:
    try:
        return int(s.strip())
    except ValueError as e:
        raise ParseError(f"Couldn't parse integer from '{s}'") from e


def parse_ints(line: str, sep: str | None = None) -> list[int]:
    """Parse a line of integers separated by `sep` (any whitespace if None)."""
    return [parse_int(part) for part in line.split(sep) if part.strip()]


def parse_pair(line: str, sep: str = ",") -> tuple[int, int]:
    """Parse exactly two integers, e.g. '3,4'."""
    left, found, right = line.partition(sep)
    if not found:
        raise ParseError(f"Expected format 'a{sep}b', missing '{sep}' in line: '{line}'")
    return parse_int(left), parse_int(right)
