"""
Day 4: word search.

Part 1 counts every occurrence of XMAS in any of the eight directions. Part 2
counts the X-shaped crossings of two diagonal MAS words centered on an A.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import simple_chalk as chalk  # type: ignore[import-untyped]

from ascii_render import render_grid
from geometry import Grid, GridAddress, GridDelta
from grid_parser import parse_char_grid

logger = logging.getLogger(__name__)

WORD = "XMAS"
LETTER_COLORS = {
    "X": chalk.red,
    "M": chalk.green,
    "A": chalk.yellow,
    "S": chalk.blueBright,
}


@dataclass
class LetterTile:
    char: str
    is_match: bool = False


class XmasColors:
    """Colors matched letters; everything else is dimmed to a dot."""

    def render_tile_char(self, tile: LetterTile, address: GridAddress) -> str:
        if not tile.is_match:
            return "."
        return LETTER_COLORS.get(tile.char, chalk.white)(tile.char)


def parse_letters(text: str) -> Grid[LetterTile]:
    return parse_char_grid(text, lambda char, _: LetterTile(char))


def spells(grid: Grid[LetterTile], start: GridAddress, direction: GridDelta, word: str) -> bool:
    """Whether `word` reads from `start` stepping by `direction`."""
    here: GridAddress | None = start
    for expected in word:
        if here is None:
            return False
        tile = grid.get_at(here)
        if tile is None or tile.char != expected:
            return False
        here = here.checked_add(direction)
    return True


def mark(grid: Grid[LetterTile], start: GridAddress, direction: GridDelta, length: int) -> None:
    here: GridAddress | None = start
    for _ in range(length):
        if here is None:
            return
        grid[here].is_match = True
        here = here.checked_add(direction)


def find_words(grid: Grid[LetterTile], word: str = WORD) -> int:
    """Count (and mark) every occurrence of `word` in all eight directions."""
    found = 0
    for address in grid.addresses():
        for direction in GridDelta.CARDINALS_AND_DIAGONALS:
            if spells(grid, address, direction, word):
                mark(grid, address, direction, len(word))
                found += 1
    return found


def is_x_center(grid: Grid[LetterTile], center: GridAddress) -> bool:
    """An A whose two diagonals each read MAS in one direction or the other."""
    tile = grid.get_at(center)
    if tile is None or tile.char != "A":
        return False
    for delta in (GridDelta.UP_LEFT, GridDelta.UP_RIGHT):
        ends = [center.checked_add(delta), center.checked_add(delta.inverted())]
        chars = sorted(grid[end].char for end in ends if end is not None and grid.contains(end))
        if chars != ["M", "S"]:
            return False
    return True


def find_crosses(grid: Grid[LetterTile]) -> int:
    """Count (and mark) every X-MAS crossing."""
    found = 0
    for address in grid.addresses():
        if is_x_center(grid, address):
            grid[address].is_match = True
            for delta in GridDelta.DIAGONALS:
                corner = address.checked_add(delta)
                assert corner is not None
                grid[corner].is_match = True
            found += 1
    return found


def solve(text: str) -> tuple[int, int]:
    words_grid = parse_letters(text)
    crosses_grid = words_grid.copy()

    part1 = find_words(words_grid)
    logger.info("XMAS search result:\n%s", render_grid(words_grid, XmasColors()))
    part2 = find_crosses(crosses_grid)
    logger.info("X-MAS search result:\n%s", render_grid(crosses_grid, XmasColors()))
    return part1, part2


def run(input_path: Path, example: bool = False) -> None:
    part1, part2 = solve(input_path.read_text())
    logger.info("Found XMAS %s times", chalk.green(str(part1)))
    logger.info("Found X-MAS %s times", chalk.green(str(part2)))
