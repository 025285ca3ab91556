"""
Day 8: resonant antennas.

Every pair of same-frequency antennas projects antinodes along the line
through them. Part 1 places one antinode past each antenna, at the pair's own
spacing; part 2 keeps stepping by that spacing to the edge of the map and
counts the antennas themselves.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from itertools import combinations
from pathlib import Path

import simple_chalk as chalk  # type: ignore[import-untyped]

from ascii_render import render_grid
from geometry import Grid, GridAddress, GridDelta
from grid_parser import parse_char_grid

logger = logging.getLogger(__name__)

EMPTY = "."


@dataclass
class AntennaTile:
    frequency: str | None = None
    has_antinode: bool = False


class AntennaColors:
    def render_tile_char(self, tile: AntennaTile, address: GridAddress) -> str:
        if tile.frequency is not None:
            return (chalk.red if tile.has_antinode else chalk.yellow)(tile.frequency)
        return chalk.red("#") if tile.has_antinode else "."


def parse_antennas(text: str) -> Grid[AntennaTile]:
    def tile(char: str, address: GridAddress) -> AntennaTile:
        if char == EMPTY:
            return AntennaTile()
        if not char.isalnum():
            raise ValueError("expected '.' or an antenna frequency (letter or digit)")
        return AntennaTile(char)

    return parse_char_grid(text, tile)


def antennas_by_frequency(grid: Grid[AntennaTile]) -> dict[str, list[GridAddress]]:
    out: dict[str, list[GridAddress]] = defaultdict(list)
    for address, tile in grid.items():
        if tile.frequency is not None:
            out[tile.frequency].append(address)
    return out


def project(grid: Grid[AntennaTile], start: GridAddress, step: GridDelta, repeat: bool) -> list[GridAddress]:
    """Addresses reached by stepping from `start`, once or until leaving the grid."""
    out = []
    here = start.checked_add(step)
    while here is not None and grid.contains(here):
        out.append(here)
        if not repeat:
            break
        here = here.checked_add(step)
    return out


def place_antinodes(grid: Grid[AntennaTile], resonant: bool) -> int:
    """
    Mark antinodes on `grid` and return how many tiles have one.

    Args:
        resonant: False for one antinode past each antenna of a pair (part 1),
                  True for every multiple of the spacing, antennas included
                  (part 2)
    """
    for frequency, addresses in antennas_by_frequency(grid).items():
        for a, b in combinations(addresses, 2):
            spacing = GridDelta.vector_between(a, b)
            antinodes = project(grid, b, spacing, resonant) + project(grid, a, spacing.inverted(), resonant)
            if resonant:
                antinodes += [a, b]
            for address in antinodes:
                grid[address].has_antinode = True
        logger.debug("frequency %s: %d antennas", frequency, len(addresses))
    return sum(1 for _, tile in grid.items() if tile.has_antinode)


def solve(text: str) -> tuple[int, int]:
    initial = parse_antennas(text)
    logger.info("Input state:\n%s", render_grid(initial, AntennaColors()))

    part1_grid = initial.copy()
    part1 = place_antinodes(part1_grid, resonant=False)
    logger.info("Part 1 state:\n%s", render_grid(part1_grid, AntennaColors()))

    part2_grid = initial.copy()
    part2 = place_antinodes(part2_grid, resonant=True)
    logger.info("Part 2 state:\n%s", render_grid(part2_grid, AntennaColors()))
    return part1, part2


def run(input_path: Path, example: bool = False) -> None:
    part1, part2 = solve(input_path.read_text())
    logger.info("Part 1 count: %s", chalk.yellow(str(part1)))
    logger.info("Part 2 count: %s", chalk.green(str(part2)))
