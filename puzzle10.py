"""
Day 10: hiking trails on a topographic map.

A trail starts at height 0, climbs by exactly one per step, and ends at 9.
Part 1 scores each trailhead by how many distinct 9s it reaches; part 2 by how
many distinct trails start there.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

import simple_chalk as chalk  # type: ignore[import-untyped]

from ascii_render import render_grid
from geometry import Grid, GridAddress
from grid_parser import parse_digit_grid
from search import count_paths

logger = logging.getLogger(__name__)

TRAILHEAD = 0
SUMMIT = 9


@dataclass
class TrailTile:
    height: int
    on_trail: bool = False
    score: int = 0


class TrailRenderer:
    def render_tile_char(self, tile: TrailTile, address: GridAddress) -> str:
        if not tile.on_trail:
            return "."
        if tile.score > 0:
            return chalk.green(str(tile.height))
        if tile.height == SUMMIT:
            return chalk.yellow(str(tile.height))
        return chalk.white(str(tile.height))


def uphill(heights: Grid[int]) -> Callable[[GridAddress], Iterator[GridAddress]]:
    """Neighbor function: cardinal neighbours exactly one step higher."""

    def neighbors(address: GridAddress) -> Iterator[GridAddress]:
        height = heights[address]
        for _, neighbor, neighbor_height in heights.neighbors(address):
            if neighbor_height == height + 1:
                yield neighbor

    return neighbors


def score(heights: Grid[int], distinct_paths: bool) -> tuple[int, Grid[TrailTile]]:
    """
    Sum trailhead scores over the map.

    Returns:
        (total score, grid annotated with trail membership and per-trailhead scores)
    """
    trails = heights.map(lambda height, _: TrailTile(height))
    neighbors = uphill(heights)
    total = 0

    for address, height in heights.items():
        if height != TRAILHEAD:
            continue
        result = count_paths(address, neighbors, lambda a: heights[a] == SUMMIT, distinct_paths)
        for visited in result.visited:
            trails[visited].on_trail = True
        trails[address].score = result.count
        logger.debug("Trailhead at %s has score %d", address, result.count)
        total += result.count

    return total, trails


def solve(text: str) -> tuple[int, int]:
    heights = parse_digit_grid(text)
    logger.info("Initial grid:\n%s", render_grid(heights))

    part1, trails = score(heights, distinct_paths=False)
    part2, _ = score(heights, distinct_paths=True)
    logger.info("Path grid:\n%s", render_grid(trails, TrailRenderer()))
    return part1, part2


def run(input_path: Path, example: bool = False) -> None:
    part1, part2 = solve(input_path.read_text())
    logger.info("Part 1 score: %s", chalk.green(str(part1)))
    logger.info("Part 2 score: %s", chalk.green(str(part2)))
