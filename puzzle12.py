"""
Day 12: garden plots.

Plots of the same plant form regions; each region is priced as its area times
its perimeter (part 1) or its area times its number of sides (part 2).
"""

from __future__ import annotations

import logging
from pathlib import Path

import simple_chalk as chalk  # type: ignore[import-untyped]

from ascii_render import palette_color, render_grid
from flood import Flood, PriceMetric, flood_fill
from geometry import Grid, GridAddress
from grid_parser import parse_char_grid

logger = logging.getLogger(__name__)


class RegionColors:
    """Colors each plot by its region id."""

    def __init__(self, flood: Flood[str]) -> None:
        self.flood = flood

    def render_tile_char(self, tile: str, address: GridAddress) -> str:
        return palette_color(self.flood.region_ids[address])(tile)


def parse_garden(text: str) -> Grid[str]:
    def plant(char: str, address: GridAddress) -> str:
        if not char.isalpha():
            raise ValueError("expected a plant letter")
        return char

    return parse_char_grid(text, plant)


def solve(text: str) -> tuple[int, int]:
    garden = parse_garden(text)
    logger.info("Initial grid:\n%s", render_grid(garden))

    flood = flood_fill(garden)
    logger.info("Regions:\n%s", render_grid(garden, RegionColors(flood)))

    for region in flood.regions.values():
        fences = flood.fence_count(region)
        sides = flood.side_count(region)
        logger.debug(
            "Region %s { id: %d, size: %d, fences: %d, sides: %d } - prices %d vs %d",
            palette_color(region.id)(region.label),
            region.id,
            region.size,
            fences,
            sides,
            region.size * fences,
            region.size * sides,
        )

    return flood.price(PriceMetric.PERIMETER), flood.price(PriceMetric.SIDES)


def run(input_path: Path, example: bool = False) -> None:
    part1, part2 = solve(input_path.read_text())
    logger.info("Part 1 price: %s", chalk.yellow(str(part1)))
    logger.info("Part 2 price: %s", chalk.green(str(part2)))
