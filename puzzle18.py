"""
Day 18: falling bytes.

Bytes land one at a time on a square memory grid, corrupting the tile they hit.
Part 1 is the shortest walk from the top-left to the bottom-right corner after
the first batch has fallen; part 2 is the first byte that cuts every route.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import simple_chalk as chalk  # type: ignore[import-untyped]

from ascii_render import render_path_overlay
from geometry import Cardinal, CardinalSet, Grid, GridAddress
from grid_parser import input_lines, parse_pair
from search import NoPathError, astar, path_cardinals

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemorySpace:
    size: int
    first_batch: int


EXAMPLE_SPACE = MemorySpace(size=7, first_batch=12)
REAL_SPACE = MemorySpace(size=71, first_batch=1024)


class CorruptionRenderer:
    def render_tile_char(self, corrupted: bool, address: GridAddress) -> str:
        return "#" if corrupted else "."


def parse_bytes(text: str) -> list[GridAddress]:
    return [GridAddress(*parse_pair(line)) for line in input_lines(text)]


def find_path(corrupted: Grid[bool]) -> tuple[list[GridAddress], int] | None:
    """Shortest route between opposite corners, avoiding corrupted tiles."""
    start = GridAddress(0, 0)
    goal = GridAddress(corrupted.width - 1, corrupted.height - 1)
    if corrupted[start] or corrupted[goal]:
        return None

    def successors(here: GridAddress) -> Iterator[tuple[GridAddress, int]]:
        for cardinal in Cardinal:
            neighbor = here.checked_add(cardinal.delta)
            if neighbor is not None and corrupted.get_at(neighbor) is False:
                yield neighbor, 1

    return astar(start, successors, lambda here: here.manhattan(goal), lambda here: here == goal)


def render_memory(corrupted: Grid[bool], route: dict[GridAddress, CardinalSet]) -> str:
    return render_path_overlay(corrupted, route, CorruptionRenderer())


def solve(falling: list[GridAddress], space: MemorySpace) -> tuple[int, GridAddress | None]:
    """
    Returns:
        (part 1 step count, first blocking byte or None if the exit stays reachable)
    """
    corrupted = Grid.new_default(space.size, space.size, False)
    first_batch, second_batch = falling[: space.first_batch], falling[space.first_batch :]
    for address in first_batch:
        corrupted.set_at(address, True)

    found = find_path(corrupted)
    if found is None:
        raise NoPathError(f"No path after the first {space.first_batch} bytes")
    path, cost = found
    route = path_cardinals(path)
    logger.info(
        "After %s bytes fallen, best path is %d steps:\n%s",
        chalk.green(str(space.first_batch)),
        cost,
        render_memory(corrupted, route),
    )

    # Advance through the remaining bytes in order, searching again only when
    # a byte lands on the current route.
    for i, address in enumerate(second_batch):
        corrupted.set_at(address, True)
        if address not in route:
            continue
        rerouted = find_path(corrupted)
        if rerouted is None:
            logger.info("Last possible path:\n%s", render_memory(corrupted, route))
            logger.info("Final blocker found at %s", chalk.blueBright(str(address)))
            return cost, address
        logger.debug("recomputed path due to new obstacle at (index: %d, %s)", i, address)
        route = path_cardinals(rerouted[0])

    logger.warning("path still available after all %d bytes fell", len(falling))
    return cost, None


def run(input_path: Path, example: bool = False) -> None:
    space = EXAMPLE_SPACE if example else REAL_SPACE
    part1, blocker = solve(parse_bytes(input_path.read_text()), space)
    logger.info("Part 1: %s steps", chalk.green(str(part1)))
    logger.info("Part 2: %s", chalk.blueBright(str(blocker)) if blocker is not None else "no blocking byte")
