"""
Day 6: guard patrol.

The guard walks forward until blocked, then turns right. Part 1 counts the
tiles visited before walking off the map; part 2 counts the positions where a
single extra obstacle traps the guard in a loop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import simple_chalk as chalk  # type: ignore[import-untyped]

from ascii_render import render_grid
from geometry import Cardinal, CardinalSet, Grid, GridAddress
from grid_parser import ParseError, parse_char_grid

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 100_000

ARROWS = {
    "^": Cardinal.NORTH,
    ">": Cardinal.EAST,
    "v": Cardinal.SOUTH,
    "<": Cardinal.WEST,
}
HEADING_ARROWS = {cardinal: arrow for arrow, cardinal in ARROWS.items()}


class PatrolOutcome(Enum):
    WALKED_OFF = "walked_off"
    LOOP_DETECTED = "loop_detected"
    ABORTED = "aborted"  # step cap reached


@dataclass
class PatrolTile:
    obstacle: bool = False
    artificial: bool = False  # obstacle added while searching for loops
    traversed: CardinalSet = field(default_factory=CardinalSet)


@dataclass(frozen=True)
class Guard:
    address: GridAddress
    heading: Cardinal


@dataclass
class Patrol:
    grid: Grid[PatrolTile]
    guard: Guard | None  # None once the guard has walked off
    outcome: PatrolOutcome
    steps: int

    def num_traversed(self) -> int:
        return sum(1 for _, tile in self.grid.items() if not tile.traversed.is_empty())


class PatrolRenderer:
    def __init__(self, guard: Guard | None) -> None:
        self.guard = guard

    def render_tile_char(self, tile: PatrolTile, address: GridAddress) -> str:
        if self.guard is not None and address == self.guard.address:
            return chalk.magenta(HEADING_ARROWS[self.guard.heading])
        if tile.artificial:
            return chalk.red("O")
        if tile.obstacle:
            return "#"
        if tile.traversed.is_empty():
            return "."
        # draw the line of travel, so a northbound visit shows as a vertical bar
        line = CardinalSet()
        for heading in tile.traversed:
            line = line | heading | heading.opposite()
        return chalk.yellow(line.to_box_drawing_char())


def parse_patrol(text: str) -> tuple[Grid[PatrolTile], Guard]:
    guards: list[Guard] = []

    def tile(char: str, address: GridAddress) -> PatrolTile:
        if char == "#":
            return PatrolTile(obstacle=True)
        if char == ".":
            return PatrolTile()
        if char in ARROWS:
            guards.append(Guard(address, ARROWS[char]))
            return PatrolTile()
        raise ValueError("expected '.', '#' or a guard arrow (^ > v <)")

    grid = parse_char_grid(text, tile)
    if len(guards) != 1:
        raise ParseError(f"Expected exactly one guard in the input, found {len(guards)}")
    return grid, guards[0]


def run_patrol(grid: Grid[PatrolTile], guard: Guard, max_steps: int = DEFAULT_MAX_STEPS) -> Patrol:
    """
    Walk the guard over `grid`, marking each tile with the headings it was visited in.

    `grid` is mutated; pass a copy to keep the original layout. Revisiting a
    tile with a heading already recorded there means the guard is looping.
    After `max_steps` the patrol is abandoned with an ABORTED outcome.
    """
    here = grid[guard.address]
    here.traversed = here.traversed.add(guard.heading)
    steps = 0

    while steps < max_steps:
        steps += 1
        ahead = guard.address.checked_add(guard.heading.delta)
        ahead_tile = grid.get_at(ahead) if ahead is not None else None
        if ahead is None or ahead_tile is None:
            return Patrol(grid, None, PatrolOutcome.WALKED_OFF, steps)

        if ahead_tile.obstacle:
            guard = Guard(guard.address, guard.heading.turn_right())
        else:
            guard = Guard(ahead, guard.heading)

        here = grid[guard.address]
        if guard.heading in here.traversed:
            return Patrol(grid, guard, PatrolOutcome.LOOP_DETECTED, steps)
        here.traversed = here.traversed.add(guard.heading)

    logger.warning("Patrol abandoned after %d steps without walking off or looping", steps)
    return Patrol(grid, guard, PatrolOutcome.ABORTED, steps)


def count_loop_positions(
    initial_grid: Grid[PatrolTile],
    initial_guard: Guard,
    visited: Grid[PatrolTile],
    max_steps: int = DEFAULT_MAX_STEPS,
) -> int:
    """
    Count tiles on the original route where one added obstacle causes a loop.

    Each candidate runs against its own copy of `initial_grid`.
    """
    num_loops = 0
    num_tested = 0
    for address, tile in visited.items():
        if address == initial_guard.address or tile.traversed.is_empty():
            continue
        num_tested += 1
        altered = initial_grid.copy()
        altered[address] = PatrolTile(obstacle=True, artificial=True)
        patrol = run_patrol(altered, initial_guard, max_steps)
        if patrol.outcome is PatrolOutcome.LOOP_DETECTED:
            if num_loops == 0:
                logger.info("First loop detected in:\n%s", render_grid(patrol.grid, PatrolRenderer(patrol.guard)))
            else:
                logger.debug("Loop detected in:\n%s", render_grid(patrol.grid, PatrolRenderer(patrol.guard)))
            num_loops += 1
    logger.info("Detected %d loop-inducing positions (out of %d attempts)", num_loops, num_tested)
    return num_loops


def solve(text: str, max_steps: int = DEFAULT_MAX_STEPS) -> tuple[int, int]:
    initial_grid, initial_guard = parse_patrol(text)
    logger.info("Initial grid:\n%s", render_grid(initial_grid, PatrolRenderer(initial_guard)))

    patrol = run_patrol(initial_grid.copy(), initial_guard, max_steps)
    logger.info(
        "Part 1 patrol ended with %s:\n%s",
        patrol.outcome.value,
        render_grid(patrol.grid, PatrolRenderer(patrol.guard)),
    )
    part1 = patrol.num_traversed()
    part2 = count_loop_positions(initial_grid, initial_guard, patrol.grid, max_steps)
    return part1, part2


def run(input_path: Path, example: bool = False) -> None:
    part1, part2 = solve(input_path.read_text())
    logger.info("Part 1: visited %s tiles", chalk.yellow(str(part1)))
    logger.info("Part 2: %s loop-inducing obstacle positions", chalk.cyan(str(part2)))
