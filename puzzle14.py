"""
Day 14: restroom robots.

Robots move in straight lines on a map that wraps at its edges. Part 1 is the
product of the robot counts in the four quadrants after 100 seconds; part 2 is
the first second at which the robots cluster tightly enough to draw a picture.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from pathlib import Path

import simple_chalk as chalk  # type: ignore[import-untyped]

from ascii_render import render_grid
from geometry import Grid, GridAddress, GridDelta
from grid_parser import ParseError, input_lines

logger = logging.getLogger(__name__)

ROBOT_PATTERN = re.compile(r"^p=(\d+),(\d+) v=(-?\d+),(-?\d+)$")

SAFETY_SECONDS = 100
MAX_SEARCH_SECONDS = 10_000
PICTURE_SCORE = 1000


@dataclass(frozen=True)
class MapSize:
    width: int
    height: int


EXAMPLE_SIZE = MapSize(width=11, height=7)
REAL_SIZE = MapSize(width=101, height=103)


@dataclass(frozen=True)
class Robot:
    x: int
    y: int
    vx: int
    vy: int

    def step(self, seconds: int) -> Robot:
        return Robot(self.x + self.vx * seconds, self.y + self.vy * seconds, self.vx, self.vy)

    def wrapped(self, size: MapSize) -> GridAddress:
        return GridAddress(self.x % size.width, self.y % size.height)


class QuadrantRenderer:
    """Robot counts, with the middle row and column (in no quadrant) blanked out."""

    def __init__(self, size: MapSize) -> None:
        self.size = size

    def render_tile_char(self, count: int, address: GridAddress) -> str:
        if address.x == self.size.width // 2 or address.y == self.size.height // 2:
            return " "
        if count == 0:
            return "."
        return chalk.green(str(count) if count < 10 else "+")


def parse_robots(text: str) -> list[Robot]:
    robots = []
    for line in input_lines(text):
        match = ROBOT_PATTERN.match(line)
        if match is None:
            raise ParseError(f"Expected 'p=x,y v=dx,dy', got: '{line}'")
        robots.append(Robot(*(int(group) for group in match.groups())))
    return robots


def robot_count_grid(robots: list[Robot], size: MapSize) -> Grid[int]:
    grid = Grid.new_default(size.width, size.height, 0)
    for robot in robots:
        grid[robot.wrapped(size)] += 1
    return grid


def safety_factor(robots: list[Robot], size: MapSize) -> int:
    """Product of the robot counts in the NW, NE, SE and SW quadrants."""
    mid_x = size.width // 2
    mid_y = size.height // 2
    quadrants = [0, 0, 0, 0]
    for robot in robots:
        address = robot.wrapped(size)
        if address.x == mid_x or address.y == mid_y:
            continue
        east = address.x > mid_x
        south = address.y > mid_y
        quadrants[(2 if south else 0) + (east != south)] += 1
    logger.debug("Counts by quadrant: NW %d, NE %d, SE %d, SW %d", *quadrants)
    return math.prod(quadrants)


def adjacency_score(robots: list[Robot], counts: Grid[int]) -> int:
    """Number of (robot, occupied neighbour) pairs over all eight directions."""
    score = 0
    for robot in robots:
        address = GridAddress(robot.x % counts.width, robot.y % counts.height)
        for delta in GridDelta.CARDINALS_AND_DIAGONALS:
            neighbor = address.checked_add(delta)
            if neighbor is not None and (counts.get_at(neighbor) or 0) > 0:
                score += 1
    return score


def find_picture(
    robots: list[Robot],
    size: MapSize,
    max_seconds: int = MAX_SEARCH_SECONDS,
    threshold: int = PICTURE_SCORE,
) -> int | None:
    """First second whose adjacency score exceeds `threshold`, or None within `max_seconds`."""
    for seconds in range(max_seconds):
        moved = [robot.step(seconds) for robot in robots]
        counts = robot_count_grid(moved, size)
        score = adjacency_score(moved, counts)
        if score > threshold:
            logger.info(
                "Possible picture at %d seconds with score %d:\n%s",
                seconds,
                score,
                render_grid(counts, QuadrantRenderer(size)),
            )
            return seconds
    logger.warning("No picture found in %d seconds", max_seconds)
    return None


def solve(robots: list[Robot], size: MapSize) -> tuple[int, int | None]:
    logger.info("Initial state:\n%s", render_grid(robot_count_grid(robots, size), QuadrantRenderer(size)))
    later = [robot.step(SAFETY_SECONDS) for robot in robots]
    logger.info(
        "After %d seconds:\n%s",
        SAFETY_SECONDS,
        render_grid(robot_count_grid(later, size), QuadrantRenderer(size)),
    )
    return safety_factor(later, size), find_picture(robots, size)


def run(input_path: Path, example: bool = False) -> None:
    size = EXAMPLE_SIZE if example else REAL_SIZE
    part1, part2 = solve(parse_robots(input_path.read_text()), size)
    logger.info("Part 1 safety factor: %s", chalk.yellow(str(part1)))
    logger.info("Part 2: %s", chalk.green(f"{part2} seconds") if part2 is not None else "no picture found")
