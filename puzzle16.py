"""
Day 16: reindeer maze.

Each tile of the maze is a cluster of four nodes, one per heading. Advancing
forward moves to the adjacent address with the same heading (cost 1);
rotating stays put and changes heading (cost 1000). Part 1 is the lowest
score from S to E; part 2 counts the tiles on any lowest-score route.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import simple_chalk as chalk  # type: ignore[import-untyped]

from ascii_render import render_grid
from geometry import Cardinal, CardinalSet, Grid, GridAddress
from grid_parser import find_markers, parse_char_grid
from search import NoPathError, ShortestPaths, dijkstra, path_cardinals

logger = logging.getLogger(__name__)

FORWARD_COST = 1
TURN_COST = 1000
START_HEADING = Cardinal.EAST


class MazeTile(Enum):
    WALL = "#"
    OPEN = "."


@dataclass(frozen=True)
class Maze:
    tiles: Grid[MazeTile]
    start: GridAddress
    end: GridAddress

    def is_open(self, address: GridAddress) -> bool:
        return self.tiles.get_at(address) is MazeTile.OPEN


@dataclass(frozen=True)
class MazePosition:
    address: GridAddress
    heading: Cardinal

    def adjacent(self) -> list[tuple[MazePosition, int]]:
        """Positions reachable in one move, with the cost of that move."""
        out = []
        ahead = self.address.checked_add(self.heading.delta)
        if ahead is not None:
            out.append((MazePosition(ahead, self.heading), FORWARD_COST))
        out.append((MazePosition(self.address, self.heading.turn_left()), TURN_COST))
        out.append((MazePosition(self.address, self.heading.turn_right()), TURN_COST))
        return out


class MazeRenderer:
    """S/E markers, walls, and box-drawing route glyphs where `route` passes."""

    def __init__(
        self,
        maze: Maze,
        route: dict[GridAddress, CardinalSet] | None = None,
        highlight: set[GridAddress] | None = None,
    ) -> None:
        self.maze = maze
        self.route = route or {}
        self.highlight = highlight or set()

    def render_tile_char(self, tile: MazeTile, address: GridAddress) -> str:
        if address == self.maze.start:
            return chalk.magenta("S")
        if address == self.maze.end:
            return chalk.cyan("E")
        cardinals = self.route.get(address)
        if tile is MazeTile.WALL:
            return chalk.red("!") if cardinals else "#"
        if cardinals:
            return chalk.yellow(cardinals.to_box_drawing_char())
        if address in self.highlight:
            return chalk.green("O")
        return " "


def parse_maze(text: str) -> Maze:
    markers = find_markers(text, "SE")

    def tile(char: str, address: GridAddress) -> MazeTile:
        match char:
            case "#":
                return MazeTile.WALL
            case "." | "S" | "E":
                return MazeTile.OPEN
            case _:
                raise ValueError("unexpected maze character")

    return Maze(parse_char_grid(text, tile), markers["S"], markers["E"])


def solve_maze(maze: Maze, start_heading: Cardinal = START_HEADING) -> ShortestPaths[MazePosition] | None:
    """Lowest-score routes from the start (facing `start_heading`) to the end, any final heading."""
    return dijkstra(
        MazePosition(maze.start, start_heading),
        lambda pos: [(nxt, cost) for nxt, cost in pos.adjacent() if maze.is_open(nxt.address)],
        lambda pos: pos.address == maze.end,
    )


def best_seats(solution: ShortestPaths[MazePosition]) -> set[GridAddress]:
    """Addresses on at least one lowest-score route."""
    return {pos.address for pos in solution.optimal_nodes()}


def solve(text: str) -> tuple[int, int]:
    maze = parse_maze(text)
    logger.info("Parsed input file:\n%s", render_grid(maze.tiles, MazeRenderer(maze)))

    solution = solve_maze(maze)
    if solution is None:
        raise NoPathError("Couldn't find path from start to end")

    route = path_cardinals(solution.path(), key=lambda pos: pos.address)
    seats = best_seats(solution)
    logger.info("Solved:\n%s", render_grid(maze.tiles, MazeRenderer(maze, route, seats)))
    return solution.cost, len(seats)


def run(input_path: Path, example: bool = False) -> None:
    part1, part2 = solve(input_path.read_text())
    logger.info("Part 1 cost: %s", chalk.yellow(str(part1)))
    logger.info("Part 2 tiles on a best path: %s", chalk.green(str(part2)))
