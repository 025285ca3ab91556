"""
Day 15: warehouse robot.

The robot follows a list of moves, pushing any row of boxes in front of it
unless a wall blocks the row. Part 2 replays the moves on a map twice as wide,
where every box spans two tiles and a vertical push can fan out across
several boxes.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

import simple_chalk as chalk  # type: ignore[import-untyped]

from ascii_render import render_grid
from geometry import Cardinal, Grid, GridAddress
from grid_parser import ParseError, find_markers, parse_char_grid

logger = logging.getLogger(__name__)


class Tile(Enum):
    WALL = "#"
    BOX = "O"
    BOX_LEFT = "["
    BOX_RIGHT = "]"
    ROBOT = "@"
    EMPTY = "."


MOVES = {
    "^": Cardinal.NORTH,
    ">": Cardinal.EAST,
    "v": Cardinal.SOUTH,
    "<": Cardinal.WEST,
}

WIDENED = {
    "#": "##",
    "O": "[]",
    "@": "@.",
    ".": "..",
}


class WarehouseColors:
    def render_tile_char(self, tile: Tile, address: GridAddress) -> str:
        if tile is Tile.WALL:
            return chalk.blue(tile.value)
        if tile is Tile.ROBOT:
            return chalk.redBright(tile.value)
        if tile is Tile.EMPTY:
            return tile.value
        return chalk.yellow(tile.value)


def parse_layout(text: str) -> tuple[Grid[Tile], GridAddress]:
    def tile(char: str, address: GridAddress) -> Tile:
        return Tile(char)

    return parse_char_grid(text, tile), find_markers(text, Tile.ROBOT.value)[Tile.ROBOT.value]


def parse_moves(text: str) -> list[Cardinal]:
    moves = []
    for char in text:
        if char.isspace():
            continue
        if char not in MOVES:
            raise ParseError(f"Unexpected move '{char}', expected one of {''.join(MOVES)}")
        moves.append(MOVES[char])
    return moves


def split_input(text: str) -> tuple[str, str]:
    """Separate the map from the moves that follow it after a blank line."""
    layout, blank, moves = text.replace("\r\n", "\n").strip().partition("\n\n")
    if not blank:
        raise ParseError("Expected a blank line between the map and the moves")
    return layout, moves


def widen(layout: str) -> str:
    return "\n".join("".join(WIDENED[char] for char in line) for line in layout.splitlines())


def step(at: GridAddress, direction: Cardinal) -> GridAddress:
    target = at.checked_add(direction)
    # The map is walled in, so nothing that can move sits on the top or left edge
    assert target is not None
    return target


def partner(at: GridAddress, tile: Tile) -> GridAddress:
    """The other half of the wide box whose `tile` half is at `at`."""
    return step(at, Cardinal.EAST if tile is Tile.BOX_LEFT else Cardinal.WEST)


def is_vertical(direction: Cardinal) -> bool:
    return direction in (Cardinal.NORTH, Cardinal.SOUTH)


def can_push(grid: Grid[Tile], at: GridAddress, direction: Cardinal) -> bool:
    """Whether the tile at `at`, and everything it would shove, can move one step."""
    tile = grid.get_at(at)
    if tile is None or tile is Tile.WALL:
        return False
    if tile is Tile.EMPTY:
        return True
    target = step(at, direction)
    if tile in (Tile.BOX_LEFT, Tile.BOX_RIGHT) and is_vertical(direction):
        return can_push(grid, target, direction) and can_push(grid, step(partner(at, tile), direction), direction)
    return can_push(grid, target, direction)


def push(grid: Grid[Tile], at: GridAddress, direction: Cardinal) -> None:
    """Move the tile at `at` one step, first moving whatever is in its way. Check can_push() first."""
    tile = grid[at]
    if tile is Tile.EMPTY:
        return
    target = step(at, direction)
    if tile in (Tile.BOX_LEFT, Tile.BOX_RIGHT) and is_vertical(direction):
        other = partner(at, tile)
        other_target = step(other, direction)
        push(grid, target, direction)
        push(grid, other_target, direction)
        grid[other_target] = grid[other]
        grid[other] = Tile.EMPTY
    else:
        push(grid, target, direction)
    grid[target] = tile
    grid[at] = Tile.EMPTY


def follow_moves(grid: Grid[Tile], robot: GridAddress, moves: list[Cardinal]) -> GridAddress:
    """Apply every move to `grid` in place, returning where the robot ends up."""
    for direction in moves:
        if can_push(grid, robot, direction):
            push(grid, robot, direction)
            robot = step(robot, direction)
        else:
            logger.debug("Blocked moving %s from %s", direction.name, robot)
    return robot


def gps_score(grid: Grid[Tile]) -> int:
    """Sum of 100 * y + x over every box, measured from a wide box's left half."""
    return sum(100 * address.y + address.x for address, tile in grid.items() if tile in (Tile.BOX, Tile.BOX_LEFT))


def simulate(layout: str, moves: list[Cardinal]) -> Grid[Tile]:
    grid, robot = parse_layout(layout)
    logger.info("Initial state:\n%s", render_grid(grid, WarehouseColors()))
    robot = follow_moves(grid, robot, moves)
    logger.info("Final state, robot at %s:\n%s", robot, render_grid(grid, WarehouseColors()))
    return grid


def solve(text: str) -> tuple[int, int]:
    layout, move_text = split_input(text)
    moves = parse_moves(move_text)
    logger.debug("%d moves", len(moves))
    return gps_score(simulate(layout, moves)), gps_score(simulate(widen(layout), moves))


def run(input_path: Path, example: bool = False) -> None:
    part1, part2 = solve(input_path.read_text())
    logger.info("Part 1 GPS sum: %s", chalk.yellow(str(part1)))
    logger.info("Part 2 GPS sum: %s", chalk.green(str(part2)))
