"""
ASCII rendering for grids.

A grid is rendered one character per tile through a TileRenderer, a small
strategy object that decides the glyph (and optional color) for each tile.
Renderers are kept apart from the grid and the search algorithms; drivers pass
whichever renderer suits the diagnostic they want to log.
"""

from __future__ import annotations

import re
from typing import Callable, Generic, Mapping, Protocol, TypeVar

import simple_chalk as chalk  # type: ignore[import-untyped]

from geometry import CardinalSet, Grid, GridAddress

Tile = TypeVar("Tile")
Tile_contra = TypeVar("Tile_contra", contravariant=True)

Colorize = Callable[[str], str]

PALETTE: list[Colorize] = [
    chalk.red,
    chalk.green,
    chalk.yellow,
    chalk.blue,
    chalk.magenta,
    chalk.cyan,
    chalk.redBright,
    chalk.greenBright,
    chalk.yellowBright,
    chalk.blueBright,
]

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


class TileRenderer(Protocol[Tile_contra]):
    """Capability for turning a single tile into a (possibly colored) glyph."""

    def render_tile_char(self, tile: Tile_contra, address: GridAddress) -> str: ...


class PlainRenderer:
    """Renders each tile with str(), uncolored."""

    def render_tile_char(self, tile: object, address: GridAddress) -> str:
        return str(tile)


PLAIN = PlainRenderer()


class FunctionRenderer(Generic[Tile]):
    """Adapts a plain function into a TileRenderer."""

    def __init__(self, fn: Callable[[Tile, GridAddress], str]) -> None:
        self._fn = fn

    def render_tile_char(self, tile: Tile, address: GridAddress) -> str:
        return self._fn(tile, address)


def palette_color(index: int) -> Colorize:
    """Stable color for an integer id (region id, grid id, ...)."""
    return PALETTE[index % len(PALETTE)]


def strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE.sub("", text)


def render_grid(grid: Grid[Tile], renderer: TileRenderer[Tile] = PLAIN) -> str:
    """Render every row of `grid` as one line of text, without a trailing newline."""
    lines: list[str] = []
    for y, row in enumerate(grid.rows):
        lines.append("".join(renderer.render_tile_char(tile, GridAddress(x, y)) for x, tile in enumerate(row)))
    return "\n".join(lines)


def render_path_overlay(
    grid: Grid[Tile],
    path_tiles: Mapping[GridAddress, CardinalSet],
    base: TileRenderer[Tile] = PLAIN,
    colorize: Colorize = chalk.yellow,
) -> str:
    """
    Render `grid` with box-drawing path glyphs drawn over the tiles in `path_tiles`.

    Tiles without a path entry fall back to `base`.
    """

    def overlay(tile: Tile, address: GridAddress) -> str:
        cardinals = path_tiles.get(address)
        if cardinals is not None and not cardinals.is_empty():
            return colorize(cardinals.to_box_drawing_char())
        return base.render_tile_char(tile, address)

    return render_grid(grid, FunctionRenderer(overlay))
