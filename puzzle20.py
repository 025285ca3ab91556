"""
Day 20: race condition.

The track is a single corridor from S to E. A cheat disables collision for up
to N steps, letting the racer jump between two points of the corridor; it is
worth counting when it saves at least a threshold number of picoseconds.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path

import simple_chalk as chalk  # type: ignore[import-untyped]

from ascii_render import render_path_overlay
from geometry import Grid, GridAddress
from grid_parser import find_markers, parse_char_grid
from search import NoPathError, find_path, path_cardinals

logger = logging.getLogger(__name__)

SHORT_CHEAT = 2
LONG_CHEAT = 20


@dataclass(frozen=True)
class Thresholds:
    short: int
    long: int


EXAMPLE_THRESHOLDS = Thresholds(short=2, long=4)
REAL_THRESHOLDS = Thresholds(short=100, long=100)


@dataclass(frozen=True)
class Track:
    walls: Grid[bool]
    start: GridAddress
    end: GridAddress


class TrackRenderer:
    def __init__(self, track: Track) -> None:
        self.track = track

    def render_tile_char(self, wall: bool, address: GridAddress) -> str:
        if address in (self.track.start, self.track.end):
            return chalk.green("S" if address == self.track.start else "E")
        return "#" if wall else "."


def parse_track(text: str) -> Track:
    markers = find_markers(text, "SE")

    def tile(char: str, address: GridAddress) -> bool:
        if char == "#":
            return True
        if char in ".SE":
            return False
        raise ValueError("unexpected tile character")

    return Track(parse_char_grid(text, tile), markers["S"], markers["E"])


def race_path(track: Track) -> list[GridAddress] | None:
    """
    The path through the track, such that path[i] is reached i picoseconds after the start.
    """
    return find_path(
        track.start,
        lambda here: [there for _, there, wall in track.walls.neighbors(here) if not wall],
        lambda here: here == track.end,
    )


def count_skips(path: list[GridAddress], threshold: int, max_duration: int) -> int:
    """
    Count cheats between path indices i < j whose straight-line (Manhattan)
    distance fits in `max_duration` and that save at least `threshold`.

    With collision off there is nothing to search: the cost of a skip is just
    its distance.
    """
    counts_by_savings: Counter[int] = Counter()
    for i, start in enumerate(path):
        for j in range(i + threshold, len(path)):
            distance = start.manhattan(path[j])
            saved = j - i - distance
            if distance <= max_duration and saved >= threshold:
                counts_by_savings[saved] += 1
    logger.debug("Skips summary: %s", dict(sorted(counts_by_savings.items())))
    return sum(counts_by_savings.values())


def solve(text: str, thresholds: Thresholds) -> tuple[int, int]:
    track = parse_track(text)
    path = race_path(track)
    if path is None:
        raise NoPathError("Couldn't find path through track")
    logger.info(
        "Track (%d steps):\n%s",
        len(path) - 1,
        render_path_overlay(track.walls, path_cardinals(path), TrackRenderer(track)),
    )

    short = count_skips(path, thresholds.short, SHORT_CHEAT)
    logger.info("Part 1: found %s skips that save at least %dps", chalk.green(str(short)), thresholds.short)
    long = count_skips(path, thresholds.long, LONG_CHEAT)
    logger.info("Part 2: found %s skips that save at least %dps", chalk.blueBright(str(long)), thresholds.long)
    return short, long


def run(input_path: Path, example: bool = False) -> None:
    solve(input_path.read_text(), EXAMPLE_THRESHOLDS if example else REAL_THRESHOLDS)
