"""
Puzzle input resolution.

Real inputs live in `<inputs_dir>/<DD>.txt` and are downloaded on first use
when a session cookie is available. Example inputs live in
`<inputs_dir>/examples/<DD>.txt`, falling back to the fixtures shipped as
package data in `puzzle_examples`.
"""

from __future__ import annotations

import logging
import os
from importlib.resources import files
from pathlib import Path

import requests

logger = logging.getLogger(__name__)

DEFAULT_YEAR = 2024
BUNDLED_EXAMPLES = files("puzzle_examples")
USER_AGENT = "advent-grids puzzle input fetcher"


def default_inputs_dir() -> Path:
    """`AOC_INPUTS_DIR` if set, else ./inputs."""
    return Path(os.environ.get("AOC_INPUTS_DIR", Path.cwd() / "inputs"))


def puzzle_year() -> int:
    return int(os.environ.get("AOC_YEAR", DEFAULT_YEAR))


def input_filename(day: int) -> str:
    return f"{day:02d}.txt"


def example_input_path(day: int, inputs_dir: Path | None = None) -> Path:
    """Example input for `day`: a user-provided copy wins over the bundled fixture."""
    inputs_dir = inputs_dir or default_inputs_dir()
    user_copy = inputs_dir / "examples" / input_filename(day)
    if user_copy.exists():
        return user_copy
    bundled = BUNDLED_EXAMPLES / input_filename(day)
    if not bundled.is_file():
        raise FileNotFoundError(f"No example input for day {day} (looked for {user_copy} and {bundled})")
    # pip installs packages unpacked, so the resource is a real file
    return Path(str(bundled))


def read_session(inputs_dir: Path) -> str:
    """Session cookie from `AOC_SESSION`, else `<inputs_dir>/session.txt`."""
    session = os.environ.get("AOC_SESSION")
    if session:
        return session.strip()
    session_path = inputs_dir / "session.txt"
    logger.debug("Reading %s to get the puzzle session...", session_path)
    return session_path.read_text().strip()


def download_input(day: int, destination: Path, session: str, year: int | None = None) -> int:
    """
    Download the puzzle input for `day` into `destination`.

    Returns:
        Number of bytes written

    Raises:
        requests.RequestException: on network failure or a non-2xx response
    """
    year = year or puzzle_year()
    url = f"https://adventofcode.com/{year}/day/{day}/input"
    logger.debug("Downloading %s to %s", url, destination)
    response = requests.get(
        url,
        headers={"User-Agent": USER_AGENT, "Cookie": f"session={session}"},
        timeout=30,
    )
    response.raise_for_status()
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(response.content)
    logger.debug("Downloaded %d bytes", len(response.content))
    return len(response.content)


def puzzle_input_path(day: int, inputs_dir: Path | None = None) -> Path:
    """Path to the real input for `day`, downloading it first if it is missing."""
    inputs_dir = inputs_dir or default_inputs_dir()
    path = inputs_dir / input_filename(day)
    if not path.exists():
        logger.info("%s does not exist. Will attempt to download it...", path)
        download_input(day, path, read_session(inputs_dir))
        logger.info("Download complete!")
    return path


def resolve_input(day: int, example: bool, inputs_dir: Path | None = None) -> Path:
    if example:
        return example_input_path(day, inputs_dir)
    return puzzle_input_path(day, inputs_dir)
