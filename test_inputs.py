"""Tests for puzzle input resolution and download."""

from pathlib import Path

import pytest
import requests

import aoc
import inputs
import puzzle_examples
from inputs import (
    BUNDLED_EXAMPLES,
    download_input,
    example_input_path,
    input_filename,
    puzzle_input_path,
    read_session,
    resolve_input,
)


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


@pytest.fixture
def no_session_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("AOC_SESSION", raising=False)
    monkeypatch.delenv("AOC_YEAR", raising=False)


class TestExampleInputs:
    """Tests for example input lookup."""

    def test_filename_is_zero_padded(self) -> None:
        assert input_filename(6) == "06.txt"
        assert input_filename(16) == "16.txt"

    def test_bundled_fallback(self, tmp_path: Path) -> None:
        assert example_input_path(12, tmp_path) == Path(str(BUNDLED_EXAMPLES / "12.txt"))

    def test_every_day_has_bundled_example(self, tmp_path: Path) -> None:
        """Fixtures resolve from the installed puzzle_examples package, not the source tree."""
        package_dir = Path(puzzle_examples.__file__).parent
        for day in aoc.PUZZLES:
            path = example_input_path(day, tmp_path)
            assert path.parent == package_dir
            assert path.read_text().strip()

    def test_user_copy_wins(self, tmp_path: Path) -> None:
        user_copy = tmp_path / "examples" / "12.txt"
        user_copy.parent.mkdir()
        user_copy.write_text("AB\nBA\n")
        assert example_input_path(12, tmp_path) == user_copy

    def test_missing_example(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="No example input for day 25"):
            example_input_path(25, tmp_path)

    def test_inputs_dir_from_environment(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("AOC_INPUTS_DIR", str(tmp_path))
        assert inputs.default_inputs_dir() == tmp_path


class TestSession:
    """Tests for session cookie lookup."""

    def test_environment_wins(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("AOC_SESSION", " abc123\n")
        (tmp_path / "session.txt").write_text("from-file")
        assert read_session(tmp_path) == "abc123"

    def test_session_file(self, no_session_env: None, tmp_path: Path) -> None:
        (tmp_path / "session.txt").write_text("from-file\n")
        assert read_session(tmp_path) == "from-file"

    def test_no_session(self, no_session_env: None, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_session(tmp_path)


class TestDownload:
    """Tests for fetching real inputs."""

    def test_download_writes_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        calls = []

        def fake_get(url: str, headers: dict[str, str], timeout: int) -> FakeResponse:
            calls.append((url, headers))
            return FakeResponse(b"1,2\n3,4\n")

        monkeypatch.setattr(requests, "get", fake_get)
        destination = tmp_path / "nested" / "18.txt"
        assert download_input(18, destination, "secret", year=2024) == 8
        assert destination.read_text() == "1,2\n3,4\n"
        url, headers = calls[0]
        assert url == "https://adventofcode.com/2024/day/18/input"
        assert headers["Cookie"] == "session=secret"

    def test_http_error_propagates(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(requests, "get", lambda *args, **kwargs: FakeResponse(b"", 400))
        destination = tmp_path / "06.txt"
        with pytest.raises(requests.HTTPError):
            download_input(6, destination, "secret", year=2024)
        assert not destination.exists()

    def test_existing_input_is_not_downloaded(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        def fail(*args: object, **kwargs: object) -> FakeResponse:
            raise AssertionError("unexpected download")

        monkeypatch.setattr(requests, "get", fail)
        (tmp_path / "06.txt").write_text("^")
        assert puzzle_input_path(6, tmp_path) == tmp_path / "06.txt"

    def test_missing_input_is_downloaded(
        self, monkeypatch: pytest.MonkeyPatch, no_session_env: None, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("AOC_YEAR", "2023")
        urls = []

        def fake_get(url: str, **kwargs: object) -> FakeResponse:
            urls.append(url)
            return FakeResponse(b"0123\n")

        monkeypatch.setattr(requests, "get", fake_get)
        (tmp_path / "session.txt").write_text("cookie")
        path = resolve_input(10, example=False, inputs_dir=tmp_path)
        assert path.read_text() == "0123\n"
        assert urls == ["https://adventofcode.com/2023/day/10/input"]

    def test_resolve_example(self, tmp_path: Path) -> None:
        assert resolve_input(20, example=True, inputs_dir=tmp_path) == Path(str(BUNDLED_EXAMPLES / "20.txt"))
