"""Shared fixtures and utilities for diffview tests."""

import subprocess
from typing import Dict, List, Sequence, Tuple

import pytest

from diffview.diffview_types import (
    AlignmentPlan, ChangeGroup, DiffFile, DiffLineEntry, DiffLineSide, FileStatus, LineChange
)


class DiffViewTestHelpers:
    """Helper utilities for building difftastic inputs."""

    @staticmethod
    def change(start: int, end: int, content: str = "", tag: str = "") -> LineChange:
        """Create a line change."""
        return LineChange(start, end, content, tag)

    @staticmethod
    def side(line_number: int, changes: List[LineChange]) -> DiffLineSide:
        """Create one side of a diff line entry."""
        return DiffLineSide(line_number, changes)

    @staticmethod
    def entry(lhs: DiffLineSide | None = None, rhs: DiffLineSide | None = None) -> DiffLineEntry:
        """Create a diff line entry."""
        return DiffLineEntry(lhs, rhs)

    @staticmethod
    def make_file(
        status: FileStatus = FileStatus.CHANGED,
        aligned_lines: AlignmentPlan | None = None,
        chunks: List[ChangeGroup] | None = None,
        path: str = "src/lib.rs",
        language: str = "Rust"
    ) -> DiffFile:
        """Create a difftastic file entry."""
        return DiffFile(
            path=path,
            language=language,
            status=status,
            aligned_lines=aligned_lines or [],
            chunks=chunks or []
        )


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return DiffViewTestHelpers


class FakeCommands:
    """
    Scripted replacement for subprocess.run.

    Responses are keyed by the command's argument tuple.  Unknown commands
    exit with status 1, like a failed git or jj lookup.
    """

    def __init__(self) -> None:
        self.responses: Dict[Tuple[str, ...], Tuple[int, str, str]] = {}
        self.calls: List[Tuple[str, ...]] = []
        self.environments: List[Dict[str, str] | None] = []
        self.raise_for: Dict[Tuple[str, ...], OSError] = {}

    def add(self, args: Sequence[str], stdout: str = "", stderr: str = "", returncode: int = 0) -> None:
        """Script a response for a command."""
        self.responses[tuple(args)] = (returncode, stdout, stderr)

    def fail_to_start(self, args: Sequence[str], error: OSError) -> None:
        """Make a command fail as if the executable couldn't be started."""
        self.raise_for[tuple(args)] = error

    def __call__(self, args, capture_output=False, env=None, cwd=None, check=False):
        key = tuple(args)
        self.calls.append(key)
        self.environments.append(env)
        if key in self.raise_for:
            raise self.raise_for[key]

        returncode, stdout, stderr = self.responses.get(key, (1, "", f"unknown command: {' '.join(args)}"))
        return subprocess.CompletedProcess(
            list(args),
            returncode,
            stdout=stdout.encode('utf-8'),
            stderr=stderr.encode('utf-8')
        )


@pytest.fixture
def fake_commands(monkeypatch):
    """Replace subprocess.run in the VCS backend with scripted responses."""
    commands = FakeCommands()
    monkeypatch.setattr("diffview.vcs_backend.subprocess.run", commands)
    return commands


@pytest.fixture
def hunk_file():
    """A changed file with two separate hunks: rows 1-2 and row 5."""
    h = DiffViewTestHelpers
    return h.make_file(
        aligned_lines=[(0, 0), (1, 1), (2, 2), (3, 3), (4, 4), (None, 5)],
        chunks=[
            [
                h.entry(h.side(1, [h.change(0, 3)]), h.side(1, [h.change(0, 3)])),
                h.entry(h.side(2, [h.change(0, 3)]), h.side(2, [h.change(0, 3)])),
            ],
            [h.entry(None, h.side(5, [h.change(0, 3)]))],
        ]
    )


@pytest.fixture
def hunk_file_lines():
    """Old and new lines matching the hunk_file fixture."""
    return (
        ["aaa", "bbb", "ccc", "ddd", "eee"],
        ["aaa", "BBB", "CCC", "ddd", "eee", "fff"]
    )
