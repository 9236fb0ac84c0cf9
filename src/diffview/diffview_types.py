"""Shared dataclasses for side-by-side diff display."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple


# End value meaning "highlight to the end of the line, whatever its length".
FULL_LINE_END = -1


class FileStatus(Enum):
    """Status of a file as reported by difftastic."""
    CREATED = "created"
    DELETED = "deleted"
    CHANGED = "changed"


@dataclass(frozen=True)
class LineChange:
    """
    A changed byte range within one line of one side of a diff.

    Offsets are UTF-8 byte offsets into the line, not character offsets.
    """

    start: int
    end: int  # Exclusive
    content: str = ""
    tag: str = ""  # difftastic's syntax class ("keyword", "string", ...), not interpreted here


@dataclass
class DiffLineSide:
    """Line number (0-indexed) and changes for one side of a diff line entry."""

    line_number: int
    changes: List[LineChange] = field(default_factory=list)


@dataclass
class DiffLineEntry:
    """A single diff line entry, present on the old side, the new side, or both."""

    lhs: DiffLineSide | None = None
    rhs: DiffLineSide | None = None


ChangeGroup = List[DiffLineEntry]
AlignmentPlan = List[Tuple[int | None, int | None]]
ChangeIndex = Dict[int, List[LineChange]]

# Path -> (additions, deletions), from an external statistics source such as `git diff --numstat`
FileStats = Dict[str, Tuple[int, int]]


@dataclass
class DiffFile:
    """A file entry from difftastic's JSON output."""

    path: str
    language: str
    status: FileStatus
    aligned_lines: AlignmentPlan = field(default_factory=list)
    chunks: List[ChangeGroup] = field(default_factory=list)


@dataclass(frozen=True)
class HighlightRegion:
    """A highlighted span within a line, in byte offsets."""

    start: int
    end: int  # Exclusive, or FULL_LINE_END

    @classmethod
    def full_line(cls) -> "HighlightRegion":
        """Create a region covering the whole line."""
        return cls(0, FULL_LINE_END)

    def is_full_line(self) -> bool:
        """Check whether this region covers the whole line."""
        return self.end == FULL_LINE_END


@dataclass
class Side:
    """One side (left or right) of a display row."""

    content: str
    is_filler: bool
    highlights: List[HighlightRegion] = field(default_factory=list)

    @classmethod
    def filler(cls) -> "Side":
        """Create a placeholder side used to keep both columns aligned."""
        return cls("", True, [])

    @classmethod
    def with_full_highlight(cls, content: str) -> "Side":
        """Create a side whose whole line is highlighted."""
        return cls(content, False, [HighlightRegion.full_line()])


@dataclass
class Row:
    """A single row of the side-by-side display."""

    left: Side
    right: Side


@dataclass
class DisplayFile:
    """A processed file, ready for display."""

    path: str
    language: str
    status: FileStatus
    additions: int
    deletions: int
    rows: List[Row]
    hunk_starts: List[int]  # 0-indexed rows where hunks start
