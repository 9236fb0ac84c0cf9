"""Hunk boundary tracking and navigation."""

from typing import List, Sequence


class HunkTracker:
    """Records the first row of each contiguous run of changed rows."""

    def __init__(self) -> None:
        """Initialize the tracker outside any hunk."""
        self._in_hunk = False
        self._hunk_starts: List[int] = []

    @property
    def hunk_starts(self) -> List[int]:
        """Get the row indices where hunks start."""
        return list(self._hunk_starts)

    def observe(self, row_index: int, changed: bool) -> None:
        """
        Observe the next row.

        Args:
            row_index: Index of the row being observed
            changed: True if the row has a filler side or any highlights
        """
        if changed and not self._in_hunk:
            self._hunk_starts.append(row_index)
            self._in_hunk = True

        elif not changed:
            self._in_hunk = False


def next_hunk(hunk_starts: Sequence[int], row: int) -> int | None:
    """Get the first hunk start after `row`, or None if there isn't one."""
    for start in hunk_starts:
        if start > row:
            return start

    return None


def previous_hunk(hunk_starts: Sequence[int], row: int) -> int | None:
    """Get the last hunk start before `row`, or None if there isn't one."""
    for start in reversed(hunk_starts):
        if start < row:
            return start

    return None


def first_hunk(hunk_starts: Sequence[int]) -> int | None:
    """Get the first hunk start, if any."""
    return hunk_starts[0] if hunk_starts else None


def last_hunk(hunk_starts: Sequence[int]) -> int | None:
    """Get the last hunk start, if any."""
    return hunk_starts[-1] if hunk_starts else None
