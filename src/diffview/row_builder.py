"""Aligned row construction for changed files."""

from typing import List, Sequence

from diffview.highlight_engine import compute_highlights
from diffview.hunk_tracker import HunkTracker
from diffview.diffview_types import AlignmentPlan, ChangeIndex, HighlightRegion, Row, Side


def line_at(lines: Sequence[str], line_number: int | None) -> str:
    """
    Get a line by 0-indexed number, or an empty string if it doesn't exist.

    File content may have been fetched at a different point in time than the
    diff was computed, so line numbers are not trusted to be in range.
    """
    if line_number is None or line_number < 0 or line_number >= len(lines):
        return ""

    return lines[line_number]


def _side_highlights(content: str, line_number: int | None, index: ChangeIndex) -> List[HighlightRegion]:
    if line_number is None:
        return []

    changes = index.get(line_number)
    if not changes:
        return []

    return compute_highlights(content, changes)


def build_rows(
    alignment_plan: AlignmentPlan,
    old_lines: Sequence[str],
    new_lines: Sequence[str],
    old_index: ChangeIndex,
    new_index: ChangeIndex,
    hunk_tracker: HunkTracker | None = None
) -> List[Row]:
    """
    Build one display row per alignment entry.

    Args:
        alignment_plan: (old_line, new_line) pairs in display order, None for a filler side
        old_lines: Lines of the old revision
        new_lines: Lines of the new revision
        old_index: Old-side line number to changes
        new_index: New-side line number to changes
        hunk_tracker: Optional tracker notified of each row's changed state

    Returns:
        Rows in alignment plan order
    """
    rows: List[Row] = []

    for row_index, (old_ln, new_ln) in enumerate(alignment_plan):
        left_content = line_at(old_lines, old_ln)
        right_content = line_at(new_lines, new_ln)

        left_highlights = _side_highlights(left_content, old_ln, old_index)
        right_highlights = _side_highlights(right_content, new_ln, new_index)

        if hunk_tracker is not None:
            changed = (
                old_ln is None
                or new_ln is None
                or bool(left_highlights)
                or bool(right_highlights)
            )
            hunk_tracker.observe(row_index, changed)

        rows.append(Row(
            left=Side(left_content, old_ln is None, left_highlights),
            right=Side(right_content, new_ln is None, right_highlights)
        ))

    return rows
