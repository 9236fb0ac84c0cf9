"""
Per-file processing of difftastic output into display rows.

Created and deleted files have no alignment plan, so every line becomes a
full-line addition or deletion.  Changed files use difftastic's alignment
plan to pair lines from both revisions.
"""

from typing import List, Tuple

from diffview.change_index import build_change_index
from diffview.hunk_tracker import HunkTracker
from diffview.row_builder import build_rows
from diffview.diffview_types import DiffFile, DisplayFile, FileStatus, Row, Side


def process_file(
    file: DiffFile,
    old_lines: List[str],
    new_lines: List[str],
    stats: Tuple[int, int] | None = None
) -> DisplayFile:
    """
    Process a difftastic file entry into display-ready form.

    Args:
        file: File entry from difftastic
        old_lines: Lines of the old revision (empty if unavailable)
        new_lines: Lines of the new revision (empty if unavailable)
        stats: Optional (additions, deletions) from an authoritative source,
            overriding the counts derived here

    Returns:
        The processed display file
    """
    if file.status == FileStatus.CREATED:
        display_file = _process_created(file, new_lines)

    elif file.status == FileStatus.DELETED:
        display_file = _process_deleted(file, old_lines)

    else:
        display_file = _process_changed(file, old_lines, new_lines)

    if stats is not None:
        display_file.additions, display_file.deletions = stats

    return display_file


def _process_created(file: DiffFile, new_lines: List[str]) -> DisplayFile:
    rows = [Row(left=Side.filler(), right=Side.with_full_highlight(line)) for line in new_lines]

    return DisplayFile(
        path=file.path,
        language=file.language,
        status=file.status,
        additions=len(rows),
        deletions=0,
        rows=rows,
        hunk_starts=[0] if rows else []
    )


def _process_deleted(file: DiffFile, old_lines: List[str]) -> DisplayFile:
    rows = [Row(left=Side.with_full_highlight(line), right=Side.filler()) for line in old_lines]

    return DisplayFile(
        path=file.path,
        language=file.language,
        status=file.status,
        additions=0,
        deletions=len(rows),
        rows=rows,
        hunk_starts=[0] if rows else []
    )


def _process_changed(file: DiffFile, old_lines: List[str], new_lines: List[str]) -> DisplayFile:
    old_index, new_index = build_change_index(file.chunks)
    hunk_tracker = HunkTracker()
    rows = build_rows(file.aligned_lines, old_lines, new_lines, old_index, new_index, hunk_tracker)

    # Distinct touched lines per side; a proxy for real added/deleted counts
    return DisplayFile(
        path=file.path,
        language=file.language,
        status=file.status,
        additions=len(new_index),
        deletions=len(old_index),
        rows=rows,
        hunk_starts=hunk_tracker.hunk_starts
    )
