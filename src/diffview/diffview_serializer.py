"""Conversion of display files to plain data for JSON or scripting front ends."""

from typing import Any, Dict, List

from diffview.diffview_types import DisplayFile, HighlightRegion, Row, Side


def highlight_to_dict(region: HighlightRegion) -> Dict[str, int]:
    """Convert a highlight region; full-line regions keep their -1 end."""
    return {"start": region.start, "end": region.end}


def side_to_dict(side: Side) -> Dict[str, Any]:
    """Convert one side of a row."""
    return {
        "content": side.content,
        "is_filler": side.is_filler,
        "highlights": [highlight_to_dict(region) for region in side.highlights]
    }


def row_to_dict(row: Row) -> Dict[str, Any]:
    """Convert a row."""
    return {"left": side_to_dict(row.left), "right": side_to_dict(row.right)}


def display_file_to_dict(display_file: DisplayFile) -> Dict[str, Any]:
    """
    Convert a display file to plain data.

    Args:
        display_file: The processed file

    Returns:
        Dictionary of plain values with 0-indexed hunk starts
    """
    return {
        "path": display_file.path,
        "language": display_file.language,
        "status": display_file.status.value,
        "additions": display_file.additions,
        "deletions": display_file.deletions,
        "rows": [row_to_dict(row) for row in display_file.rows],
        "hunk_starts": list(display_file.hunk_starts)
    }


def display_files_to_dict(display_files: List[DisplayFile]) -> Dict[str, Any]:
    """Convert a list of display files, wrapped as {"files": [...]}."""
    return {"files": [display_file_to_dict(display_file) for display_file in display_files]}
