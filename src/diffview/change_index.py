"""Line number lookups for difftastic change groups."""

from typing import List, Tuple

from diffview.diffview_types import ChangeGroup, ChangeIndex


def build_change_index(groups: List[ChangeGroup]) -> Tuple[ChangeIndex, ChangeIndex]:
    """
    Extract per-line changes from change groups.

    A line number that appears more than once on the same side keeps the
    last entry seen.

    Args:
        groups: Change groups from difftastic

    Returns:
        Tuple of (old_index, new_index) mapping line number to its changes
    """
    old_index: ChangeIndex = {}
    new_index: ChangeIndex = {}

    for group in groups:
        for entry in group:
            if entry.lhs is not None:
                old_index[entry.lhs.line_number] = entry.lhs.changes

            if entry.rhs is not None:
                new_index[entry.rhs.line_number] = entry.rhs.changes

    return old_index, new_index
