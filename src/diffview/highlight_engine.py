"""
Highlight region computation for a single line.

Change ranges are turned into the smallest set of regions that reads
cleanly in a side-by-side viewer:

- a single change spanning the line becomes a full-line highlight
- regions separated only by whitespace are merged
- regions covering every non-whitespace character become a full-line highlight
"""

from typing import List, Sequence, Tuple

from diffview.diffview_types import HighlightRegion, LineChange


_ASCII_WHITESPACE = frozenset(b" \t\n\x0c\r")
_INFORMATION_SEPARATORS = "\x1c\x1d\x1e\x1f"


def compute_highlights(line_text: str, changes: Sequence[LineChange]) -> List[HighlightRegion]:
    """
    Compute highlight regions for a line from its changes.

    Args:
        line_text: The full line content
        changes: Byte-range changes on this line

    Returns:
        Ordered highlight regions, empty if the line has no changes
    """
    if not changes:
        return []

    line_bytes = line_text.encode('utf-8')

    if len(changes) == 1 and changes[0].start == 0 and changes[0].end >= len(line_bytes):
        return [HighlightRegion.full_line()]

    regions = sorted(((change.start, change.end) for change in changes), key=lambda r: r[0])
    merged = merge_regions(regions, line_bytes)

    if covers_all_non_whitespace(line_text, merged):
        return [HighlightRegion.full_line()]

    return [HighlightRegion(start, end) for start, end in merged]


def merge_regions(regions: Sequence[Tuple[int, int]], line_bytes: bytes) -> List[Tuple[int, int]]:
    """
    Merge sorted regions that overlap, touch, or are separated only by whitespace.

    Args:
        regions: (start, end) byte ranges sorted by start
        line_bytes: UTF-8 encoded line content

    Returns:
        Merged (start, end) byte ranges
    """
    merged: List[Tuple[int, int]] = []

    for start, end in regions:
        if merged:
            last_start, last_end = merged[-1]
            if last_end >= start or is_whitespace_only(line_bytes, last_end, start):
                merged[-1] = (last_start, max(last_end, end))
                continue

        merged.append((start, end))

    return merged


def is_whitespace_only(line_bytes: bytes, start: int, end: int) -> bool:
    """
    Check whether a byte range holds only ASCII whitespace.

    A range reaching outside the line is never whitespace-only.
    """
    if start < 0 or start > end or end > len(line_bytes):
        return False

    return all(b in _ASCII_WHITESPACE for b in line_bytes[start:end])


def _is_whitespace_char(char: str) -> bool:
    # str.isspace() also accepts the \x1c-\x1f separators, which aren't Unicode White_Space
    return char.isspace() and char not in _INFORMATION_SEPARATORS


def covers_all_non_whitespace(line_text: str, regions: Sequence[Tuple[int, int]]) -> bool:
    """
    Check whether regions cover the first byte of every non-whitespace character.

    Characters are visited one at a time so multi-byte characters count once.

    Args:
        line_text: The full line content
        regions: (start, end) byte ranges

    Returns:
        True if every non-whitespace character is covered and at least one exists
    """
    has_non_whitespace = False
    offset = 0

    for char in line_text:
        if not _is_whitespace_char(char):
            has_non_whitespace = True
            if not any(start <= offset < end for start, end in regions):
                return False

        offset += len(char.encode('utf-8'))

    return has_non_whitespace
