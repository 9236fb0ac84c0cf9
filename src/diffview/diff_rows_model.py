"""Qt table model exposing a display file's rows to side-by-side diff views."""

from typing import Any, List, Tuple

from PySide6.QtCore import QAbstractTableModel, QModelIndex, QObject, QPersistentModelIndex, Qt

from diffview.hunk_tracker import first_hunk, last_hunk, next_hunk, previous_hunk
from diffview.diffview_types import DisplayFile, HighlightRegion, Side


def _utf16_length(text: str) -> int:
    return len(text.encode('utf-16-le')) // 2


def qt_highlight_span(content: str, region: HighlightRegion) -> Tuple[int, int]:
    """
    Convert a byte-offset highlight region to a Qt (UTF-16) span.

    Offsets that fall inside a multi-byte character snap to its start, and
    offsets past the end of the line are clamped.

    Args:
        content: Line content the region applies to
        region: Highlight region in UTF-8 byte offsets

    Returns:
        Tuple of (start, length) in Qt string positions
    """
    if region.is_full_line():
        return 0, _utf16_length(content)

    content_bytes = content.encode('utf-8')
    byte_start = min(max(region.start, 0), len(content_bytes))
    byte_end = min(max(region.end, byte_start), len(content_bytes))

    start = _utf16_length(content_bytes[:byte_start].decode('utf-8', errors='ignore'))
    end = _utf16_length(content_bytes[:byte_end].decode('utf-8', errors='ignore'))
    return start, end - start


class DiffRowsModel(QAbstractTableModel):
    """Two-column (old, new) model over the rows of one display file."""

    IS_FILLER_ROLE = int(Qt.ItemDataRole.UserRole) + 1
    HIGHLIGHTS_ROLE = int(Qt.ItemDataRole.UserRole) + 2

    OLD_COLUMN = 0
    NEW_COLUMN = 1

    def __init__(self, parent: QObject | None = None):
        """Initialize an empty model."""
        super().__init__(parent)
        self._display_file: DisplayFile | None = None

    def display_file(self) -> DisplayFile | None:
        """Get the file being displayed."""
        return self._display_file

    def set_display_file(self, display_file: DisplayFile | None) -> None:
        """Replace the file being displayed."""
        self.beginResetModel()
        self._display_file = display_file
        self.endResetModel()

    def rowCount(self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()) -> int:
        """Get the number of display rows."""
        if parent.isValid() or self._display_file is None:
            return 0

        return len(self._display_file.rows)

    def columnCount(self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()) -> int:
        """Get the number of columns: old and new."""
        if parent.isValid():
            return 0

        return 2

    def _side(self, index: QModelIndex | QPersistentModelIndex) -> Side | None:
        if self._display_file is None or not index.isValid():
            return None

        row = index.row()
        if row < 0 or row >= len(self._display_file.rows):
            return None

        display_row = self._display_file.rows[row]
        return display_row.left if index.column() == self.OLD_COLUMN else display_row.right

    def data(self, index: QModelIndex | QPersistentModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        """Get the content, filler flag, or highlight spans for one side of a row."""
        side = self._side(index)
        if side is None:
            return None

        if role == Qt.ItemDataRole.DisplayRole:
            return side.content

        if role == self.IS_FILLER_ROLE:
            return side.is_filler

        if role == self.HIGHLIGHTS_ROLE:
            spans: List[Tuple[int, int]] = []
            for region in side.highlights:
                start, length = qt_highlight_span(side.content, region)
                if length > 0:
                    spans.append((start, length))

            return spans

        return None

    def headerData(
        self,
        section: int,
        orientation: Qt.Orientation,
        role: int = Qt.ItemDataRole.DisplayRole
    ) -> Any:
        """Label the old and new columns with the file path."""
        if orientation != Qt.Orientation.Horizontal or role != Qt.ItemDataRole.DisplayRole:
            return None

        path = self._display_file.path if self._display_file is not None else ""
        if section == self.OLD_COLUMN:
            return f"a/{path}" if path else "Old"

        if section == self.NEW_COLUMN:
            return f"b/{path}" if path else "New"

        return None

    def _hunk_starts(self) -> List[int]:
        return self._display_file.hunk_starts if self._display_file is not None else []

    def next_hunk(self, row: int) -> int | None:
        """Get the row of the next hunk after `row`, if any."""
        return next_hunk(self._hunk_starts(), row)

    def previous_hunk(self, row: int) -> int | None:
        """Get the row of the previous hunk before `row`, if any."""
        return previous_hunk(self._hunk_starts(), row)

    def first_hunk(self) -> int | None:
        """Get the row of the first hunk, if any."""
        return first_hunk(self._hunk_starts())

    def last_hunk(self) -> int | None:
        """Get the row of the last hunk, if any."""
        return last_hunk(self._hunk_starts())
