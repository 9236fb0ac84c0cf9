"""
Side-by-side display of difftastic structural diffs.

This package turns difftastic's JSON output plus the old and new file
contents into aligned display rows with per-character highlight regions
and hunk navigation markers.
"""

from diffview.change_index import build_change_index
from diffview.diff_session import DiffSession
from diffview.difftastic_parser import DifftasticParser, split_lines
from diffview.diffview_exceptions import (
    DiffToolError,
    DiffViewError,
    DiffViewSettingsError,
    DifftasticParseError,
)
from diffview.diffview_serializer import display_file_to_dict, display_files_to_dict
from diffview.diffview_settings import DiffViewSettings
from diffview.diffview_types import (
    FULL_LINE_END,
    DiffFile,
    DiffLineEntry,
    DiffLineSide,
    DisplayFile,
    FileStatus,
    HighlightRegion,
    LineChange,
    Row,
    Side,
)
from diffview.file_dispatcher import process_file
from diffview.highlight_engine import compute_highlights
from diffview.hunk_tracker import HunkTracker
from diffview.row_builder import build_rows
from diffview.vcs_backend import DiffMode, DiffRequest, GitBackend, JJBackend, VCSBackend

__all__ = [
    # Exceptions
    'DiffViewError',
    'DiffToolError',
    'DifftasticParseError',
    'DiffViewSettingsError',
    # Types
    'FULL_LINE_END',
    'FileStatus',
    'LineChange',
    'DiffLineSide',
    'DiffLineEntry',
    'DiffFile',
    'HighlightRegion',
    'Side',
    'Row',
    'DisplayFile',
    # Core
    'build_change_index',
    'compute_highlights',
    'build_rows',
    'HunkTracker',
    'process_file',
    # Collaborators
    'DifftasticParser',
    'split_lines',
    'DiffMode',
    'DiffRequest',
    'VCSBackend',
    'GitBackend',
    'JJBackend',
    'DiffSession',
    'DiffViewSettings',
    'display_file_to_dict',
    'display_files_to_dict',
]
