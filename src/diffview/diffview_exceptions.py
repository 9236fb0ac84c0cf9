"""Custom exceptions for diff display operations."""

from typing import Any


class DiffViewError(Exception):
    """Base exception for diff display operations."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class DiffToolError(DiffViewError):
    """Raised when an external command (git, jj, difft) cannot be run or fails."""


class DifftasticParseError(DiffViewError):
    """Raised when difftastic's JSON output cannot be parsed."""


class DiffViewSettingsError(DiffViewError):
    """Raised when diff view settings cannot be loaded."""
