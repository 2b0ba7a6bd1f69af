"""Custom exceptions for line diff operations."""

from typing import Any


class LineDiffError(Exception):
    """Base exception for line diff operations."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class EditScriptError(LineDiffError):
    """Raised when an edit script cannot be applied to a document."""
