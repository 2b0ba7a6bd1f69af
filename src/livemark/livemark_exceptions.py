"""Custom exceptions for livemark."""

from typing import Any


class LivemarkError(Exception):
    """Base exception for livemark operations."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class GrammarError(LivemarkError):
    """Raised when a grammar registry is configured incorrectly."""


class LineRangeError(LivemarkError, IndexError):
    """Raised when a line number or character position is outside the document."""


class ConfigError(LivemarkError):
    """Raised when a configuration file cannot be loaded."""
