"""Custom exceptions for diff review operations."""

from typing import Any


class DiffError(Exception):
    """Base exception for diff review operations."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class NoChangeDetectedError(DiffError):
    """Raised when the proposed content is identical to the original."""


class EmptyHunkSetError(DiffError):
    """Raised when differencing yields no hunks for differing content."""


class InvalidHunkReferenceError(DiffError):
    """Raised when a hunk id is not part of the current session."""


class HunkAlreadyResolvedError(DiffError):
    """Raised when a decision is made for a hunk that is no longer pending."""


class NoActiveSessionError(DiffError):
    """Raised when a session operation is attempted without an active session."""


class DiffValidationError(DiffError):
    """Raised when a hunk list is malformed (e.g., overlapping or out of range hunks)."""
