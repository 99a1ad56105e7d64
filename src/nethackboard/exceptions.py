# src/nethackboard/exceptions.py

"""Custom exception hierarchy for NetHackBoard.

This module provides a structured exception hierarchy that enables:
1. Inline rendering of failures at the view that triggered them
2. Detailed error context for logging and debugging
3. Clear distinction between network failures and bad user input
"""

from __future__ import annotations


class NetHackBoardError(Exception):
    """Base exception for all NetHackBoard errors.

    Attributes:
        message: Human-readable error description
        details: Optional dict with additional context for logging/debugging
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


# =============================================================================
# Network Errors (upstream API)
# =============================================================================


class ApiRequestError(NetHackBoardError):
    """Raised when a request to the leaderboard API fails.

    Covers transport failures as well as non-2xx responses. The message is
    the server-supplied ``error``/``message`` text when there is one.
    """

    def __init__(
        self,
        message: str = "Request failed",
        status_code: int | None = None,
        details: dict | None = None,
    ) -> None:
        self.status_code = status_code
        details = dict(details or {})
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message=message, details=details)


# =============================================================================
# Validation Errors (never sent upstream)
# =============================================================================


class ValidationError(NetHackBoardError):
    """Base class for validation errors."""

    pass


class ChallengeIdMissingError(ValidationError):
    """Raised when a challenge page is requested without a challenge ID."""

    def __init__(self) -> None:
        super().__init__(message="No challenge ID provided")


class InvalidViewStateError(ValidationError):
    """Raised when a sort or filter setting is not valid for a view."""

    def __init__(self, view: str, reason: str) -> None:
        super().__init__(
            message=f"Invalid view state for {view}: {reason}",
            details={"view": view, "reason": reason},
        )
