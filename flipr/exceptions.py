"""Exceptions for the Flipr library."""

from __future__ import annotations


class FliprError(Exception):
    """Base exception for Flipr errors."""


class FliprAuthenticationError(FliprError):
    """Authentication against the Flipr API failed."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        error: str | None = None,
        description: str | None = None,
    ) -> None:
        """Initialize the error with the vendor's status and error fields."""
        self.status = status
        self.error = error
        self.description = description
        if status is not None:
            message = f"{message}: {status} {error} {description}"
        super().__init__(message)


class FliprConnectionError(FliprError):
    """Could not reach the Flipr API."""


class FliprDataError(FliprError):
    """The Flipr API returned data that could not be parsed."""


class FliprConfigError(FliprError):
    """The platform configuration is invalid."""
