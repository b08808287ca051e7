"""
Error taxonomy for summary note operations.

Core modules raise these; the MCP tool boundary and the CLI catch them and
turn them into a text result carrying an error flag.
"""

from __future__ import annotations


class SummaryError(Exception):
    """Base class for all summary note failures."""


class ConfigurationError(SummaryError):
    """Required credentials or the association target are absent."""

    def __init__(self, missing: list[str], message: str | None = None) -> None:
        self.missing = list(missing)
        super().__init__(
            message or f"Missing required environment variables: {', '.join(self.missing)}"
        )


class ValidationError(SummaryError):
    """Malformed filter input or missing required fields."""


class NotFoundError(SummaryError):
    """No stored record matched."""


class HttpError(SummaryError):
    """The record store answered with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP-Code: {status_code}\nMessage: {message}")


class UnknownError(SummaryError):
    """Anything else, wrapped at the tool boundary."""
