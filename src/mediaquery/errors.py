"""Exceptions raised while resolving a filename against the metadata provider."""

from __future__ import annotations


class MediaQueryError(Exception):
    """Base exception for mediaquery failures."""


class InputError(MediaQueryError):
    """Raised when there is nothing usable to query.

    Covers a missing filename or search term, an unsupported media type, and
    the case where neither search direction produced a decision.
    """

    def __init__(self, message: str = "No Filename for Query") -> None:
        super().__init__(message)


class NoMatchError(MediaQueryError):
    """Raised when a search direction exhausts its term without a match."""

    def __init__(self, message: str = "No match available") -> None:
        super().__init__(message)


class ProviderProtocolError(MediaQueryError):
    """Raised when the provider answers a search with an unexpected status code."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"Unexpected HTTP Status Code: {status_code}")
