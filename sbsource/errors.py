"""Exceptions raised by the SmileBASIC Source client."""

from typing import Optional


class SmileSourceError(Exception):
    """Base class for every error raised by this package."""


class AuthenticationRequiredError(SmileSourceError):
    """Raised when a mutating request is attempted without an auth token."""


class TransportError(SmileSourceError):
    """Raised when a request to the API fails.

    :ivar status_code: HTTP status code of the failed response, if any.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(TransportError):
    """Raised when the API returns no record for a requested id."""
