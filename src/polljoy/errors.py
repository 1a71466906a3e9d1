"""Exceptions raised while talking to the polljoy backend."""

from typing import Optional


class PolljoyError(Exception):
    """Base exception for polljoy connector failures."""


class TransportError(PolljoyError):
    """The outbound call failed or the backend answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedBackendResponse(PolljoyError):
    """The backend answered with a body that is not JSON."""


class MissingResponseToken(PolljoyError):
    """A response submission arrived without a poll token."""
