"""Exception hierarchy mapped to HTTP error responses."""

from __future__ import annotations


class SocioMapError(Exception):
    """Base class for errors that carry their own HTTP status code."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SocioMapError):
    """A required request field is missing or empty."""

    status_code = 400


class UpstreamGenerationError(SocioMapError):
    """The text-generation provider failed or returned no usable text."""

    status_code = 500
