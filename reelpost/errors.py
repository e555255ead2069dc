"""Exception hierarchy for the upload run.

Every failure is fatal for the current run: the CLI logs the message and
exits with status 1. Nothing here is retried.
"""

from __future__ import annotations


class ReelpostError(Exception):
    """Base class for all errors raised by reelpost."""


class ConfigurationError(ReelpostError):
    """A required credential is missing from the environment."""


class RemoteContractError(ReelpostError):
    """A remote response is missing a field or has an unexpected shape."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body

    def __str__(self) -> str:
        msg = super().__str__()
        if self.body:
            return f"{msg}: {self.body}"
        return msg


class TransportError(ReelpostError):
    """Network failure or non-2xx HTTP status."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        msg = super().__str__()
        if self.status_code is not None:
            msg = f"{msg} (HTTP {self.status_code})"
        if self.body:
            msg = f"{msg}: {self.body}"
        return msg


class LocalIOError(ReelpostError):
    """The intake file could not be read or moved."""
