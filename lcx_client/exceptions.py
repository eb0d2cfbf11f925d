"""
Exception hierarchy for the LCX client.

Precondition errors are raised synchronously before any network I/O and are
never retried. Transport failures from aiohttp are re-raised unchanged by the
REST client, and socket failures after a connection opens are delivered
through the subscription callback instead of being raised.
"""

from pathlib import Path
from typing import Optional


class LcxError(Exception):
    """Base class for all client errors."""


class PreconditionError(LcxError, ValueError):
    """A caller error detected before any request was attempted."""


class AuthenticationError(PreconditionError):
    """API key or secret key missing for a private request or topic."""


class PayloadValidationError(PreconditionError):
    """
    Raised when a caller-supplied payload breaks an endpoint rule.

    Attributes:
        message: Human readable description, prefixed with "Validation Error".
        field: Name of the offending payload field, if known.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


class ConnectionStateError(LcxError, RuntimeError):
    """Raised when a socket operation needs a state the connection is not in."""


class ConfigLoadError(LcxError):
    """
    Raised when configuration loading fails.

    Attributes:
        message: Error message describing what went wrong.
        file_path: Path to the file that caused the error, if applicable.
        cause: Original exception that caused the error, if any.
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[Path] = None,
        cause: Optional[Exception] = None,
    ):
        self.message = message
        self.file_path = file_path
        self.cause = cause
        super().__init__(message)
