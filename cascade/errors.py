"""Error taxonomy shared by the compiler, the request executor and callers.

Every remote failure carries a structured ErrorKind from the point where it
was detected, so retry decisions never depend on parsing message text.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    NETWORK = "network"
    MALFORMED_RESPONSE = "malformed_response"


class CascadeError(Exception):
    """Base class for all cascade errors."""


class MissingCredentialError(CascadeError):
    """Raised before any I/O when a required token is not configured."""


class RequestError(CascadeError):
    """Raised when a remote call fails.

    Args:
        message: Human-readable description.
        status_code: HTTP status when one was received, else None.
    """

    kind: ErrorKind = ErrorKind.NETWORK
    retryable: bool = True

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(RequestError):
    kind = ErrorKind.NOT_FOUND
    retryable = False


class UnauthorizedError(RequestError):
    kind = ErrorKind.UNAUTHORIZED
    retryable = False


class RateLimitedError(RequestError):
    kind = ErrorKind.RATE_LIMITED


class TransientNetworkError(RequestError):
    kind = ErrorKind.NETWORK


class MalformedResponseError(RequestError):
    kind = ErrorKind.MALFORMED_RESPONSE
    retryable = False


class ComponentNameError(CascadeError, ValueError):
    """A user-supplied component name is not a valid identifier."""


class DesignDataError(CascadeError, ValueError):
    """Design data could not be read as a node tree."""
