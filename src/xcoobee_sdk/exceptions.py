"""
Custom exceptions for the XcooBee SDK.
Provides meaningful error classes for client consumers.

Argument and state validation errors are raised directly to the caller.
Every other error is caught at the service boundary and returned inside an
`ErrorResponse`.
"""

from typing import Any, Optional


class XcooBeeError(Exception):
    """
    Base exception for all SDK-level failures.

    Args:
        message (str): Short explanation of the error.
        details (Any | None): Optional structured details (e.g., GraphQL errors).
    """

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidArgumentError(XcooBeeError, ValueError):
    """A required argument is missing or malformed."""


class IllegalStateError(XcooBeeError, RuntimeError):
    """The SDK was used before a default configuration was set."""


class TransportError(XcooBeeError):
    """
    Failure surfaced by the HTTP transport, the GraphQL endpoint or the
    file upload endpoint (network failure, non-2xx, malformed payload).
    """

    def __init__(
        self,
        message: str,
        details: Optional[Any] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, details=details)
        self.status_code = status_code


class TokenError(TransportError):
    """An API access token could not be obtained."""


class DomainError(XcooBeeError):
    """A structurally successful response lacks the expected data."""
