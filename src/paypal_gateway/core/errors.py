"""
Exception types raised by the gateway client.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "AuthError",
    "GatewayError",
    "OrderError",
    "TransportError",
    "ValidationError",
]


class GatewayError(Exception):
    """Base class for every error raised while talking to the payment API."""


class AuthError(GatewayError):
    """
    Raised when token acquisition, revocation, account lookup or customer
    token generation is rejected.
    """

    def __init__(self, code: Optional[str], description: Optional[str] = None) -> None:
        self.code = code or "unknown_error"
        self.description = description or ""
        super().__init__(f"{self.code}. {self.description}")


class OrderError(GatewayError):
    """Raised when an order cannot be created, fetched or captured."""

    def __init__(self, issue: Optional[str], description: Optional[str] = None) -> None:
        self.issue = issue or "UNKNOWN_ISSUE"
        self.description = description or ""
        super().__init__(f"{self.issue} {self.description}".rstrip())


class ValidationError(GatewayError):
    """Raised when a caller supplied order payload cannot be normalised."""


class TransportError(GatewayError):
    """Raised when the API could not be reached or answered with an unreadable body."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)
