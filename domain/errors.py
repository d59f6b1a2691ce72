from __future__ import annotations

from typing import Optional


class LedgerClientError(Exception):
    """
    Base class for every failure reported by the client core.

    `status_code` is set when the failure came from an HTTP response.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(LedgerClientError):
    """Bad input, detected locally or rejected by the service."""


class InsufficientFundsError(ValidationError):
    """The service refused a transfer because the sender's balance is too low."""


class AuthenticationError(LedgerClientError):
    """Bad credentials, or a missing/expired token on an authenticated call."""


class NotFoundError(LedgerClientError):
    """The requested resource does not exist or is not visible to the caller."""


class TransportError(LedgerClientError):
    """Network failure, timeout, server error or an undecodable response."""
