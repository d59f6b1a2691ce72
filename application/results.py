from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from domain.errors import LedgerClientError
from domain.models import Identity, Transfer


@dataclass
class OperationResult:
    """Generic result type for simple operations."""

    success: bool
    error_message: Optional[str] = None


@dataclass
class LoginResult:
    """Result of a login attempt. `identity` is set only on success."""

    success: bool
    error_message: Optional[str] = None
    identity: Optional[Identity] = None


@dataclass
class TransferResult:
    """
    Result of sending funds.

    `error` keeps the original exception so callers can tell an
    insufficient balance apart from an expired session.
    """

    success: bool
    error_message: Optional[str] = None
    transfer: Optional[Transfer] = None
    error: Optional[LedgerClientError] = None
