from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import List, Optional

import requests

from domain.errors import AuthenticationError, TransportError, ValidationError
from domain.gateways import LedgerGateway
from domain.models import (
    TRANSFER_STATUS_APPROVED,
    TRANSFER_STATUS_PENDING,
    TRANSFER_STATUS_REJECTED,
    TRANSFER_TYPE_REQUEST,
    TRANSFER_TYPE_SEND,
    AccountBalance,
    Transfer,
    UserSummary,
)
from domain.session import Session
from infrastructure.http.api_client import DEFAULT_TIMEOUT, ApiClient


# Some service versions report type/status as numeric lookup IDs.
_TRANSFER_TYPES = {1: TRANSFER_TYPE_REQUEST, 2: TRANSFER_TYPE_SEND}
_TRANSFER_STATUSES = {
    1: TRANSFER_STATUS_PENDING,
    2: TRANSFER_STATUS_APPROVED,
    3: TRANSFER_STATUS_REJECTED,
}


def _validate_positive_amount(amount) -> Decimal:
    if isinstance(amount, bool) or not isinstance(amount, (Decimal, int)):
        raise ValidationError("Amount must be a decimal value.")

    amount = Decimal(amount)
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Amount must be greater than zero.")
    return amount


class LedgerClient(ApiClient, LedgerGateway):
    """
    Authenticated client for balances, users and transfers.

    The bearer token is read from the shared `Session` on every call, so
    `update_token` takes effect for the very next request. Calls made
    without a token fail before anything is sent over the network.
    """

    def __init__(
        self,
        base_url: str,
        session: Session,
        http: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        super().__init__(base_url, http=http, timeout=timeout)
        self._session = session

    def update_token(self, token: Optional[str]) -> None:
        if token:
            self._session.credentials.set(token)
        else:
            self._session.credentials.clear()

    def _require_token(self) -> str:
        credentials = self._session.credentials
        if not credentials.is_present:
            raise AuthenticationError("You must log in before accessing the ledger.")
        return credentials.get()

    def _authenticated(self, method: str, path: str, payload: Optional[dict] = None):
        return self._request(method, path, payload=payload, token=self._require_token())

    def get_balance(self) -> AccountBalance:
        body = self._authenticated("GET", "/account")
        if not isinstance(body, dict) or "balance" not in body:
            raise TransportError("The ledger service sent a malformed balance response.")

        owner_id = body.get("userId")
        if owner_id is None and self._session.identity is not None:
            owner_id = self._session.identity.user_id
        if owner_id is None:
            raise TransportError("The balance response did not identify the account owner.")

        try:
            return AccountBalance(owner_id=int(owner_id), balance=self._to_amount(body["balance"]))
        except (TypeError, ValueError) as exc:
            raise TransportError("The ledger service sent a malformed balance response.") from exc

    def list_users(self) -> List[UserSummary]:
        rows = self._expect_list(self._authenticated("GET", "/users"), "user list")
        try:
            return [
                UserSummary(user_id=int(row["userId"]), username=str(row["username"]))
                for row in rows
            ]
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError("The ledger service sent a malformed user list.") from exc

    def list_transfers(self) -> List[Transfer]:
        rows = self._expect_list(self._authenticated("GET", "/transfers"), "transfer list")
        return [self._to_transfer(row) for row in rows]

    def get_transfer_detail(self, transfer_id: int) -> Transfer:
        return self._to_transfer(self._authenticated("GET", f"/transfers/{int(transfer_id)}"))

    def submit_transfer(
        self,
        from_user_id: int,
        to_user_id: int,
        amount: Decimal,
    ) -> Transfer:
        amount = _validate_positive_amount(amount)
        if from_user_id == to_user_id:
            raise ValidationError("You cannot send funds to yourself.")

        payload = {
            "fromUserId": int(from_user_id),
            "toUserId": int(to_user_id),
            # Decimal string, so no binary float rounding on the wire.
            "amount": str(amount),
        }
        return self._to_transfer(self._authenticated("POST", "/transfers", payload=payload))

    @staticmethod
    def _expect_list(body, what: str) -> list:
        if not isinstance(body, list):
            raise TransportError(f"The ledger service sent a malformed {what}.")
        return body

    @staticmethod
    def _to_amount(raw) -> Decimal:
        if isinstance(raw, bool) or raw is None:
            raise ValueError(f"Invalid amount: {raw!r}")
        try:
            amount = Decimal(str(raw))
        except InvalidOperation as exc:
            raise ValueError(f"Invalid amount: {raw!r}") from exc

        # JSON NaN/Infinity bypass parse_float and arrive as floats.
        if not amount.is_finite():
            raise ValueError(f"Invalid amount: {raw!r}")
        return amount

    @staticmethod
    def _to_label(raw, lookup: dict, default: str) -> str:
        if raw is None:
            return default
        if isinstance(raw, int):
            return lookup.get(raw, str(raw))
        return str(raw)

    @classmethod
    def _to_transfer(cls, row) -> Transfer:
        try:
            amount = cls._to_amount(row["amount"])
            if amount <= 0:
                raise ValueError(f"Transfer amount must be positive: {amount}")
            return Transfer(
                transfer_id=int(row["transferId"]),
                from_user_id=int(row["fromUserId"]),
                to_user_id=int(row["toUserId"]),
                amount=amount,
                # Only sends exist today, and they are approved on creation.
                status=cls._to_label(row.get("status"), _TRANSFER_STATUSES, TRANSFER_STATUS_APPROVED),
                type=cls._to_label(row.get("type"), _TRANSFER_TYPES, TRANSFER_TYPE_SEND),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise TransportError("The ledger service sent a malformed transfer.") from exc
