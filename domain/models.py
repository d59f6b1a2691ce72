from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


# Transfer vocabulary used by the ledger service. Values outside these
# sets are kept verbatim on the `Transfer` model.
TRANSFER_TYPE_REQUEST = "Request"
TRANSFER_TYPE_SEND = "Send"

TRANSFER_STATUS_PENDING = "Pending"
TRANSFER_STATUS_APPROVED = "Approved"
TRANSFER_STATUS_REJECTED = "Rejected"


@dataclass(frozen=True)
class LoginUser:
    """Username/password pair submitted to the login and register endpoints."""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"LoginUser(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class Identity:
    """
    The logged-in user as issued by the ledger service.

    `token` is the opaque bearer credential; the client never inspects it.
    """

    user_id: int
    username: str
    token: str

    def __repr__(self) -> str:
        return f"Identity(user_id={self.user_id!r}, username={self.username!r})"


@dataclass(frozen=True)
class AccountBalance:
    """Point-in-time balance snapshot for one account. Never cached."""

    owner_id: int
    balance: Decimal


@dataclass(frozen=True)
class UserSummary:
    user_id: int
    username: str


@dataclass(frozen=True)
class Transfer:
    """
    A movement of funds between two accounts.

    Transfer IDs are assigned by the ledger service; the client only ever
    receives them.
    """

    transfer_id: int
    from_user_id: int
    to_user_id: int
    amount: Decimal
    status: str
    type: str
