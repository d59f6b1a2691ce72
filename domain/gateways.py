from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Protocol

from .models import AccountBalance, Identity, LoginUser, Transfer, UserSummary


class AuthGateway(Protocol):
    """
    Abstraction over the ledger service's account endpoints.

    Implementations are responsible for:
    - Hiding transport details (URLs, status codes, JSON shapes).
    - Raising the `domain.errors` taxonomy on failure.
    """

    def register(self, login_user: LoginUser) -> None:
        """Create a new account. Raises `AuthenticationError` if refused."""

        ...

    def login(self, login_user: LoginUser) -> Identity:
        """Exchange credentials for an `Identity` carrying a bearer token."""

        ...


class LedgerGateway(Protocol):
    """
    Authenticated access to balances, users and transfers.

    Every call except `update_token` requires a token to be attached.
    """

    def update_token(self, token: Optional[str]) -> None:
        """Attach a new credential, or detach it when `token` is None."""

        ...

    def get_balance(self) -> AccountBalance:
        ...

    def list_users(self) -> List[UserSummary]:
        ...

    def list_transfers(self) -> List[Transfer]:
        ...

    def get_transfer_detail(self, transfer_id: int) -> Transfer:
        ...

    def submit_transfer(
        self,
        from_user_id: int,
        to_user_id: int,
        amount: Decimal,
    ) -> Transfer:
        """
        Ask the service to move `amount` between two accounts.

        Implementations must validate `amount > 0` and distinct user IDs
        before issuing any request.
        """

        ...
