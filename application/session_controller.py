from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional

from application.authenticator import Authenticator
from application.results import LoginResult, OperationResult, TransferResult
from domain.errors import AuthenticationError, LedgerClientError
from domain.gateways import LedgerGateway
from domain.models import Identity


class SessionState(Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class SessionController:
    """
    Single entry point for the presentation layer.

    Keeps the Authenticator and the Ledger Client in step: a successful
    `login` attaches the issued token to the ledger client before
    returning, and `logout` detaches it in the same call. Ledger
    operations are only reachable through `ledger` while authenticated.
    """

    def __init__(self, authenticator: Authenticator, ledger_client: LedgerGateway) -> None:
        self._authenticator = authenticator
        self._ledger_client = ledger_client
        self._state = SessionState.ANONYMOUS

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state is SessionState.AUTHENTICATED

    @property
    def identity(self) -> Optional[Identity]:
        if not self.is_authenticated:
            return None
        return self._authenticator.identity

    @property
    def ledger(self) -> LedgerGateway:
        if not self.is_authenticated:
            raise AuthenticationError("You must log in before accessing the ledger.")
        return self._ledger_client

    def register(self, username: str, password: str) -> OperationResult:
        return self._authenticator.register(username, password)

    def login(self, username: str, password: str) -> LoginResult:
        # Logging in while authenticated switches users.
        if self._state is not SessionState.ANONYMOUS:
            self.logout()

        self._state = SessionState.AUTHENTICATING
        result = self._authenticator.login(username, password)
        if not result.success or result.identity is None:
            self._state = SessionState.ANONYMOUS
            return result

        self._ledger_client.update_token(result.identity.token)
        self._state = SessionState.AUTHENTICATED
        return result

    def logout(self) -> None:
        self._authenticator.logout()
        self._ledger_client.update_token(None)
        self._state = SessionState.ANONYMOUS

    def send_funds(self, to_user_id: int, amount: Decimal) -> TransferResult:
        """
        Send `amount` from the logged-in user to `to_user_id`.

        The sender is always the current identity; callers never supply it.
        """

        try:
            ledger = self.ledger
            identity = self._authenticator.identity
            if identity is None:
                raise AuthenticationError("You must log in before sending funds.")
            transfer = ledger.submit_transfer(identity.user_id, to_user_id, amount)
        except LedgerClientError as exc:
            return TransferResult(success=False, error_message=exc.message, error=exc)

        return TransferResult(success=True, transfer=transfer)
