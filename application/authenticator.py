from __future__ import annotations

from typing import Optional

from application.results import LoginResult, OperationResult
from domain.errors import LedgerClientError
from domain.gateways import AuthGateway
from domain.models import Identity, LoginUser
from domain.session import Session


class Authenticator:
    """
    Registers and logs users in against the ledger service.

    State lives on the shared `Session`: LoggedOut while `session.identity`
    is None, LoggedIn otherwise. Failures are reported as results, never
    raised, so callers can prompt again and retry straight away.
    """

    def __init__(self, gateway: AuthGateway, session: Session) -> None:
        self._gateway = gateway
        self._session = session

    @property
    def identity(self) -> Optional[Identity]:
        return self._session.identity

    @property
    def is_logged_in(self) -> bool:
        return self._session.identity is not None

    def register(self, username: str, password: str) -> OperationResult:
        """
        Create an account. Session state is left untouched either way;
        a successful registration does not log the user in.
        """

        try:
            self._gateway.register(LoginUser(username=username, password=password))
        except LedgerClientError as exc:
            return OperationResult(success=False, error_message=exc.message)

        return OperationResult(success=True)

    def login(self, username: str, password: str) -> LoginResult:
        try:
            identity = self._gateway.login(LoginUser(username=username, password=password))
        except LedgerClientError as exc:
            return LoginResult(success=False, error_message=exc.message)

        if not identity.token:
            return LoginResult(
                success=False,
                error_message="Login response did not include a token.",
            )

        self._session.identity = identity
        return LoginResult(success=True, identity=identity)

    def logout(self) -> None:
        self._session.identity = None
        self._session.credentials.clear()
