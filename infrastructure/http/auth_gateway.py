from __future__ import annotations

from domain.errors import (
    AuthenticationError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from domain.gateways import AuthGateway
from domain.models import Identity, LoginUser
from infrastructure.http.api_client import ApiClient


class HttpAuthGateway(ApiClient, AuthGateway):
    """
    `AuthGateway` backed by the ledger service's `/login` and `/register`
    endpoints. Neither call carries a bearer token.
    """

    def register(self, login_user: LoginUser) -> None:
        try:
            self._request("POST", "/register", payload=self._to_payload(login_user))
        except (ValidationError, NotFoundError) as exc:
            if exc.status_code == 409:
                raise AuthenticationError("That username is already taken.", 409) from exc
            raise AuthenticationError(exc.message, exc.status_code) from exc

    def login(self, login_user: LoginUser) -> Identity:
        try:
            body = self._request("POST", "/login", payload=self._to_payload(login_user))
        except (AuthenticationError, ValidationError, NotFoundError) as exc:
            raise AuthenticationError("Invalid username or password.", exc.status_code) from exc

        return self._to_identity(body)

    @staticmethod
    def _to_payload(login_user: LoginUser) -> dict:
        return {"username": login_user.username, "password": login_user.password}

    @staticmethod
    def _to_identity(body) -> Identity:
        # The service answers either with a flat `{token, userId, username}`
        # object or with the user nested under `user`.
        if not isinstance(body, dict):
            raise TransportError("The ledger service sent a malformed login response.")

        user = body.get("user") if isinstance(body.get("user"), dict) else body
        try:
            return Identity(
                user_id=int(user["userId"]),
                username=str(user["username"]),
                token=str(body.get("token") or ""),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError(
                "The ledger service sent a malformed login response."
            ) from exc
