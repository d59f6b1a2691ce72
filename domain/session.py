from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .models import Identity


class CredentialStore:
    """
    Holds the bearer token attached to outgoing ledger requests.

    The token is opaque: nothing here inspects or validates it.
    """

    def __init__(self) -> None:
        self._token: Optional[str] = None

    def set(self, token: str) -> None:
        self._token = token

    def get(self) -> Optional[str]:
        """Return the current token, or None when no token is attached."""

        return self._token

    def clear(self) -> None:
        self._token = None

    @property
    def is_present(self) -> bool:
        return bool(self._token)


@dataclass
class Session:
    """
    Per-process login state shared by the Authenticator and Ledger Client.

    Passing this object explicitly (instead of keeping module-level state)
    lets tests run several independent sessions side by side.
    """

    credentials: CredentialStore = field(default_factory=CredentialStore)
    identity: Optional[Identity] = None
