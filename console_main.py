import logging
import os

import requests
from dotenv import load_dotenv

from application.authenticator import Authenticator
from application.session_controller import SessionController
from domain.session import Session
from infrastructure.http.auth_gateway import HttpAuthGateway
from infrastructure.http.ledger_client import LedgerClient
from interfaces.console.menu import ConsoleUserInterface


load_dotenv()

LEDGER_API_URL = os.environ.get("LEDGER_API_URL", "http://localhost:5000/")
LEDGER_TIMEOUT = os.environ.get("LEDGER_TIMEOUT", "10")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")


def build_controller(base_url: str, timeout: float, http: requests.Session) -> SessionController:
    session = Session()
    auth_gateway = HttpAuthGateway(base_url, http=http, timeout=timeout)
    ledger_client = LedgerClient(base_url, session, http=http, timeout=timeout)
    authenticator = Authenticator(auth_gateway, session)
    return SessionController(authenticator, ledger_client)


def _parse_timeout(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError:
        raise RuntimeError(
            f"LEDGER_TIMEOUT must be a number of seconds, got {value!r}."
        ) from None

    if timeout <= 0:
        raise RuntimeError(f"LEDGER_TIMEOUT must be positive, got {value!r}.")
    return timeout


def _parse_log_level(value: str) -> int:
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise RuntimeError(
            f"LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL, got {value!r}."
        )
    return level


def main() -> None:
    timeout = _parse_timeout(LEDGER_TIMEOUT)
    level = _parse_log_level(LOG_LEVEL)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    with requests.Session() as http:
        controller = build_controller(LEDGER_API_URL, timeout, http)
        ConsoleUserInterface(controller).run()


if __name__ == "__main__":
    main()
