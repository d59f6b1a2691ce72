from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional

import requests

from domain.errors import (
    AuthenticationError,
    InsufficientFundsError,
    LedgerClientError,
    NotFoundError,
    TransportError,
    ValidationError,
)


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ApiClient:
    """
    Thin JSON-over-HTTP transport shared by the auth gateway and the
    ledger client.

    Each call issues exactly one request; there is no retry. Every
    non-success outcome is translated into the `domain.errors` taxonomy
    here, so callers never see `requests` exceptions or raw status codes.
    """

    def __init__(
        self,
        base_url: str,
        http: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http if http is not None else requests.Session()
        self._timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _request(
        self,
        method: str,
        path: str,
        payload: Optional[dict] = None,
        token: Optional[str] = None,
    ) -> Any:
        url = self._url(path)
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug("%s %s", method, url)
        try:
            response = self._http.request(
                method,
                url,
                json=payload,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout as exc:
            logger.debug("%s %s timed out after %ss", method, url, self._timeout)
            raise TransportError("The ledger service did not respond in time.") from exc
        except requests.exceptions.RequestException as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            raise TransportError("Could not reach the ledger service.") from exc

        logger.debug("%s %s -> %s", method, url, response.status_code)
        if not 200 <= response.status_code < 300:
            raise self._error_for(response)

        if not response.text:
            return None

        try:
            # Keep currency amounts exact: never decode them as floats.
            return response.json(parse_float=Decimal)
        except ValueError as exc:
            raise TransportError("The ledger service sent a malformed response.") from exc

    @staticmethod
    def _service_message(response: requests.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None

        if isinstance(body, dict):
            for key in ("message", "error", "title"):
                value = body.get(key)
                if isinstance(value, str) and value:
                    return value
        return None

    def _error_for(self, response: requests.Response) -> LedgerClientError:
        status = response.status_code
        message = self._service_message(response)

        if status in (401, 403):
            return AuthenticationError(
                message or "Your session is not authorized. Please log in again.",
                status,
            )
        if status == 404:
            return NotFoundError(message or "The requested resource was not found.", status)
        if status in (400, 409, 422):
            if message and "insufficient" in message.lower():
                return InsufficientFundsError(message, status)
            return ValidationError(message or "The ledger service rejected the request.", status)
        return TransportError(message or f"The ledger service returned HTTP {status}.", status)
