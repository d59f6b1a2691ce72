import unittest
from decimal import Decimal

import requests

from domain.errors import (
    AuthenticationError,
    InsufficientFundsError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from infrastructure.http.api_client import ApiClient

from fakes import FakeLedgerService, FakeResponse


class ApiClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service = FakeLedgerService()
        self.client = ApiClient("http://ledger.test///", http=self.service, timeout=3)

    def _respond(self, response):
        self.service.next_response = response
        return self.client._request("GET", "/thing", token="tok")

    def test_joins_base_url_and_path(self):
        self._respond(FakeResponse(200, {}))
        self.assertEqual(self.service.last_call()["url"], "http://ledger.test/thing")

    def test_status_codes_map_to_error_types(self):
        cases = [
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, NotFoundError),
            (400, ValidationError),
            (409, ValidationError),
            (422, ValidationError),
            (500, TransportError),
            (503, TransportError),
        ]
        for status, error_type in cases:
            with self.subTest(status=status):
                with self.assertRaises(error_type) as ctx:
                    self._respond(FakeResponse(status))
                self.assertEqual(ctx.exception.status_code, status)

    def test_service_message_is_surfaced(self):
        with self.assertRaises(ValidationError) as ctx:
            self._respond(FakeResponse(400, {"message": "Recipient is closed."}))
        self.assertEqual(ctx.exception.message, "Recipient is closed.")

    def test_insufficient_funds_is_recognised(self):
        with self.assertRaises(InsufficientFundsError):
            self._respond(FakeResponse(400, {"message": "Insufficient funds for transfer."}))

    def test_empty_success_body_returns_none(self):
        self.assertIsNone(self._respond(FakeResponse(201)))

    def test_floats_are_decoded_as_decimal(self):
        body = self._respond(FakeResponse(200, text='{"balance": 0.1}'))
        self.assertEqual(body["balance"], Decimal("0.1"))

    def test_malformed_body_is_a_transport_error(self):
        with self.assertRaises(TransportError):
            self._respond(FakeResponse(200, text="<html>oops</html>"))

    def test_timeout_is_a_transport_error(self):
        self.service.raise_on_request = requests.exceptions.Timeout("slow")
        with self.assertRaises(TransportError):
            self.client._request("GET", "/thing")

    def test_no_authorization_header_without_token(self):
        self.service.next_response = FakeResponse(200, {})
        self.client._request("POST", "/login", payload={"username": "a"})
        self.assertNotIn("Authorization", self.service.last_call()["headers"])


if __name__ == "__main__":
    unittest.main()
