import unittest
from decimal import Decimal

from application.authenticator import Authenticator
from application.session_controller import SessionController, SessionState
from domain.session import Session
from infrastructure.http.auth_gateway import HttpAuthGateway
from infrastructure.http.ledger_client import LedgerClient
from interfaces.console.menu import ConsoleUserInterface, format_amount

from fakes import BASE_URL, FakeLedgerService


class ScriptedConsole:
    """Feeds canned lines to the menu and collects everything it prints."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.output = []

    def input(self, prompt: str) -> str:
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)

    def print(self, text: str = "") -> None:
        self.output.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


class ConsoleMenuTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service = FakeLedgerService()
        self.service.add_user("alice", "pw1", balance="100.00", user_id=1)
        self.service.add_user("bob", "pw2", balance="0.00", user_id=2)
        session = Session()
        self.controller = SessionController(
            Authenticator(HttpAuthGateway(BASE_URL, http=self.service), session),
            LedgerClient(BASE_URL, session=session, http=self.service),
        )

    def _run(self, lines) -> ScriptedConsole:
        console = ScriptedConsole(lines)
        ui = ConsoleUserInterface(
            self.controller,
            input_fn=console.input,
            output_fn=console.print,
            password_fn=console.input,
        )
        ui.run()
        return console

    def test_format_amount(self):
        self.assertEqual(format_amount(Decimal("1250.5")), "$1,250.50")

    def test_login_view_balance_and_exit(self):
        console = self._run(["1", "alice", "pw1", "1", "0"])

        self.assertIn("Successfully logged in as alice.", console.text)
        self.assertIn("Your current account balance is: $100.00", console.text)
        self.assertIn("Goodbye!", console.text)
        self.assertIs(self.controller.state, SessionState.ANONYMOUS)

    def test_failed_login_returns_to_login_menu(self):
        console = self._run(["1", "alice", "bad", "1", "alice", "pw1", "0"])

        self.assertIn("Could not log in: Invalid username or password.", console.text)
        self.assertIn("Successfully logged in as alice.", console.text)

    def test_send_funds_and_view_transfer_detail(self):
        console = self._run(
            ["1", "alice", "pw1", "3", "2", "25.00", "2", "3001", "0"]
        )

        self.assertIn("Transfer 3001 successful: sent $25.00.", console.text)
        self.assertIn("To: bob", console.text)
        self.assertIn("Status: Approved", console.text)
        self.assertEqual(self.service.balances[2], Decimal("25.00"))

    def test_insufficient_funds_is_reported(self):
        console = self._run(["1", "alice", "pw1", "3", "2", "500", "0"])

        self.assertIn("Transfer failed: Insufficient funds.", console.text)
        self.assertEqual(self.service.transfers, {})

    def test_bad_numeric_input_keeps_menu_running(self):
        console = self._run(["x", "1", "alice", "pw1", "3", "2", "lots", "1", "0"])

        self.assertIn("Invalid input. Please enter only a number.", console.text)
        self.assertIn("Invalid amount: 'lots' is not a number.", console.text)
        self.assertIn("Your current account balance is: $100.00", console.text)

    def test_expired_session_goes_back_to_login(self):
        self.service.tokens.clear()
        self.controller.login("alice", "pw1")
        self.service.tokens.clear()

        console = self._run(["1", "0"])

        self.assertIn("You have been logged out.", console.text)
        self.assertIs(self.controller.state, SessionState.ANONYMOUS)

    def test_switch_user(self):
        console = self._run(["1", "alice", "pw1", "4", "1", "bob", "pw2", "1", "0"])

        self.assertIn("Successfully logged in as bob.", console.text)
        self.assertIn("Your current account balance is: $0.00", console.text)

    def test_register_from_login_menu(self):
        console = self._run(["2", "carol", "pw3", "2", "carol", "x", "0"])

        self.assertIn("Registration successful. You can now log in.", console.text)
        self.assertIn("Registration failed: That username is already taken.", console.text)

    def test_end_of_input_exits_cleanly(self):
        console = self._run([])
        self.assertIn("Goodbye!", console.text)


if __name__ == "__main__":
    unittest.main()
