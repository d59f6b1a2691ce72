from __future__ import annotations

import getpass
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from application.session_controller import SessionController
from domain.errors import AuthenticationError, LedgerClientError
from domain.models import Transfer, UserSummary
from interfaces.console.prompts import (
    parse_amount,
    parse_menu_choice,
    parse_transfer_id,
    parse_user_id,
)


RULE = "-" * 43


def format_amount(amount: Decimal) -> str:
    return f"${amount:,.2f}"


class ConsoleUserInterface:
    """
    Text menu driving a `SessionController`.

    This module contains only console concerns: reading raw text, turning
    it into typed values and printing what the application layer returns.
    Input and output functions are injectable so the menus can be driven
    from tests.
    """

    def __init__(
        self,
        controller: SessionController,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        password_fn: Optional[Callable[[str], str]] = None,
    ) -> None:
        self._controller = controller
        self._input = input_fn
        self._output = output_fn
        self._password = password_fn or getpass.getpass
        self._quit_requested = False

    def run(self) -> None:
        try:
            while not self._quit_requested:
                while not self._controller.is_authenticated and not self._quit_requested:
                    self._show_login_menu()

                if self._quit_requested:
                    break

                self._show_main_menu()
        except (EOFError, KeyboardInterrupt):
            self._output("")

        self._controller.logout()
        self._output("Goodbye!")

    # Login menu

    def _show_login_menu(self) -> None:
        self._output("Welcome to the ledger!")
        self._output("1: Login")
        self._output("2: Register")
        self._output("0: Exit")

        try:
            choice = parse_menu_choice(self._input("Please choose an option: "))
        except ValueError as exc:
            self._output(str(exc))
            return

        if choice == 1:
            self._handle_login()
        elif choice == 2:
            self._handle_register()
        elif choice == 0:
            self._quit_requested = True
        else:
            self._output("Invalid selection.")

    def _prompt_for_login(self) -> tuple[str, str]:
        username = self._input("Username: ").strip()
        password = self._password("Password: ")
        return username, password

    def _handle_login(self) -> None:
        username, password = self._prompt_for_login()
        result = self._controller.login(username, password)
        if not result.success:
            self._output(f"Could not log in: {result.error_message}")
            return

        self._output(f"Successfully logged in as {result.identity.username}.")

    def _handle_register(self) -> None:
        username, password = self._prompt_for_login()
        result = self._controller.register(username, password)
        if not result.success:
            self._output(f"Registration failed: {result.error_message}")
            return

        self._output("Registration successful. You can now log in.")

    # Main menu

    def _show_main_menu(self) -> None:
        while self._controller.is_authenticated:
            self._output("")
            self._output("Please make a selection:")
            self._output("1: View your current balance")
            self._output("2: View your past transfers")
            self._output("3: Send funds")
            self._output("4: Log in as different user")
            self._output("0: Exit")
            self._output("---------")

            try:
                choice = parse_menu_choice(self._input("Please choose an option: "))
            except ValueError as exc:
                self._output(str(exc))
                continue

            if choice == 1:
                self._run_ledger_action(self._display_balance)
            elif choice == 2:
                self._run_ledger_action(self._display_transfers)
            elif choice == 3:
                self._run_ledger_action(self._send_funds)
            elif choice == 4:
                self._controller.logout()
                return
            elif choice == 0:
                self._quit_requested = True
                return
            else:
                self._output("That doesn't seem like a valid choice.")

    def _run_ledger_action(self, action: Callable[[], None]) -> None:
        try:
            action()
        except AuthenticationError as exc:
            # Expired or revoked token: start over from the login menu.
            self._controller.logout()
            self._output(f"{exc.message} You have been logged out.")
        except LedgerClientError as exc:
            self._output(exc.message)

    def _display_balance(self) -> None:
        account = self._controller.ledger.get_balance()
        self._output(f"Your current account balance is: {format_amount(account.balance)}")

    def _usernames(self) -> Dict[int, str]:
        return {u.user_id: u.username for u in self._controller.ledger.list_users()}

    def _display_transfers(self) -> None:
        ledger = self._controller.ledger
        transfers = ledger.list_transfers()
        if not transfers:
            self._output("You have no transfers yet.")
            return

        names = self._usernames()
        me = self._controller.identity.user_id

        self._output(RULE)
        self._output("Transfers")
        self._output(f"{'ID':<8}{'From/To':<24}{'Amount':>12}")
        self._output(RULE)
        for transfer in transfers:
            if transfer.from_user_id == me:
                counterpart = f"To: {names.get(transfer.to_user_id, transfer.to_user_id)}"
            else:
                counterpart = f"From: {names.get(transfer.from_user_id, transfer.from_user_id)}"
            self._output(
                f"{transfer.transfer_id:<8}{counterpart:<24}{format_amount(transfer.amount):>12}"
            )
        self._output(RULE)

        text = self._input("Enter transfer ID to view details (0 to cancel): ").strip()
        if text in ("", "0"):
            return
        try:
            transfer_id = parse_transfer_id(text)
        except ValueError as exc:
            self._output(str(exc))
            return

        self._display_transfer_detail(ledger.get_transfer_detail(transfer_id), names)

    def _display_transfer_detail(self, transfer: Transfer, names: Dict[int, str]) -> None:
        self._output(RULE)
        self._output("Transfer Details")
        self._output(RULE)
        self._output(f"Id: {transfer.transfer_id}")
        self._output(f"From: {names.get(transfer.from_user_id, transfer.from_user_id)}")
        self._output(f"To: {names.get(transfer.to_user_id, transfer.to_user_id)}")
        self._output(f"Type: {transfer.type}")
        self._output(f"Status: {transfer.status}")
        self._output(f"Amount: {format_amount(transfer.amount)}")

    def _display_users(self, users: List[UserSummary]) -> None:
        self._output(RULE)
        self._output("Users")
        self._output(f"{'ID':<8}Name")
        self._output(RULE)
        for user in users:
            self._output(f"{user.user_id:<8}{user.username}")
        self._output(RULE)

    def _send_funds(self) -> None:
        me = self._controller.identity.user_id
        others = [u for u in self._controller.ledger.list_users() if u.user_id != me]
        if not others:
            self._output("There are no other users to send funds to.")
            return

        self._display_users(others)
        try:
            to_user_id = parse_user_id(self._input("Enter ID of user you are sending to: "))
            amount = parse_amount(self._input("Enter the amount to transfer: "))
        except ValueError as exc:
            self._output(str(exc))
            return

        result = self._controller.send_funds(to_user_id, amount)
        if result.success:
            self._output(
                f"Transfer {result.transfer.transfer_id} successful: "
                f"sent {format_amount(result.transfer.amount)}."
            )
            return

        if isinstance(result.error, AuthenticationError):
            raise result.error
        self._output(f"Transfer failed: {result.error_message}")
