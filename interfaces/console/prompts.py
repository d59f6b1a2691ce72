from __future__ import annotations

from decimal import Decimal, InvalidOperation


def parse_menu_choice(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise ValueError("Invalid input. Please enter only a number.") from None


def _parse_id(text: str, what: str) -> int:
    try:
        value = int(text.strip())
    except ValueError:
        raise ValueError(f"Invalid {what}: {text.strip()!r} is not a number.") from None

    if value <= 0:
        raise ValueError(f"Invalid {what}: must be a positive number.")
    return value


def parse_user_id(text: str) -> int:
    return _parse_id(text, "user ID")


def parse_transfer_id(text: str) -> int:
    return _parse_id(text, "transfer ID")


def parse_amount(text: str) -> Decimal:
    """
    Parse a currency amount typed by the user.

    Accepts an optional leading "$" and thousands separators, e.g.
    "$1,250.50". At most two decimal places are allowed.
    """

    cleaned = text.strip().lstrip("$").replace(",", "")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {text.strip()!r} is not a number.") from None

    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {text.strip()!r} is not a number.")
    if amount <= 0:
        raise ValueError("Amount must be greater than zero.")
    if amount.as_tuple().exponent < -2:
        raise ValueError("Amount can have at most two decimal places.")
    return amount
