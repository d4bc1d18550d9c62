"""Parsing and formatting of currency text shown by the banking UI."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

Number = Union[int, float, Decimal]

CENT = Decimal("0.01")

# "$25,430.00", "+$500.00", "-$100.50", "25430", "$ 1,000"
_AMOUNT_RE = re.compile(r"^\s*(?P<sign>[+-])?\s*\$?\s*(?P<digits>\d[\d,]*(?:\.\d+)?|\.\d+)\s*$")

# First currency token inside free text such as "Current Balance: $25,430.00"
_EMBEDDED_AMOUNT_RE = re.compile(r"(?P<sign>[+-])?\$\s*(?P<digits>\d[\d,]*(?:\.\d+)?)")


class AmountFormatError(ValueError):
    """Text does not contain a currency amount."""


def to_decimal(value: Number) -> Decimal:
    """Convert to Decimal rounded half-up to cents."""
    return _exact(value).quantize(CENT, rounding=ROUND_HALF_UP)


def _build(sign: str | None, digits: str, source: str) -> Decimal:
    try:
        amount = Decimal(digits.replace(",", ""))
    except InvalidOperation as e:
        raise AmountFormatError(f"Not a currency amount: {source!r}") from e
    if sign == "-":
        amount = -amount
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_amount(text: str | None) -> Decimal:
    """
    Parse a whole string holding one currency amount.

    Strips the currency symbol and every thousands separator and keeps a
    leading +/- sign.

    Raises:
        AmountFormatError: If text is None, empty or not an amount
    """
    if text is None:
        raise AmountFormatError("No amount text")
    match = _AMOUNT_RE.match(text)
    if not match:
        raise AmountFormatError(f"Not a currency amount: {text!r}")
    return _build(match.group("sign"), match.group("digits"), text)


def extract_amount(text: str | None) -> Decimal:
    """Find the first $-prefixed amount in free text."""
    if not text:
        raise AmountFormatError("No amount text")
    match = _EMBEDDED_AMOUNT_RE.search(text)
    if not match:
        raise AmountFormatError(f"No currency amount in {text!r}")
    return _build(match.group("sign"), match.group("digits"), text)


def format_amount(amount: Number) -> str:
    """Format as the UI displays balances: $25,430.00."""
    value = to_decimal(amount)
    prefix = "-" if value < 0 else ""
    return f"{prefix}${abs(value):,.2f}"


def format_signed_amount(amount: Number, credit: bool) -> str:
    """Format a transaction amount: +$500.00 for credits, -$500.00 for debits."""
    value = abs(to_decimal(amount))
    return f"{'+' if credit else '-'}${value:,.2f}"


def to_input_value(amount: Number | str) -> str:
    """Text typed into an amount field; strings pass through untouched."""
    if isinstance(amount, str):
        return amount
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def amounts_match(actual: Number, expected: Number, places: int = 2) -> bool:
    """True when two amounts agree to the given number of decimal places."""
    tolerance = Decimal(1).scaleb(-places) / 2
    return abs(_exact(actual) - _exact(expected)) < tolerance


def _exact(value: Number) -> Decimal:
    return Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
