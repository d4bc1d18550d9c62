"""Waits, dialog scripting, status classification and money handling."""

from neobank_e2e.core.dialogs import DialogScript, DialogStep
from neobank_e2e.core.money import (
    AmountFormatError,
    amounts_match,
    extract_amount,
    format_amount,
    format_signed_amount,
    parse_amount,
)
from neobank_e2e.core.status import Outcome, classify_status
from neobank_e2e.core.waits import wait_for_text, wait_for_url_fragment, wait_until

__all__ = [
    "AmountFormatError",
    "amounts_match",
    "classify_status",
    "DialogScript",
    "DialogStep",
    "extract_amount",
    "format_amount",
    "format_signed_amount",
    "Outcome",
    "parse_amount",
    "wait_for_text",
    "wait_for_url_fragment",
    "wait_until",
]
