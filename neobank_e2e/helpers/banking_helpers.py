"""
Helper functions for banking scenarios.

Function-style counterparts of BankingPage for scenarios that work with a bare
Playwright page. Deposit, debit and beneficiary helpers return the boolean
success signal; read the matching status helper for the rejection reason.
"""

import logging
from typing import Optional

from playwright.sync_api import Page

from neobank_e2e.config.settings import SuiteSettings
from neobank_e2e.core.money import Number, amounts_match
from neobank_e2e.pages.banking_page import AmountInput, BankingPage

logger = logging.getLogger(__name__)


def _banking_page(page: Page, settings: Optional[SuiteSettings] = None) -> BankingPage:
    return BankingPage(page, settings)


def login(page: Page, username: str, password: str, settings: Optional[SuiteSettings] = None) -> None:
    """
    Log in with the provided credentials.

    Does not raise on rejected credentials; check is_error_message_visible
    or the page URL afterwards.
    """
    _banking_page(page, settings).login(username, password)


def logout(page: Page, settings: Optional[SuiteSettings] = None) -> None:
    """Log out from the dashboard."""
    _banking_page(page, settings).logout()


def get_current_balance(page: Page, settings: Optional[SuiteSettings] = None) -> float:
    """Current balance from the dashboard header; raises UIStateError when unreadable."""
    return _banking_page(page, settings).get_current_balance()


def deposit(page: Page, amount: AmountInput, settings: Optional[SuiteSettings] = None) -> bool:
    """Deposit amount; True if the UI reported the deposit."""
    return _banking_page(page, settings).deposit(amount).succeeded


def debit(page: Page, amount: AmountInput, settings: Optional[SuiteSettings] = None) -> bool:
    """Debit amount; True if the UI reported the debit."""
    return _banking_page(page, settings).debit(amount).succeeded


def check_balance(page: Page, settings: Optional[SuiteSettings] = None) -> str:
    """Click Check Balance and return the displayed text."""
    return _banking_page(page, settings).check_balance()


def get_deposit_error(page: Page, settings: Optional[SuiteSettings] = None) -> str:
    return _banking_page(page, settings).get_deposit_status()


def get_debit_error(page: Page, settings: Optional[SuiteSettings] = None) -> str:
    return _banking_page(page, settings).get_debit_status()


def get_transaction_count(page: Page, settings: Optional[SuiteSettings] = None) -> int:
    return _banking_page(page, settings).get_transaction_count()


def get_first_transaction(page: Page, settings: Optional[SuiteSettings] = None) -> str:
    return _banking_page(page, settings).get_first_transaction_text()


def clear_deposit_input(page: Page, settings: Optional[SuiteSettings] = None) -> None:
    _banking_page(page, settings).clear_deposit_input()


def clear_debit_input(page: Page, settings: Optional[SuiteSettings] = None) -> None:
    _banking_page(page, settings).clear_debit_input()


def wait_for_status_clear(
    page: Page,
    status_selector: Optional[str] = None,
    timeout_ms: Optional[float] = None,
    settings: Optional[SuiteSettings] = None,
) -> bool:
    """Wait until a status element (the configured deposit status by default) is empty; False if it never cleared."""
    return _banking_page(page, settings).wait_for_status_clear(status_selector, timeout_ms)


def clear_status_messages(page: Page, settings: Optional[SuiteSettings] = None) -> None:
    """Reset the deposit and debit inputs between consecutive operations."""
    banking_page = _banking_page(page, settings)
    banking_page.clear_deposit_input()
    banking_page.clear_debit_input()


def expect_balance_increased_by(
    page: Page, initial_balance: Number, expected_increase: Number, settings: Optional[SuiteSettings] = None
) -> None:
    """Assert the balance equals initial + increase to two decimal places."""
    new_balance = get_current_balance(page, settings)
    expected = float(initial_balance) + float(expected_increase)
    assert amounts_match(new_balance, round(expected, 2)), (
        f"Expected balance {expected:.2f} after +{float(expected_increase):.2f}, got {new_balance:.2f}"
    )


def expect_balance_decreased_by(
    page: Page, initial_balance: Number, expected_decrease: Number, settings: Optional[SuiteSettings] = None
) -> None:
    """Assert the balance equals initial - decrease to two decimal places."""
    new_balance = get_current_balance(page, settings)
    expected = float(initial_balance) - float(expected_decrease)
    assert amounts_match(new_balance, round(expected, 2)), (
        f"Expected balance {expected:.2f} after -{float(expected_decrease):.2f}, got {new_balance:.2f}"
    )


def expect_transaction_exists(
    page: Page, description: str, amount: str, settings: Optional[SuiteSettings] = None
) -> None:
    """
    Assert some transaction row contains both description and signed amount.

    Raises:
        AssertionError: If no row matches
    """
    if not _banking_page(page, settings).transaction_exists(description, amount):
        raise AssertionError(f"Transaction with '{description}' and '{amount}' not found")


def clear_beneficiary_input(page: Page, settings: Optional[SuiteSettings] = None) -> None:
    _banking_page(page, settings).clear_beneficiary_inputs()


def create_beneficiary(
    page: Page, name: str, account: str, bank: str, settings: Optional[SuiteSettings] = None
) -> bool:
    """CREATE: add a beneficiary; True if the UI reported it added."""
    return _banking_page(page, settings).create_beneficiary(name, account, bank).succeeded


def read_beneficiaries(page: Page, settings: Optional[SuiteSettings] = None) -> list[str]:
    """READ: beneficiary info texts in list order."""
    return _banking_page(page, settings).read_beneficiaries()


def get_beneficiary_count(page: Page, settings: Optional[SuiteSettings] = None) -> int:
    return _banking_page(page, settings).get_beneficiary_count()


def update_beneficiary(
    page: Page,
    beneficiary_id: int,
    new_name: str,
    new_account: str,
    new_bank: str,
    settings: Optional[SuiteSettings] = None,
) -> bool:
    """UPDATE: answer the edit prompts for beneficiary_id; True if the UI reported it updated."""
    return _banking_page(page, settings).update_beneficiary(beneficiary_id, new_name, new_account, new_bank).succeeded


def delete_beneficiary(page: Page, beneficiary_id: int, settings: Optional[SuiteSettings] = None) -> bool:
    """DELETE: confirm removal of beneficiary_id; True if the UI reported it deleted."""
    return _banking_page(page, settings).delete_beneficiary(beneficiary_id).succeeded


def beneficiary_exists(page: Page, name: str, settings: Optional[SuiteSettings] = None) -> bool:
    return _banking_page(page, settings).beneficiary_exists(name)


def get_beneficiary_status(page: Page, settings: Optional[SuiteSettings] = None) -> str:
    return _banking_page(page, settings).get_beneficiary_status()
