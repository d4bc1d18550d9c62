"""
Banking page object.

Encapsulates every interaction with the NeoBank demo UI so that scenarios only
hold assertions. Mutating operations perform one fill+click sequence, wait for
the UI to report the result, and return an OperationResult; they do not raise
on business-rule rejections such as insufficient funds. Missing or
uninterpretable UI state raises UIStateError.
"""

import logging
from typing import Optional, Sequence, Union

from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from neobank_e2e.config.settings import SuiteSettings, get_default_settings
from neobank_e2e.core.dialogs import DialogScript, DialogStep
from neobank_e2e.core.money import AmountFormatError, Number, parse_amount, to_input_value
from neobank_e2e.core.status import Outcome, classify_status
from neobank_e2e.core.waits import wait_for_text, wait_for_url_fragment, wait_until
from neobank_e2e.exceptions import UIStateError, WaitTimeoutError
from neobank_e2e.models.banking import Beneficiary, OperationResult, Transaction

logger = logging.getLogger(__name__)

AmountInput = Union[Number, str]


class BankingPage:
    """Page object for the NeoBank login page and dashboard."""

    # Message fragments expected in the edit prompts, in emission order.
    UPDATE_PROMPT_HINTS = ("name", "account", "bank")
    DELETE_CONFIRM_HINT = "delete"

    def __init__(self, page: Page, settings: Optional[SuiteSettings] = None):
        self.page = page
        self.settings = settings or get_default_settings()
        self.selectors = self.settings.selectors
        self.timeouts = self.settings.timeouts

    # ==================== INTERNALS ====================

    def _text(self, selector: str) -> str:
        try:
            return self.page.locator(selector).first.text_content(timeout=self.timeouts.action_ms) or ""
        except PlaywrightTimeoutError as e:
            raise UIStateError(f"Element {selector} not found") from e

    def _blank(self, locator: Locator) -> None:
        # A stale message must never be read as the outcome of the next action.
        locator.evaluate("el => { el.textContent = ''; }")

    def _await_message(self, locator: Locator, label: str) -> str:
        return wait_for_text(
            self.page,
            locator,
            lambda text: bool(text.strip()),
            self.timeouts.action_ms,
            self.timeouts.poll_interval_ms,
            description=f"{label} message",
        ).strip()

    def _submit_and_read(self, status_selector: str, label: str, submit) -> OperationResult:
        status = self.page.locator(status_selector)
        self._blank(status)
        submit()
        message = self._await_message(status, label)
        return self._classified(label, message)

    def _classified(self, label: str, message: str) -> OperationResult:
        result = OperationResult(outcome=classify_status(message), message=message)
        logger.info(f"{label}: {result.outcome.value} ({message!r})")
        return result

    def _submit_amount(
        self, amount: AmountInput, input_selector: str, button_selector: str, status_selector: str, label: str
    ) -> OperationResult:
        value = to_input_value(amount)

        def submit():
            self.page.fill(input_selector, value)
            self.page.click(button_selector)

        logger.debug(f"{label} {value!r}")
        return self._submit_and_read(status_selector, label, submit)

    # ==================== AUTHENTICATION ====================

    def navigate_to_login(self) -> None:
        """Open the login page without logging in."""
        self.page.goto(self.settings.url_for(self.settings.login_path))

    def login(self, username: Optional[str] = None, password: Optional[str] = None) -> OperationResult:
        """
        Submit credentials and wait for either the dashboard or the login error.

        Args:
            username: Defaults to the configured demo user
            password: Defaults to the configured demo password

        Returns:
            OperationResult with LOGGED_IN or INVALID_CREDENTIALS; bad
            credentials are reported, not raised
        """
        credentials = self.settings.credentials
        username = credentials.username if username is None else username
        password = credentials.password if password is None else password

        self.navigate_to_login()
        self.page.fill(self.selectors.username_input, username)
        self.page.fill(self.selectors.password_input, password)
        self.page.click(self.selectors.login_button)

        error = self.page.locator(self.selectors.login_error)

        def _landed() -> Optional[Outcome]:
            if self.settings.dashboard_url_fragment in self.page.url:
                return Outcome.LOGGED_IN
            if error.is_visible():
                return Outcome.INVALID_CREDENTIALS
            return None

        outcome = wait_until(
            self.page,
            _landed,
            self.timeouts.navigation_ms,
            self.timeouts.poll_interval_ms,
            description="dashboard or login error",
            observe=lambda: self.page.url,
        )
        if outcome is Outcome.LOGGED_IN:
            self.page.wait_for_load_state("domcontentloaded")
            message = ""
        else:
            message = self.get_error_message().strip()

        logger.info(f"Login as {username!r}: {outcome.value}")
        return OperationResult(outcome=outcome, message=message)

    def logout(self) -> None:
        """Log out and wait for the login page."""
        self.page.click(self.selectors.logout_button)
        wait_for_url_fragment(
            self.page,
            self.settings.login_url_fragment,
            self.timeouts.navigation_ms,
            self.timeouts.poll_interval_ms,
        )
        self.page.wait_for_load_state("domcontentloaded")
        logger.info("Logged out")

    # ==================== BALANCE OPERATIONS ====================

    def get_current_balance(self) -> float:
        """
        Parse the header balance into a number.

        Raises:
            UIStateError: If the balance text is absent or not an amount
        """
        text = self.get_balance_display_text()
        try:
            return float(parse_amount(text))
        except AmountFormatError as e:
            raise UIStateError(f"Unreadable balance {text!r}") from e

    def get_balance_display_text(self) -> str:
        return self._text(self.selectors.balance_amount)

    def check_balance(self) -> str:
        """Click Check Balance and return the text it displays."""
        display = self.page.locator(self.selectors.balance_display)
        self.page.click(self.selectors.check_balance_button)
        wait_until(
            self.page,
            display.is_visible,
            self.timeouts.action_ms,
            self.timeouts.poll_interval_ms,
            description="balance display",
        )
        return self._await_message(display, "check balance")

    def get_balance_check_display(self) -> str:
        return self._text(self.selectors.balance_display)

    # ==================== DEPOSIT OPERATIONS ====================

    def deposit(self, amount: AmountInput) -> OperationResult:
        """Deposit amount; strings are typed verbatim so invalid input can be submitted."""
        sel = self.selectors
        return self._submit_amount(amount, sel.deposit_input, sel.deposit_button, sel.deposit_status, "Deposit")

    def get_deposit_status(self) -> str:
        return self._text(self.selectors.deposit_status)

    def clear_deposit_input(self) -> None:
        self.page.fill(self.selectors.deposit_input, "")

    # ==================== DEBIT OPERATIONS ====================

    def debit(self, amount: AmountInput) -> OperationResult:
        """Debit amount; strings are typed verbatim so invalid input can be submitted."""
        sel = self.selectors
        return self._submit_amount(amount, sel.debit_input, sel.debit_button, sel.debit_status, "Debit")

    def get_debit_status(self) -> str:
        return self._text(self.selectors.debit_status)

    def clear_debit_input(self) -> None:
        self.page.fill(self.selectors.debit_input, "")

    # ==================== TRANSACTION OPERATIONS ====================

    def get_transaction_count(self) -> int:
        return self.page.locator(self.selectors.transaction_items).count()

    def get_first_transaction_text(self) -> str:
        items = self.page.locator(self.selectors.transaction_items)
        if items.count() == 0:
            return ""
        return items.first.text_content() or ""

    def get_all_transactions(self) -> list[str]:
        """Transaction row texts, newest first."""
        return self.page.locator(self.selectors.transaction_items).all_text_contents()

    def list_transactions(self) -> list[Transaction]:
        return [Transaction.from_text(text) for text in self.get_all_transactions()]

    def transaction_exists(self, description: str, amount_text: str) -> bool:
        return any(txn.matches(description, amount_text) for txn in self.list_transactions())

    def count_transactions_containing(self, text: str) -> int:
        return sum(1 for row in self.get_all_transactions() if text in row)

    # ==================== ACCOUNT INFO ====================

    def get_account_number(self) -> str:
        return self._text(self.selectors.account_number).strip()

    def get_user_name(self) -> str:
        return self._text(self.selectors.user_name).strip()

    def get_welcome_message(self) -> str:
        return self._text(self.selectors.welcome_heading).strip()

    # ==================== PAGE VISIBILITY CHECKS ====================

    def is_balance_card_visible(self) -> bool:
        return self.page.locator(self.selectors.balance_card).first.is_visible()

    def is_transaction_list_visible(self) -> bool:
        return self.page.locator(self.selectors.transaction_list).is_visible()

    def is_login_form_visible(self) -> bool:
        return self.page.locator(self.selectors.login_form).is_visible()

    def is_error_message_visible(self) -> bool:
        return self.page.locator(self.selectors.login_error).is_visible()

    def get_error_message(self) -> str:
        return self._text(self.selectors.login_error)

    # ==================== PAGE TITLE AND URL ====================

    def get_page_title(self) -> str:
        return self.page.title()

    def get_current_url(self) -> str:
        return self.page.url

    def refresh(self) -> None:
        self.page.reload()
        self.page.wait_for_load_state("domcontentloaded")

    # ==================== BENEFICIARY OPERATIONS ====================

    def create_beneficiary(self, name: str, account: str, bank: str) -> OperationResult:
        """Fill the beneficiary form and submit it."""
        sel = self.selectors

        def submit():
            self.page.fill(sel.beneficiary_name_input, name)
            self.page.fill(sel.beneficiary_account_input, account)
            self.page.fill(sel.beneficiary_bank_input, bank)
            self.page.click(sel.add_beneficiary_button)

        return self._submit_and_read(sel.beneficiary_status, "Create beneficiary", submit)

    def get_beneficiary_status(self) -> str:
        return self._text(self.selectors.beneficiary_status)

    def get_beneficiary_count(self) -> int:
        return self.page.locator(self.selectors.beneficiary_items).count()

    def get_all_beneficiaries(self) -> list[str]:
        """Full row texts, including button labels, in rendered order."""
        return self.page.locator(self.selectors.beneficiary_items).all_text_contents()

    def read_beneficiaries(self) -> list[str]:
        """Beneficiary info texts in rendered order."""
        sel = self.selectors
        return self.page.locator(f"{sel.beneficiary_items} {sel.beneficiary_info}").all_text_contents()

    def list_beneficiaries(self) -> list[Beneficiary]:
        """Parsed beneficiary rows with their data-id."""
        sel = self.selectors
        rows = self.page.locator(sel.beneficiary_items)
        beneficiaries = []
        for index in range(rows.count()):
            row = rows.nth(index)
            info = row.locator(sel.beneficiary_info).first.text_content() or ""
            beneficiaries.append(Beneficiary.from_text(info, self._row_id(row)))
        return beneficiaries

    def _row_id(self, row: Locator) -> Optional[int]:
        sel = self.selectors
        for button_selector in (sel.edit_button, sel.delete_button):
            buttons = row.locator(button_selector)
            if buttons.count():
                raw = buttons.first.get_attribute("data-id")
                if raw is None:
                    continue
                try:
                    return int(raw)
                except ValueError as e:
                    raise UIStateError(f"Non-numeric beneficiary data-id {raw!r}") from e
        return None

    def find_beneficiary(self, name: str) -> Optional[Beneficiary]:
        """Most recently rendered beneficiary whose name matches, if any."""
        matches = [b for b in self.list_beneficiaries() if b.name == name or name in b.text]
        return matches[-1] if matches else None

    def beneficiary_exists(self, name: str) -> bool:
        return any(name in text for text in self.get_all_beneficiaries())

    def update_beneficiary(self, beneficiary_id: int, new_name: str, new_account: str, new_bank: str) -> OperationResult:
        """
        Edit a beneficiary by answering its three prompts (name, account, bank).

        Raises:
            DialogMismatchError: If the prompts differ from that sequence
        """
        name_hint, account_hint, bank_hint = self.UPDATE_PROMPT_HINTS
        steps = [
            DialogStep.prompt(new_name, name_hint),
            DialogStep.prompt(new_account, account_hint),
            DialogStep.prompt(new_bank, bank_hint),
        ]
        return self._run_dialog_action(
            self.selectors.edit_button_for(beneficiary_id), steps, f"Update beneficiary {beneficiary_id}"
        )

    def delete_beneficiary(self, beneficiary_id: int, confirm: bool = True) -> OperationResult:
        """
        Delete a beneficiary, accepting (or dismissing) its confirmation.

        Raises:
            DialogMismatchError: If no single confirm dialog appears
        """
        steps = [DialogStep.confirm(accept=confirm, message_contains=self.DELETE_CONFIRM_HINT)]
        return self._run_dialog_action(
            self.selectors.delete_button_for(beneficiary_id), steps, f"Delete beneficiary {beneficiary_id}"
        )

    def _run_dialog_action(self, button_selector: str, steps: Sequence[DialogStep], label: str) -> OperationResult:
        script = DialogScript(
            self.page,
            list(steps),
            timeout_ms=self.timeouts.dialog_ms,
            poll_interval_ms=self.timeouts.poll_interval_ms,
        )

        status = self.page.locator(self.selectors.beneficiary_status)
        self._blank(status)
        with script:
            self.page.click(button_selector)
            script.wait_until_complete()
            script.verify()
            # Still attached while the UI settles, so a late extra dialog fails on exit.
            message = self._await_message(status, label)
        return self._classified(label, message)

    def clear_beneficiary_inputs(self) -> None:
        sel = self.selectors
        for selector in (sel.beneficiary_name_input, sel.beneficiary_account_input, sel.beneficiary_bank_input):
            self.page.fill(selector, "")

    def get_beneficiary_input_values(self) -> tuple[str, str, str]:
        sel = self.selectors
        return (
            self.page.input_value(sel.beneficiary_name_input),
            self.page.input_value(sel.beneficiary_account_input),
            self.page.input_value(sel.beneficiary_bank_input),
        )

    # ==================== WAIT AND UTILITY ====================

    def wait_for_status_clear(self, status_selector: Optional[str] = None, timeout_ms: Optional[float] = None) -> bool:
        """Wait until a status element is empty; False if it still shows text at the deadline."""
        locator = self.page.locator(status_selector or self.selectors.deposit_status)
        try:
            wait_for_text(
                self.page,
                locator,
                lambda text: not text.strip(),
                timeout_ms or self.timeouts.action_ms,
                self.timeouts.poll_interval_ms,
                description="status to clear",
            )
        except WaitTimeoutError:
            return False
        return True

    def get_page(self) -> Page:
        return self.page

    # ==================== MULTI-OPERATION FLOWS ====================

    def deposit_and_measure(self, amount: AmountInput) -> float:
        """Deposit and return the observed balance increase."""
        initial = self.get_current_balance()
        self.deposit(amount)
        return round(self.get_current_balance() - initial, 2)

    def debit_and_measure(self, amount: AmountInput) -> float:
        """Debit and return the observed balance decrease."""
        initial = self.get_current_balance()
        self.debit(amount)
        return round(initial - self.get_current_balance(), 2)

    def perform_multiple_deposits(self, amounts: Sequence[AmountInput]) -> list[OperationResult]:
        return [self.deposit(amount) for amount in amounts]

    def perform_multiple_debits(self, amounts: Sequence[AmountInput]) -> list[OperationResult]:
        return [self.debit(amount) for amount in amounts]

    def create_multiple_beneficiaries(self, beneficiaries: Sequence[dict]) -> list[OperationResult]:
        """Create each {name, account, bank} mapping in order."""
        return [self.create_beneficiary(b["name"], b["account"], b["bank"]) for b in beneficiaries]
