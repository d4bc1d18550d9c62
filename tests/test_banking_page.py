"""Unit tests for BankingPage against a mocked Playwright page."""

from unittest.mock import MagicMock, call, patch

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from neobank_e2e.config import settings as settings_module
from neobank_e2e.config.settings import SuiteSettings, get_default_settings
from neobank_e2e.core.status import Outcome
from neobank_e2e.exceptions import DialogMismatchError, UIStateError
from neobank_e2e.pages.banking_page import BankingPage
from tests.factories import BeneficiaryFactory
from tests.fakes.fake_page import FakeDialog


def locator_registry(mock):
    """Give a mock a stable child locator per selector."""
    locators = {}

    def locator(selector):
        if selector not in locators:
            locators[selector] = MagicMock(name=selector)
        return locators[selector]

    mock.locator.side_effect = locator
    return locators


@pytest.fixture
def settings():
    return SuiteSettings(
        base_url="http://bank.test",
        timeouts={"action_ms": 200, "navigation_ms": 200, "dialog_ms": 200, "poll_interval_ms": 1},
    )


@pytest.fixture
def page():
    page = MagicMock(name="page")
    page.url = "http://bank.test/"
    locator_registry(page)
    return page


@pytest.fixture
def banking_page(page, settings):
    return BankingPage(page, settings)


def beneficiary_rows(page, rows):
    """Configure '#beneficiary-list li' to render (text, data-id) rows."""
    row_mocks = []
    for text, data_id in rows:
        row = MagicMock(name=text)
        locator_registry(row)
        row.locator(".beneficiary-info").first.text_content.return_value = text
        for selector in (".edit-btn", ".delete-btn"):
            button = row.locator(selector)
            button.count.return_value = 1
            button.first.get_attribute.return_value = data_id
        row_mocks.append(row)

    items = page.locator("#beneficiary-list li")
    items.count.return_value = len(row_mocks)
    items.nth.side_effect = lambda index: row_mocks[index]
    items.all_text_contents.return_value = [f"{text}EditDelete" for text, _ in rows]
    page.locator("#beneficiary-list li .beneficiary-info").all_text_contents.return_value = [t for t, _ in rows]


class TestLogin:
    def test_successful_login(self, banking_page, page):
        page.url = "http://bank.test/dashboard.html"

        result = banking_page.login()

        page.goto.assert_called_once_with("http://bank.test/")
        page.fill.assert_has_calls([call("#username", "admin"), call("#password", "password123")])
        page.click.assert_called_once_with("#login-btn")
        page.wait_for_load_state.assert_called_with("domcontentloaded")
        assert result.outcome is Outcome.LOGGED_IN
        assert result.succeeded

    def test_rejected_login_is_reported_not_raised(self, banking_page, page):
        error = page.locator("#error-msg")
        error.is_visible.return_value = True
        error.first.text_content.return_value = "Invalid credentials"

        result = banking_page.login("invalid", "wrong")

        page.fill.assert_has_calls([call("#username", "invalid"), call("#password", "wrong")])
        assert result.outcome is Outcome.INVALID_CREDENTIALS
        assert result.message == "Invalid credentials"

    def test_empty_credentials_are_submitted(self, banking_page, page):
        page.url = "http://bank.test/dashboard.html"

        banking_page.login("", "")

        page.fill.assert_has_calls([call("#username", ""), call("#password", "")])


class TestAmounts:
    def test_deposit_success(self, banking_page, page):
        status = page.locator("#deposit-status")
        status.text_content.return_value = "Deposited $500.00 successfully"

        result = banking_page.deposit(500)

        status.evaluate.assert_called_once()
        page.fill.assert_called_once_with("#deposit-amount", "500")
        page.click.assert_called_once_with("#deposit-btn")
        assert result.outcome is Outcome.DEPOSITED
        assert result.message == "Deposited $500.00 successfully"

    def test_debit_rejection_is_a_result(self, banking_page, page):
        page.locator("#debit-status").text_content.return_value = "Insufficient funds"

        result = banking_page.debit(10**9)

        page.fill.assert_called_once_with("#debit-amount", "1000000000")
        assert result.outcome is Outcome.INSUFFICIENT_FUNDS
        assert not result.succeeded

    def test_raw_string_amounts_are_typed_verbatim(self, banking_page, page):
        page.locator("#deposit-status").text_content.return_value = "Invalid amount"

        result = banking_page.deposit("-50")

        page.fill.assert_called_once_with("#deposit-amount", "-50")
        assert result.outcome is Outcome.INVALID_AMOUNT

    def test_missing_status_times_out(self, banking_page, page):
        page.locator("#deposit-status").text_content.return_value = ""

        with pytest.raises(UIStateError, match="Deposit message"):
            banking_page.deposit(1)

    def test_current_balance(self, banking_page, page):
        page.locator(".amount").first.text_content.return_value = "$25,430.00"

        assert banking_page.get_current_balance() == 25430.0

    @pytest.mark.parametrize("text", ["", "Loading...", None])
    def test_unreadable_balance(self, banking_page, page, text):
        page.locator(".amount").first.text_content.return_value = text

        with pytest.raises(UIStateError):
            banking_page.get_current_balance()

    def test_absent_element(self, banking_page, page):
        page.locator(".amount").first.text_content.side_effect = PlaywrightTimeoutError("Timeout 200ms exceeded")

        with pytest.raises(UIStateError, match=r"Element \.amount not found"):
            banking_page.get_balance_display_text()

    def test_check_balance(self, banking_page, page):
        display = page.locator("#balance-display")
        display.is_visible.return_value = True
        display.text_content.return_value = "Current Balance: $25,430.00"

        assert banking_page.check_balance() == "Current Balance: $25,430.00"
        page.click.assert_called_once_with("#check-balance-btn")

    def test_deposit_and_measure(self, banking_page, page):
        page.locator(".amount").first.text_content.side_effect = ["$100.00", "$350.40"]
        page.locator("#deposit-status").text_content.return_value = "Deposited $250.40 successfully"

        assert banking_page.deposit_and_measure(250.40) == 250.40

    def test_multiple_debits(self, banking_page, page):
        page.locator("#debit-status").text_content.return_value = "Debited $1.00 successfully"

        results = banking_page.perform_multiple_debits([1, 2, 3])

        assert [r.outcome for r in results] == [Outcome.DEBITED] * 3
        assert page.click.call_count == 3


class TestTransactions:
    def test_parsed_transactions(self, banking_page, page):
        page.locator("#transaction-list li").all_text_contents.return_value = [
            "Deposit +$500.00",
            "Salary Credit +$5,000.00",
            "Grocery Store -$150.75",
        ]

        transactions = banking_page.list_transactions()

        assert [t.description for t in transactions] == ["Deposit", "Salary Credit", "Grocery Store"]
        assert banking_page.transaction_exists("Deposit", "+$500.00")
        assert not banking_page.transaction_exists("Deposit", "+$5.00 ")
        assert banking_page.count_transactions_containing("+$") == 2

    def test_first_transaction_of_empty_list(self, banking_page, page):
        page.locator("#transaction-list li").count.return_value = 0

        assert banking_page.get_first_transaction_text() == ""


class TestBeneficiaries:
    def test_create(self, banking_page, page):
        page.locator("#beneficiary-status").text_content.return_value = "Beneficiary Alice Johnson added successfully"

        result = banking_page.create_beneficiary("Alice Johnson", "1111111111", "Chase Bank")

        page.fill.assert_has_calls([
            call("#beneficiary-name", "Alice Johnson"),
            call("#beneficiary-account", "1111111111"),
            call("#beneficiary-bank", "Chase Bank"),
        ])
        page.click.assert_called_once_with("#add-beneficiary-btn")
        assert result.outcome is Outcome.BENEFICIARY_ADDED

    def test_list_and_find(self, banking_page, page):
        beneficiary_rows(page, [
            ("John Doe - 9876543210 (HDFC Bank)", "1"),
            ("Jane Smith - 1234567890 (ICICI Bank)", "2"),
        ])

        rows = banking_page.list_beneficiaries()

        assert [(r.id, r.name) for r in rows] == [(1, "John Doe"), (2, "Jane Smith")]
        assert banking_page.find_beneficiary("Jane Smith").bank == "ICICI Bank"
        assert banking_page.find_beneficiary("Nobody") is None
        assert banking_page.beneficiary_exists("John Doe")
        assert banking_page.read_beneficiaries()[0].startswith("John Doe")

    def test_non_numeric_row_id(self, banking_page, page):
        beneficiary_rows(page, [("John Doe - 9876543210 (HDFC Bank)", "abc")])

        with pytest.raises(UIStateError, match="data-id"):
            banking_page.list_beneficiaries()

    def test_update_answers_three_prompts(self, banking_page, page):
        dialogs = [
            FakeDialog("prompt", "Enter new name:"),
            FakeDialog("prompt", "Enter new account number:"),
            FakeDialog("prompt", "Enter new bank name:"),
        ]

        def click(selector):
            handler = page.on.call_args[0][1]
            for dialog in dialogs:
                handler(dialog)

        page.click.side_effect = click
        page.locator("#beneficiary-status").text_content.return_value = "Beneficiary updated successfully"

        result = banking_page.update_beneficiary(3, "Grace Lee", "7777777777", "PNC Bank")

        page.click.assert_called_once_with('.edit-btn[data-id="3"]')
        assert [d.prompt_text for d in dialogs] == ["Grace Lee", "7777777777", "PNC Bank"]
        page.remove_listener.assert_called_once()
        assert result.outcome is Outcome.BENEFICIARY_UPDATED

    def test_delete_without_confirm_dialog(self, banking_page, page):
        with pytest.raises(DialogMismatchError, match="Dialogs never shown: confirm mentioning 'delete'"):
            banking_page.delete_beneficiary(1)

        page.click.assert_called_once_with('.delete-btn[data-id="1"]')
        page.remove_listener.assert_called_once()

    def test_late_extra_dialog_after_update_fails(self, banking_page, page):
        dialogs = [
            FakeDialog("prompt", "Enter new name:"),
            FakeDialog("prompt", "Enter new account number:"),
            FakeDialog("prompt", "Enter new bank name:"),
        ]
        late = FakeDialog("prompt", "Enter new branch:")

        def click(selector):
            handler = page.on.call_args[0][1]
            for dialog in dialogs:
                handler(dialog)

        def status_text(*args, **kwargs):
            # Arrives after all three prompts were answered, before the status shows.
            page.on.call_args[0][1](late)
            return "Beneficiary updated successfully"

        page.click.side_effect = click
        page.locator("#beneficiary-status").text_content.side_effect = status_text

        with pytest.raises(DialogMismatchError, match="Unexpected extra prompt dialog #4"):
            banking_page.update_beneficiary(3, "Grace Lee", "7777777777", "PNC Bank")

        assert late.dismissed
        page.remove_listener.assert_called_once()

    def test_dismissed_delete(self, banking_page, page):
        confirm = FakeDialog("confirm", "Are you sure you want to delete John Doe?")
        page.click.side_effect = lambda selector: page.on.call_args[0][1](confirm)
        page.locator("#beneficiary-status").text_content.return_value = "Deletion cancelled"

        result = banking_page.delete_beneficiary(1, confirm=False)

        assert confirm.dismissed
        assert result.outcome is Outcome.CANCELLED

    def test_input_values(self, banking_page, page):
        page.input_value.side_effect = ["", "", ""]

        assert banking_page.get_beneficiary_input_values() == ("", "", "")

    def test_create_multiple(self, banking_page, page):
        page.locator("#beneficiary-status").text_content.return_value = "Beneficiary added successfully"

        beneficiaries = BeneficiaryFactory.create_batch(2)

        results = banking_page.create_multiple_beneficiaries(beneficiaries)

        assert all(r.succeeded for r in results)
        assert page.click.call_count == 2
        page.fill.assert_any_call("#beneficiary-name", beneficiaries[1]["name"])


class TestStatusClear:
    def test_cleared(self, banking_page, page):
        page.locator("#debit-status").text_content.side_effect = ["Debited $1.00 successfully", ""]

        assert banking_page.wait_for_status_clear("#debit-status", timeout_ms=200)

    def test_already_empty_status(self, banking_page, page):
        page.locator("#deposit-status").text_content.return_value = ""

        assert banking_page.wait_for_status_clear("#deposit-status", timeout_ms=100) is True

    def test_never_cleared(self, banking_page, page):
        page.locator("#deposit-status").text_content.return_value = "Deposited $1.00 successfully"

        assert banking_page.wait_for_status_clear(timeout_ms=1) is False

    def test_default_selector_comes_from_settings(self, page):
        settings = SuiteSettings(
            selectors={"deposit_status": "#custom-deposit-status"},
            timeouts={"poll_interval_ms": 1},
        )
        page.locator("#custom-deposit-status").text_content.return_value = ""

        assert BankingPage(page, settings).wait_for_status_clear(timeout_ms=50) is True
        page.locator.assert_any_call("#custom-deposit-status")


class TestDefaultSettings:
    def test_settings_loaded_once_when_omitted(self, page):
        loaded = SuiteSettings(base_url="http://cached.test")
        get_default_settings.cache_clear()
        try:
            with patch.object(settings_module, "load_settings", return_value=loaded) as load:
                first = BankingPage(page)
                second = BankingPage(MagicMock(name="other page"))
        finally:
            get_default_settings.cache_clear()

        load.assert_called_once_with()
        assert first.settings is loaded
        assert second.settings is loaded
