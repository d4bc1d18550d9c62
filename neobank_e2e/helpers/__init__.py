"""Function-style banking helpers."""

from neobank_e2e.helpers.banking_helpers import (
    beneficiary_exists,
    check_balance,
    clear_beneficiary_input,
    clear_debit_input,
    clear_deposit_input,
    clear_status_messages,
    create_beneficiary,
    debit,
    delete_beneficiary,
    deposit,
    expect_balance_decreased_by,
    expect_balance_increased_by,
    expect_transaction_exists,
    get_beneficiary_count,
    get_beneficiary_status,
    get_current_balance,
    get_debit_error,
    get_deposit_error,
    get_first_transaction,
    get_transaction_count,
    login,
    logout,
    read_beneficiaries,
    update_beneficiary,
    wait_for_status_clear,
)

__all__ = [
    "beneficiary_exists",
    "check_balance",
    "clear_beneficiary_input",
    "clear_debit_input",
    "clear_deposit_input",
    "clear_status_messages",
    "create_beneficiary",
    "debit",
    "delete_beneficiary",
    "deposit",
    "expect_balance_decreased_by",
    "expect_balance_increased_by",
    "expect_transaction_exists",
    "get_beneficiary_count",
    "get_beneficiary_status",
    "get_current_balance",
    "get_debit_error",
    "get_deposit_error",
    "get_first_transaction",
    "get_transaction_count",
    "login",
    "logout",
    "read_beneficiaries",
    "update_beneficiary",
    "wait_for_status_clear",
]
