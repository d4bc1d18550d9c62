"""Random test-data generation."""

from neobank_e2e.data.random_generator import (
    CURRENCY_CODES,
    DEBIT_RANGE,
    DEPOSIT_RANGE,
    TRANSACTION_DESCRIPTIONS,
    BankingDataGenerator,
)

__all__ = [
    "BankingDataGenerator",
    "CURRENCY_CODES",
    "DEBIT_RANGE",
    "DEPOSIT_RANGE",
    "TRANSACTION_DESCRIPTIONS",
]
