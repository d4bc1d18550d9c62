"""Models for observed and generated banking records."""

from neobank_e2e.models.banking import (
    Beneficiary,
    GeneratedBeneficiary,
    OperationResult,
    Transaction,
)

__all__ = [
    "Beneficiary",
    "GeneratedBeneficiary",
    "OperationResult",
    "Transaction",
]
