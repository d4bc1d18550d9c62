"""Test factories for creating test data."""

from tests.factories.beneficiary_factory import BeneficiaryFactory

__all__ = [
    "BeneficiaryFactory",
]
