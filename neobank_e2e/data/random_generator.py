"""
Random banking test data built on Faker.

Each BankingDataGenerator owns its Faker instance, so generators never share
state and a seed makes a generator's output reproducible. Identifier formats:

    account number   ACCT-########          (8 digits)
    transaction id   TXN-XXXXXXXXXXXXXXXX   (16 uppercase alphanumerics)
    routing number   #########              (9 digits)
    IFSC code        AAAA0#######
"""

import math
import string
from decimal import Decimal
from typing import List, Optional

from faker import Faker

from neobank_e2e.models.banking import GeneratedBeneficiary

CURRENCY_CODES = ["USD", "INR", "EUR", "GBP", "JPY", "CAD", "AUD"]

BRANCH_PREFIXES = ["Downtown", "Uptown", "Central", "North", "South", "East", "West", "Tech Park", "Business"]

TRANSACTION_DESCRIPTIONS = [
    "Grocery Purchase",
    "Salary Deposit",
    "Utility Payment",
    "Restaurant Bill",
    "Online Shopping",
    "ATM Withdrawal",
    "Bank Transfer",
    "Insurance Premium",
    "Subscription Fee",
    "Dividend Payment",
]

DEPOSIT_RANGE = (50, 5000)
DEBIT_RANGE = (10, 1000)

_UPPER_ALPHANUMERIC = string.ascii_uppercase + string.digits


class BankingDataGenerator:
    """Generate realistic test data for banking scenarios."""

    def __init__(self, locale: str = "en_US", seed: Optional[int] = None):
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)

    # Identifiers

    def generate_account_number(self) -> str:
        """Account number like ACCT-12345678."""
        return f"ACCT-{self.fake.random_int(min=10000000, max=99999999)}"

    def generate_bank_account_number(self) -> str:
        """16-digit bank account number."""
        return self.fake.numerify("#" * 16)

    def generate_routing_number(self) -> str:
        """9-digit routing number."""
        return str(self.fake.random_int(min=100000000, max=999999999))

    def generate_ifsc_code(self) -> str:
        """Indian bank code: four letters, a literal 0, seven digits."""
        letters = "".join(self.fake.random_uppercase_letter() for _ in range(4))
        digits = str(self.fake.random_int(min=0, max=9999999)).zfill(7)
        return f"{letters}0{digits}"

    def generate_transaction_id(self) -> str:
        """Transaction id like TXN-1234567890ABCDEF."""
        suffix = "".join(self.fake.random_elements(elements=tuple(_UPPER_ALPHANUMERIC), length=16, unique=False))
        return f"TXN-{suffix}"

    def generate_currency_code(self) -> str:
        return self.fake.random_element(CURRENCY_CODES)

    # People and contact details

    def generate_account_name(self) -> str:
        return self.fake.name()

    def generate_beneficiary_name(self) -> str:
        return self.fake.name()

    def generate_email(self) -> str:
        return self.fake.email()

    def generate_phone_number(self) -> str:
        return self.fake.phone_number()

    def generate_username(self) -> str:
        return self.fake.user_name()

    def generate_password(self) -> str:
        """12 characters with upper case, lower case and digits."""
        return self.fake.password(length=12, special_chars=False, digits=True, upper_case=True, lower_case=True)

    def generate_branch_name(self) -> str:
        return f"{self.fake.random_element(BRANCH_PREFIXES)} Branch"

    def generate_city(self) -> str:
        return self.fake.city()

    def generate_bank_name(self) -> str:
        return self.fake.company()

    # Amounts

    def generate_amount(self, min_amount: float = 100, max_amount: float = 100000) -> float:
        """
        Random amount in [min_amount, max_amount] with two decimal places.

        Raises:
            ValueError: If the range is negative or inverted
        """
        if min_amount < 0:
            raise ValueError(f"min_amount must not be negative, got {min_amount}")
        if min_amount > max_amount:
            raise ValueError(f"min_amount {min_amount} is greater than max_amount {max_amount}")
        # Drawing whole cents keeps the result inside the range after rounding.
        low_cents = math.ceil(Decimal(str(min_amount)) * 100)
        high_cents = math.floor(Decimal(str(max_amount)) * 100)
        if low_cents > high_cents:
            raise ValueError(f"No whole-cent amount between {min_amount} and {max_amount}")
        return self.fake.random_int(min=low_cents, max=high_cents) / 100

    def generate_deposit_amount(self) -> float:
        return self.generate_amount(*DEPOSIT_RANGE)

    def generate_debit_amount(self) -> float:
        return self.generate_amount(*DEBIT_RANGE)

    def generate_transaction_description(self) -> str:
        return self.fake.random_element(TRANSACTION_DESCRIPTIONS)

    # Collections and compound records

    def generate_multiple_account_numbers(self, count: int = 5) -> List[str]:
        return [self.generate_account_number() for _ in range(count)]

    def generate_beneficiary(self) -> GeneratedBeneficiary:
        return GeneratedBeneficiary(
            account_number=self.generate_account_number(),
            name=self.generate_beneficiary_name(),
            email=self.generate_email(),
            phone=self.generate_phone_number(),
            bank_name=self.generate_bank_name(),
            ifsc_code=self.generate_ifsc_code(),
        )

    def generate_multiple_beneficiaries(self, count: int = 3) -> List[GeneratedBeneficiary]:
        return [self.generate_beneficiary() for _ in range(count)]
