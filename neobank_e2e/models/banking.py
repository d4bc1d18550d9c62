"""Records observed in, or generated for, the banking UI."""

import re
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from neobank_e2e.core.money import AmountFormatError, parse_amount
from neobank_e2e.core.status import SUCCESS_OUTCOMES, Outcome

# "Deposit +$500.00", "Salary Credit+$5,000.00"
_TRANSACTION_RE = re.compile(r"^\s*(?P<description>.*?)\s*(?P<amount>[+-]\s*\$[\d,]+(?:\.\d+)?)\s*$", re.S)

# "John Doe - 9876543210 (HDFC Bank)"
_BENEFICIARY_RE = re.compile(r"^\s*(?P<name>.+?)\s+-\s+(?P<account>\S+)\s+\((?P<bank>.+)\)\s*$", re.S)


class OperationResult(BaseModel):
    """Outcome of one UI operation together with the message the UI showed."""

    outcome: Outcome
    message: str = ""

    @property
    def succeeded(self) -> bool:
        return self.outcome in SUCCESS_OUTCOMES


class Transaction(BaseModel):
    """Transaction row as rendered in the dashboard list."""

    text: str
    description: str = ""
    amount_text: str = ""

    @classmethod
    def from_text(cls, text: str) -> "Transaction":
        match = _TRANSACTION_RE.match(text or "")
        if not match:
            return cls(text=text or "", description=(text or "").strip())
        return cls(
            text=text,
            description=match.group("description").strip(),
            amount_text=match.group("amount").replace(" ", ""),
        )

    @property
    def signed_amount(self) -> Optional[Decimal]:
        """Signed value of amount_text, None when the row shows no amount."""
        if not self.amount_text:
            return None
        try:
            return parse_amount(self.amount_text)
        except AmountFormatError:
            return None

    @property
    def is_credit(self) -> bool:
        return self.amount_text.startswith("+")

    def matches(self, description: str, amount_text: str) -> bool:
        return description in self.text and amount_text in self.text


class Beneficiary(BaseModel):
    """Beneficiary row; id is the row's data-id used by edit and delete buttons."""

    id: Optional[int] = None
    text: str
    name: str = ""
    account: str = ""
    bank: str = ""

    @classmethod
    def from_text(cls, text: str, beneficiary_id: Optional[int] = None) -> "Beneficiary":
        match = _BENEFICIARY_RE.match(text or "")
        if not match:
            return cls(id=beneficiary_id, text=text or "", name=(text or "").strip())
        return cls(
            id=beneficiary_id,
            text=text,
            name=match.group("name").strip(),
            account=match.group("account").strip(),
            bank=match.group("bank").strip(),
        )

    def contains(self, *values: str) -> bool:
        return all(value in self.text for value in values)


class GeneratedBeneficiary(BaseModel):
    """Randomly generated beneficiary details."""

    account_number: str = Field(..., description="ACCT-######## account number")
    name: str
    email: str
    phone: str
    bank_name: str
    ifsc_code: str
