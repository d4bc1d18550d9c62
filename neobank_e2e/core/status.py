"""Classification of the banking UI's free-text status messages."""

from enum import Enum


class Outcome(str, Enum):
    """Outcome tag of an interaction-layer operation."""

    LOGGED_IN = "logged_in"
    INVALID_CREDENTIALS = "invalid_credentials"
    DEPOSITED = "deposited"
    DEBITED = "debited"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INVALID_AMOUNT = "invalid_amount"
    BENEFICIARY_ADDED = "beneficiary_added"
    BENEFICIARY_UPDATED = "beneficiary_updated"
    BENEFICIARY_DELETED = "beneficiary_deleted"
    MISSING_FIELDS = "missing_fields"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


SUCCESS_OUTCOMES = frozenset(
    {
        Outcome.LOGGED_IN,
        Outcome.DEPOSITED,
        Outcome.DEBITED,
        Outcome.BENEFICIARY_ADDED,
        Outcome.BENEFICIARY_UPDATED,
        Outcome.BENEFICIARY_DELETED,
    }
)

# Checked in order; the first marker found in the message wins.
STATUS_MARKERS: tuple[tuple[str, Outcome], ...] = (
    ("insufficient funds", Outcome.INSUFFICIENT_FUNDS),
    ("invalid amount", Outcome.INVALID_AMOUNT),
    ("invalid credentials", Outcome.INVALID_CREDENTIALS),
    ("all fields required", Outcome.MISSING_FIELDS),
    ("cancelled", Outcome.CANCELLED),
    ("deposited", Outcome.DEPOSITED),
    ("debited", Outcome.DEBITED),
    ("added successfully", Outcome.BENEFICIARY_ADDED),
    ("updated successfully", Outcome.BENEFICIARY_UPDATED),
    ("deleted successfully", Outcome.BENEFICIARY_DELETED),
)


def classify_status(message: str | None) -> Outcome:
    """Map a status message to an Outcome; unrecognised text is UNKNOWN."""
    if not message:
        return Outcome.UNKNOWN
    lowered = message.lower()
    for marker, outcome in STATUS_MARKERS:
        if marker in lowered:
            return outcome
    return Outcome.UNKNOWN
