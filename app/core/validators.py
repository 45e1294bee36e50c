"""Field validators shared by request schemas.

Each validator returns the (possibly normalized) value or raises ``ValueError``
so it can be called from a pydantic ``field_validator``. The repository never
calls these itself; validation happens on the way in.
"""

import re
from datetime import date, datetime

VALID_BLOOD_TYPES = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")

MAX_AGE_YEARS = 150
MIN_POLICY_NUMBER_LENGTH = 5
PHONE_DIGITS = 10

_NON_DIGITS = re.compile(r"\D")


def validate_required(value: str, field_name: str = "This field") -> str:
    """Reject empty or whitespace-only text."""
    if value is None or not str(value).strip():
        raise ValueError(f"{field_name} is required")
    return value


def validate_phone(value: str) -> str:
    """Validate a US phone number, ignoring separators."""
    cleaned = _NON_DIGITS.sub("", value)
    if len(cleaned) != PHONE_DIGITS:
        raise ValueError(f"Phone number must be {PHONE_DIGITS} digits")
    return value


def validate_date_of_birth(value: date, today: date | None = None) -> date:
    """
    Validate a date of birth.

    Args:
        value: Date of birth
        today: Reference date, defaults to the current date

    Returns:
        The unchanged date of birth

    Raises:
        ValueError: If the date is not in the past or is implausibly old
    """
    if isinstance(value, datetime):
        value = value.date()
    today = today or date.today()
    if value >= today:
        raise ValueError("Date of birth must be in the past")
    if today.year - value.year > MAX_AGE_YEARS:
        raise ValueError("Invalid date of birth")
    return value


def validate_blood_type(value: str) -> str:
    """Validate and upper-case an ABO/Rh blood type."""
    normalized = value.strip().upper()
    if normalized not in VALID_BLOOD_TYPES:
        raise ValueError("Invalid blood type")
    return normalized


def validate_policy_number(value: str) -> str:
    """Validate an insurance policy number."""
    if len(value.strip()) < MIN_POLICY_NUMBER_LENGTH:
        raise ValueError(
            f"Policy number must be at least {MIN_POLICY_NUMBER_LENGTH} characters"
        )
    return value

