"""
Input Validation Functions.

This module contains the parsing and validation rules applied to raw user
input: amounts, email addresses, phone numbers, delivery dates, occasions,
template choices, ratings, and the mock business verification rule.

None of these raise on bad input. Each returns None (or an error message)
so the caller can re-prompt in the same stage.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from email_validator import validate_email, EmailNotValidError

from .constants import (
    DATE_PATTERN,
    IMMEDIATE_DELIVERY_WORDS,
    KNOWN_OCCASIONS,
    OTHER_OCCASION,
    PHONE_PATTERN,
    RATING_RANGE,
    TEMPLATE_CHOICE_PATTERN,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Amounts
# =============================================================================

def normalize_amount(message: Optional[str]) -> Optional[int]:
    """
    Strip every non-digit character and parse what is left.

    "₹1,000" and "1000" both normalize to 1000. Returns None when no
    digits remain.
    """
    if not message:
        return None
    digits = "".join(ch for ch in str(message) if ch.isascii() and ch.isdigit())
    if not digits:
        return None
    return int(digits)


def parse_amount(message: Optional[str]) -> Optional[int]:
    """Return a positive gift amount, or None if the input is not one."""
    value = normalize_amount(message)
    if value is None or value <= 0:
        return None
    return value


# =============================================================================
# Contact Details
# =============================================================================

def validate_email_address(email: str) -> tuple[str | None, str | None]:
    """
    Validate an email address using email-validator library.

    Only the syntax is checked; no DNS or deliverability lookups are made.
    The library still refuses special-use domains such as .test and .local.

    Returns:
        Tuple of (normalized_email, error_message).
        If valid: (normalized_email, None)
        If invalid: (None, user-friendly error message)
    """
    if not email or not email.strip():
        return (None, "Please provide a valid email address.")

    try:
        result = validate_email(email.strip(), check_deliverability=False)
        return (result.normalized, None)
    except EmailNotValidError as e:
        logger.debug("Email validation failed: %s", e)
        return (None, "Please provide a valid email address.")


def validate_phone_number(phone: str) -> tuple[str | None, str | None]:
    """
    Validate a phone number.

    Whitespace and hyphens are removed; the rest must be 10 to 15 digits with
    an optional leading "+".

    Returns:
        Tuple of (normalized_phone, error_message).
    """
    if not phone:
        return (None, "Please provide a valid phone number.")

    normalized = "".join(ch for ch in str(phone) if not ch.isspace() and ch != "-")
    if not PHONE_PATTERN.match(normalized):
        return (None, "Please provide a valid phone number (10 to 15 digits).")
    return (normalized, None)


# =============================================================================
# Dates
# =============================================================================

@dataclass(frozen=True)
class DeliveryChoice:
    """Parsed delivery schedule: immediate, or a specific calendar date."""
    kind: str  # "now" or "date"
    value: Optional[date] = None


def parse_delivery_date(message: Optional[str]) -> Optional[DeliveryChoice]:
    """
    Accept "now"/"today" or a strict YYYY-MM-DD date.

    "2025-02-30" matches the shape but fails the calendar parse and is
    rejected.
    """
    if not message:
        return None
    text = str(message).strip().lower()
    if text in IMMEDIATE_DELIVERY_WORDS:
        return DeliveryChoice(kind="now")
    if DATE_PATTERN.match(text):
        try:
            return DeliveryChoice(kind="date", value=date.fromisoformat(text))
        except ValueError:
            return None
    return None


# =============================================================================
# Dialogue Choices
# =============================================================================

@dataclass(frozen=True)
class OccasionChoice:
    """Result of matching occasion input."""
    kind: str  # "known", "other" or "custom"
    value: Optional[str] = None


def match_occasion(message: str, max_length: int) -> Optional[OccasionChoice]:
    """
    Match an occasion case-insensitively against the known list.

    Unknown text is accepted as a custom occasion as long as it is non-empty
    and within ``max_length``.
    """
    text = (message or "").strip()
    if not text or len(text) > max_length:
        return None
    key = text.lower()
    if key == OTHER_OCCASION:
        return OccasionChoice(kind="other")
    if key in KNOWN_OCCASIONS:
        return OccasionChoice(kind="known", value=KNOWN_OCCASIONS[key])
    return OccasionChoice(kind="custom", value=text)


def parse_template_choice(message: str, template_ids: Iterable[str]) -> Optional[str]:
    """Return the chosen template id if it names a catalogue template."""
    match = TEMPLATE_CHOICE_PATTERN.match((message or "").strip())
    if not match:
        return None
    template_id = match.group(1).lower()
    if template_id not in set(template_ids):
        return None
    return template_id


def parse_rating(message: str) -> Optional[int]:
    text = (message or "").strip()
    if not text.isdigit():
        return None
    value = int(text)
    return value if value in RATING_RANGE else None


def is_pdf_filename(name: Optional[str]) -> bool:
    text = (name or "").strip().lower()
    return len(text) > len(".pdf") and text.endswith(".pdf")


# =============================================================================
# Mock Business Verification
# =============================================================================

def is_mock_verified_gstin(gstin: str) -> bool:
    """
    Mock business verification.

    A GSTIN is rejected when it contains four or more "0" digits. This is a
    placeholder for a real eligibility check and carries no tax-rule meaning.
    """
    return bool(gstin and gstin.strip()) and gstin.count("0") < 4
