"""
Parsers Package.

This package contains all parsing functions and constants used by the
dialogue engine for interpreting user input.

Exports:
- Validators: amount, email, phone, date, occasion, template, rating parsing
- Constants: vocabularies, template catalogue, regex patterns
"""

from .validators import (
    DeliveryChoice,
    OccasionChoice,
    normalize_amount,
    parse_amount,
    validate_email_address,
    validate_phone_number,
    parse_delivery_date,
    match_occasion,
    parse_template_choice,
    parse_rating,
    is_pdf_filename,
    is_mock_verified_gstin,
)

from .constants import (
    GREETING_PATTERN,
    TEMPLATE_CHOICE_PATTERN,
    PERSONAL_BUYER_WORDS,
    BUSINESS_BUYER_WORDS,
    BUYER_TYPE_OPTIONS,
    KNOWN_OCCASIONS,
    OCCASION_OPTIONS,
    GIFT_TEMPLATES,
    AMOUNT_PRESETS,
    CONFIRM_WORD,
    CANCEL_WORD,
    SKIP_WORDS,
    EDIT_WORDS,
    CONTINUE_WORDS,
    ACCEPT_WORDS,
    PAID_WORDS,
    PAYMENT_METHODS,
)

__all__ = [
    # Validators
    "DeliveryChoice",
    "OccasionChoice",
    "normalize_amount",
    "parse_amount",
    "validate_email_address",
    "validate_phone_number",
    "parse_delivery_date",
    "match_occasion",
    "parse_template_choice",
    "parse_rating",
    "is_pdf_filename",
    "is_mock_verified_gstin",
    # Constants
    "GREETING_PATTERN",
    "TEMPLATE_CHOICE_PATTERN",
    "PERSONAL_BUYER_WORDS",
    "BUSINESS_BUYER_WORDS",
    "BUYER_TYPE_OPTIONS",
    "KNOWN_OCCASIONS",
    "OCCASION_OPTIONS",
    "GIFT_TEMPLATES",
    "AMOUNT_PRESETS",
    "CONFIRM_WORD",
    "CANCEL_WORD",
    "SKIP_WORDS",
    "EDIT_WORDS",
    "CONTINUE_WORDS",
    "ACCEPT_WORDS",
    "PAID_WORDS",
    "PAYMENT_METHODS",
]
