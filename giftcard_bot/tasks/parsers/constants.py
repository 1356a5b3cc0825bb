"""
Parser Constants.

This module contains the fixed vocabularies and regex patterns used to
interpret user input at each dialogue stage: greetings, buyer types,
occasions, the template catalogue, amount presets and the short command
words accepted by the business flow.
"""

import re

# =============================================================================
# Global Patterns
# =============================================================================

# A bare greeting restarts the conversation from any stage
GREETING_PATTERN = re.compile(
    r"^(hi|hello|hey)(\s+there)?[\s!.,]*$",
    re.IGNORECASE
)

# "template:t2" from the picker, or a typed "t2"
TEMPLATE_CHOICE_PATTERN = re.compile(r"^(?:template:\s*)?(t\d+)$", re.IGNORECASE)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

PHONE_PATTERN = re.compile(r"^\+?\d{10,15}$")

# =============================================================================
# Buyer Type
# =============================================================================

PERSONAL_BUYER_WORDS = {"1", "personal", "self", "myself"}
BUSINESS_BUYER_WORDS = {"2", "business"}

BUYER_TYPE_OPTIONS = [
    ("personal", "Personal / Self"),
    ("business", "Business"),
]

# =============================================================================
# Occasions
# =============================================================================

# Maps accepted spellings to the stored occasion label
KNOWN_OCCASIONS = {
    "birthday": "birthday",
    "thank you": "thank you",
    "thankyou": "thank you",
    "diwali": "diwali",
    "raksha bandhan": "raksha bandhan",
    "rakhi": "raksha bandhan",
}

OTHER_OCCASION = "other"

OCCASION_OPTIONS = [
    ("birthday", "Birthday"),
    ("thankyou", "Thank You"),
    ("diwali", "Diwali"),
    ("other", "Other (custom)"),
]

# =============================================================================
# Templates and Amounts
# =============================================================================

GIFT_TEMPLATES = [
    {"id": "t1", "label": "Happy Birthday", "image_url": "/happy-bday.png"},
    {"id": "t2", "label": "Diwali", "image_url": "/diwali.png"},
    {"id": "t3", "label": "Raksha Bandhan", "image_url": "/rakshabandhan.png"},
    {"id": "t4", "label": "Sorry/Thank You", "image_url": "/Sorry.png"},
]

AMOUNT_PRESETS = [500, 1000, 2000, 5000]

# =============================================================================
# Command Words
# =============================================================================

CONFIRM_WORD = "confirm"
CANCEL_WORD = "cancel"
SKIP_WORDS = {"skip", "none"}
EDIT_WORDS = {"edit", "back", "go back"}
CONTINUE_WORDS = {"continue", "confirm", "ok", "okay", "yes"}
ACCEPT_WORDS = {"accept", "proceed", "yes", "approve"}
PAID_WORDS = {"paid", "payment done"}
IMMEDIATE_DELIVERY_WORDS = {"now", "today"}

# =============================================================================
# Payments and Feedback
# =============================================================================

PAYMENT_METHODS = {
    "neft": "NEFT / Netbanking",
    "card": "Credit Card",
}

RATING_RANGE = range(1, 6)
