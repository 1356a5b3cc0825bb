"""
Formatting and Mock Identifier Helpers.

Currency rendering for replies, plus generators for the fabricated links
and reference numbers handed out by the mock flows. Identifiers are random
tokens with no uniqueness tracking; nothing is persisted or looked up.
"""

import secrets
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from .. import config


def _group_indian(digits: str) -> str:
    """Group digits the Indian way: last three, then pairs (12,34,567)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_inr(amount: Any) -> str:
    """
    Render an amount as whole-rupee currency, e.g. 100000 -> "₹1,00,000".

    None or anything that is not a finite number renders as "₹0".
    """
    if amount is None or isinstance(amount, bool):
        return f"{config.CURRENCY_SYMBOL}0"
    try:
        value = Decimal(str(amount).strip())
    except (InvalidOperation, ValueError):
        return f"{config.CURRENCY_SYMBOL}0"
    if not value.is_finite():
        return f"{config.CURRENCY_SYMBOL}0"

    # to_integral_value ignores the context precision; quantize does not
    rupees = value.to_integral_value(rounding=ROUND_HALF_UP)
    sign = "-" if rupees < 0 else ""
    digits = format(rupees.copy_abs(), "f")
    return f"{sign}{config.CURRENCY_SYMBOL}{_group_indian(digits)}"


def generate_token(nbytes: int = 12) -> str:
    return secrets.token_hex(nbytes)


def generate_gift_link() -> str:
    """Fabricated gift link of the form <domain>/gift/<24 hex chars>."""
    return f"{config.MOCK_GIFT_DOMAIN}/gift/{generate_token()}"


def generate_reference(prefix: str) -> str:
    """Short human-readable reference such as "PI-3F9A02BC"."""
    return f"{prefix}-{generate_token(4).upper()}"


def generate_document_link(kind: str, reference: str) -> str:
    """Fabricated download link for an invoice, report or proforma."""
    return f"{config.MOCK_DOCUMENT_DOMAIN}/{kind}/{reference}.pdf"
