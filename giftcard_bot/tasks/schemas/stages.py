"""
Dialogue Stage Definitions.

This module defines the Stage enum representing every point a gift card
conversation can occupy. A session holds exactly one stage at a time.
"""

from enum import Enum


class Stage(str, Enum):
    """Enumerated points in the gift card dialogue."""
    IDLE = "idle"
    AWAITING_BUYER_TYPE = "awaiting_buyer_type"

    # Personal purchase path
    AWAITING_OCCASION = "awaiting_occasion"
    AWAITING_CUSTOM_OCCASION = "awaiting_custom_occasion"  # "Other" was picked
    AWAITING_TEMPLATE = "awaiting_template"
    AWAITING_AMOUNT = "awaiting_amount"
    AWAITING_RECIPIENT = "awaiting_recipient"
    AWAITING_MESSAGE = "awaiting_message"
    AWAITING_CONFIRMATION = "awaiting_confirmation"

    # Business purchase path
    BIZ_AWAITING_LEAD = "biz_awaiting_lead"
    BIZ_AWAITING_VERIFICATION = "biz_awaiting_verification"
    BIZ_AWAITING_ORDER_LINES = "biz_awaiting_order_lines"
    BIZ_AWAITING_DELIVERY_EMAIL = "biz_awaiting_delivery_email"
    BIZ_AWAITING_DELIVERY_DATE = "biz_awaiting_delivery_date"
    BIZ_AWAITING_QUOTATION = "biz_awaiting_quotation"
    BIZ_AWAITING_PURCHASE_ORDER = "biz_awaiting_purchase_order"
    BIZ_AWAITING_PAYMENT = "biz_awaiting_payment"
    BIZ_AWAITING_FEEDBACK = "biz_awaiting_feedback"

    COMPLETED = "completed"


# Where "edit" / "back" leads from each business stage
BUSINESS_PREVIOUS_STAGE = {
    Stage.BIZ_AWAITING_VERIFICATION: Stage.BIZ_AWAITING_LEAD,
    Stage.BIZ_AWAITING_ORDER_LINES: Stage.BIZ_AWAITING_VERIFICATION,
    Stage.BIZ_AWAITING_DELIVERY_EMAIL: Stage.BIZ_AWAITING_ORDER_LINES,
    Stage.BIZ_AWAITING_DELIVERY_DATE: Stage.BIZ_AWAITING_DELIVERY_EMAIL,
    Stage.BIZ_AWAITING_QUOTATION: Stage.BIZ_AWAITING_ORDER_LINES,
    Stage.BIZ_AWAITING_PURCHASE_ORDER: Stage.BIZ_AWAITING_QUOTATION,
}
