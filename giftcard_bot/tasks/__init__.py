"""
Gift Card Dialogue System.

This package provides the deterministic dialogue used to sell gift cards:
- Stage enum and per-stage handlers (personal and business flows)
- Session, draft and receipt models
- Input parsers, pricing and reply/UI hint construction
"""

from .models import (
    OrderDraft,
    BusinessLead,
    BusinessVerification,
    OrderLine,
    Quotation,
    BusinessDraft,
    GiftSession,
    Receipt,
    BusinessReceipt,
)

from .schemas import Stage, UiHint, FormPayload, parse_form_payload
from .schemas.result import TurnInput, TurnResult

from .pricing import PricingEngine
from .message_builder import MessageBuilder
from .state_machine import DialogueEngine

__all__ = [
    # Models
    "OrderDraft",
    "BusinessLead",
    "BusinessVerification",
    "OrderLine",
    "Quotation",
    "BusinessDraft",
    "GiftSession",
    "Receipt",
    "BusinessReceipt",
    # Schemas
    "Stage",
    "UiHint",
    "FormPayload",
    "parse_form_payload",
    "TurnInput",
    "TurnResult",
    # Engine
    "PricingEngine",
    "MessageBuilder",
    "DialogueEngine",
]
