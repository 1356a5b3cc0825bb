"""
Pydantic models for gift card sessions.

The session record is the only mutable state in the system:
- GiftSession (root)
  - OrderDraft (personal purchase fields)
  - BusinessDraft (bulk purchase fields)
    - BusinessLead, BusinessVerification, OrderLine, Quotation

Receipts are frozen snapshots built once an order completes. They live only
in the reply payload.
"""

from datetime import date, datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .schemas.stages import Stage


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Personal Order Draft
# =============================================================================

class OrderDraft(BaseModel):
    """Order fields collected turn by turn. Empty until each stage fills it."""
    buyer_type: Optional[Literal["personal", "business"]] = None
    occasion: Optional[str] = None
    template_id: Optional[str] = None
    amount: Optional[int] = None
    recipient_type: Optional[Literal["email", "phone"]] = None
    recipient: Optional[str] = None
    personal_message: Optional[str] = None


# =============================================================================
# Business Order Draft
# =============================================================================

class BusinessLead(BaseModel):
    name: str
    company: str
    email: str
    phone: str
    gstin: Optional[str] = None


class BusinessVerification(BaseModel):
    gstin: str
    bank_account: str
    ifsc: str
    verified: bool = False


class OrderLine(BaseModel):
    denomination: int
    count: int

    @property
    def subtotal(self) -> int:
        return self.denomination * self.count


class Quotation(BaseModel):
    gross: int
    discount_percent: int
    discount: int
    net: int


class BusinessDraft(BaseModel):
    lead: Optional[BusinessLead] = None
    verification: Optional[BusinessVerification] = None
    lines: List[OrderLine] = Field(default_factory=list)
    delivery_email: Optional[str] = None
    delivery_kind: Optional[Literal["now", "date"]] = None
    delivery_date: Optional[date] = None
    quotation: Optional[Quotation] = None
    proforma_number: Optional[str] = None
    purchase_order: Optional[str] = None
    payment_method: Optional[str] = None
    payment_reference: Optional[str] = None
    order_id: Optional[str] = None
    rating: Optional[int] = None

    @property
    def gross_total(self) -> int:
        return sum(line.subtotal for line in self.lines)

    @property
    def card_count(self) -> int:
        return sum(line.count for line in self.lines)

    @property
    def delivery_label(self) -> str:
        if self.delivery_kind == "now":
            return "now"
        if self.delivery_date:
            return self.delivery_date.isoformat()
        return "(not set)"


# =============================================================================
# Session
# =============================================================================

class GiftSession(BaseModel):
    """One conversation: its current stage plus everything collected so far."""
    session_id: str
    stage: Stage = Stage.IDLE
    draft: OrderDraft = Field(default_factory=OrderDraft)
    business: BusinessDraft = Field(default_factory=BusinessDraft)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def reset(self, stage: Stage = Stage.IDLE) -> None:
        """Drop all collected data and move to ``stage``."""
        self.draft = OrderDraft()
        self.business = BusinessDraft()
        self.stage = stage

    def touch(self) -> None:
        self.updated_at = _utcnow()


# =============================================================================
# Receipts
# =============================================================================

class Receipt(BaseModel):
    """Mock confirmation of a personal gift card order."""
    model_config = ConfigDict(frozen=True)

    amount: int
    occasion: str
    template_id: str
    template_label: str
    recipient: str
    personal_message: Optional[str] = None
    gift_link: str
    issued_at: datetime = Field(default_factory=_utcnow)


class BusinessReceipt(BaseModel):
    """Mock confirmation of a paid business order."""
    model_config = ConfigDict(frozen=True)

    order_id: str
    lines: List[OrderLine]
    gross: int
    discount: int
    net: int
    delivery_email: str
    delivery_label: str
    payment_method: str
    invoice_url: str
    report_url: str
    issued_at: datetime = Field(default_factory=_utcnow)
