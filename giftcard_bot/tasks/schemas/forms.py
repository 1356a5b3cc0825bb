"""
Structured Form Payloads.

Business stages collect several fields at once. Instead of packing them into
the free-text message, the client sends a small tagged object next to it:

    {"sessionId": "...", "message": "", "form": {"kind": "lead", "name": "..."}}

The ``kind`` tag selects the model. Fields are deliberately lax (strings
default to empty) so that semantic checks happen in the dialogue handlers,
where a failed check turns into a re-prompt instead of a request error.
"""

import logging
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter, ValidationError

from .ui import CamelModel

logger = logging.getLogger(__name__)


class LeadForm(CamelModel):
    kind: Literal["lead"] = "lead"
    name: str = ""
    company: str = ""
    email: str = ""
    phone: str = ""
    gstin: Optional[str] = None


class VerificationForm(CamelModel):
    kind: Literal["verification"] = "verification"
    gstin: str = ""
    bank_account: str = ""
    ifsc: str = ""


class OrderLineInput(CamelModel):
    denomination: int = 0
    count: int = 0


class OrderLinesForm(CamelModel):
    kind: Literal["order_lines"] = "order_lines"
    lines: List[OrderLineInput] = []


class PurchaseOrderForm(CamelModel):
    kind: Literal["purchase_order"] = "purchase_order"
    filename: str = ""


class PaymentForm(CamelModel):
    kind: Literal["payment"] = "payment"
    method: str = ""
    reference: str = ""


FormPayload = Annotated[
    Union[LeadForm, VerificationForm, OrderLinesForm, PurchaseOrderForm, PaymentForm],
    Field(discriminator="kind"),
]

_form_adapter = TypeAdapter(FormPayload)


def parse_form_payload(raw: Any) -> Optional[FormPayload]:
    """
    Parse a raw JSON object into a form model.

    Returns None for anything that is not a recognizable form, so a malformed
    payload degrades to "no form submitted".
    """
    if not isinstance(raw, dict):
        return None
    try:
        return _form_adapter.validate_python(raw)
    except ValidationError as e:
        logger.debug("Ignoring malformed form payload: %s", e.error_count())
        return None
