"""
Dialogue Schemas.

This package contains the stage enum, UI hint models, structured form
payloads and the per-turn result type used by the dialogue engine.
"""

from .stages import Stage, BUSINESS_PREVIOUS_STAGE
from .ui import (
    CamelModel,
    UiOption,
    TemplateOption,
    FormField,
    FormDescriptor,
    DownloadItem,
    UiHint,
)
from .forms import (
    LeadForm,
    VerificationForm,
    OrderLineInput,
    OrderLinesForm,
    PurchaseOrderForm,
    PaymentForm,
    FormPayload,
    parse_form_payload,
)

__all__ = [
    "Stage",
    "BUSINESS_PREVIOUS_STAGE",
    "CamelModel",
    "UiOption",
    "TemplateOption",
    "FormField",
    "FormDescriptor",
    "DownloadItem",
    "UiHint",
    "LeadForm",
    "VerificationForm",
    "OrderLineInput",
    "OrderLinesForm",
    "PurchaseOrderForm",
    "PaymentForm",
    "FormPayload",
    "parse_form_payload",
]
