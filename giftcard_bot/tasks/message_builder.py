"""
Message Builder for the Gift Card Dialogue.

This module builds reply texts that depend on session data (summaries,
quotations, receipts) and the UI hints that accompany each prompt.
"""

from typing import List, Optional

from .. import config
from .dialogue_messages import DialogueMessages
from .formatting import format_inr
from .models import BusinessDraft, BusinessLead, BusinessReceipt, OrderDraft, Receipt
from .parsers import (
    AMOUNT_PRESETS,
    BUYER_TYPE_OPTIONS,
    GIFT_TEMPLATES,
    OCCASION_OPTIONS,
    PAYMENT_METHODS,
)
from .schemas import (
    DownloadItem,
    FormDescriptor,
    FormField,
    TemplateOption,
    UiHint,
    UiOption,
)


class MessageBuilder:
    """
    Handles reply and UI hint construction for the dialogue engine.

    Stateless apart from the template catalogue it is given.
    """

    def __init__(self, templates: Optional[List[dict]] = None):
        self._templates = [
            TemplateOption(**t) for t in (templates if templates is not None else GIFT_TEMPLATES)
        ]

    # =========================================================================
    # Template catalogue
    # =========================================================================

    @property
    def templates(self) -> List[TemplateOption]:
        return list(self._templates)

    @property
    def template_ids(self) -> List[str]:
        return [t.id for t in self._templates]

    def find_template(self, template_id: Optional[str]) -> Optional[TemplateOption]:
        for template in self._templates:
            if template.id == template_id:
                return template
        return None

    def template_label(self, template_id: Optional[str]) -> str:
        template = self.find_template(template_id)
        return template.label if template else (template_id or "")

    # =========================================================================
    # Personal flow hints
    # =========================================================================

    def buyer_type_hint(self) -> UiHint:
        return UiHint(
            kind="buyerTypeOptions",
            options=[UiOption(id=i, label=l) for i, l in BUYER_TYPE_OPTIONS],
        )

    def occasion_hint(self) -> UiHint:
        return UiHint(
            kind="occasionOptions",
            options=[UiOption(id=i, label=l) for i, l in OCCASION_OPTIONS],
        )

    def template_hint(self) -> UiHint:
        return UiHint(kind="templatePicker", templates=self.templates)

    def amount_hint(self) -> UiHint:
        options = [UiOption(id=str(a), label=format_inr(a)) for a in AMOUNT_PRESETS]
        options.append(UiOption(id="custom", label="Enter amount"))
        return UiHint(kind="amountOptions", options=options)

    def confirmation_summary(self, draft: OrderDraft) -> str:
        return (
            "Here are the gift card details you have selected:\n"
            f"- Occasion: {draft.occasion}\n"
            f"- Template: {self.template_label(draft.template_id)}\n"
            f"- Amount: {format_inr(draft.amount)}\n"
            f"- Recipient {self._recipient_label(draft)}: {draft.recipient}\n"
            f"- Message: {draft.personal_message or '(none)'}\n\n"
            "Type 'confirm' to place the order or 'cancel' to restart."
        )

    def confirm_hint(self, draft: OrderDraft) -> UiHint:
        template = self.find_template(draft.template_id)
        return UiHint(
            kind="confirm",
            details={
                "occasion": draft.occasion,
                "templateId": draft.template_id,
                "templateLabel": self.template_label(draft.template_id),
                "templateImageUrl": template.image_url if template else None,
                "amount": draft.amount,
                "currency": config.CURRENCY_CODE,
                "recipientType": draft.recipient_type,
                "recipient": draft.recipient,
                "personalMessage": draft.personal_message or "",
            },
            options=[
                UiOption(id="confirm", label="Confirm"),
                UiOption(id="cancel", label="Cancel"),
            ],
        )

    def receipt_text(self, receipt: Receipt) -> str:
        lines = [
            DialogueMessages.SUCCESS,
            f"Gift link: {receipt.gift_link}",
            "",
            "Details:",
            f"- Occasion: {receipt.occasion}",
            f"- Template: {receipt.template_label}",
            f"- Amount: {format_inr(receipt.amount)}",
            f"- Recipient: {receipt.recipient}",
            f"- Message: {receipt.personal_message or '(none)'}",
        ]
        return "\n".join(lines)

    def receipt_hint(self, receipt: Receipt) -> UiHint:
        return UiHint(
            kind="receipt",
            details={
                "amount": receipt.amount,
                "currency": config.CURRENCY_CODE,
                "occasion": receipt.occasion,
                "templateId": receipt.template_id,
                "templateLabel": receipt.template_label,
                "recipient": receipt.recipient,
                "personalMessage": receipt.personal_message or "",
                "giftLink": receipt.gift_link,
            },
        )

    @staticmethod
    def _recipient_label(draft: OrderDraft) -> str:
        return "Phone" if draft.recipient_type == "phone" else "Email"

    # =========================================================================
    # Business flow hints
    # =========================================================================

    def lead_form_hint(self) -> UiHint:
        return UiHint(
            kind="form",
            form=FormDescriptor(
                kind="lead",
                title="Business details",
                fields=[
                    FormField(name="name", label="Full Name"),
                    FormField(name="company", label="Company Name"),
                    FormField(name="email", label="Official Email ID", input_type="email"),
                    FormField(name="phone", label="Phone Number", input_type="tel"),
                    FormField(name="gstin", label="Business GSTIN (optional)", required=False),
                ],
            ),
        )

    def verification_form_hint(self, lead: Optional[BusinessLead]) -> UiHint:
        return UiHint(
            kind="form",
            form=FormDescriptor(
                kind="verification",
                title="Business Verification",
                fields=[
                    FormField(name="gstin", label="Business GSTIN", value=lead.gstin if lead else None),
                    FormField(name="bankAccount", label="Bank account"),
                    FormField(name="ifsc", label="IFSC Code"),
                ],
                submit_label="Submit & Verify",
            ),
        )

    def order_lines_form_hint(self, max_lines: int) -> UiHint:
        return UiHint(
            kind="form",
            form=FormDescriptor(
                kind="order_lines",
                title="Order Details",
                fields=[
                    FormField(name="denomination", label="Denomination (INR)", input_type="number"),
                    FormField(name="count", label="Count", input_type="number"),
                ],
                submit_label="Continue",
            ),
            details={"maxLines": max_lines},
        )

    def delivery_email_hint(self, email: Optional[str]) -> UiHint:
        return UiHint(
            kind="deliveryEmail",
            title="Delivery Email",
            details={"email": email},
            options=[
                UiOption(id="continue", label="Continue"),
                UiOption(id="edit", label="Edit order"),
            ],
        )

    def delivery_date_hint(self) -> UiHint:
        return UiHint(
            kind="options",
            title="Delivery date (or type YYYY-MM-DD)",
            options=[UiOption(id="now", label="Deliver now")],
        )

    def quotation_text(self, business: BusinessDraft) -> str:
        quotation = business.quotation
        lines = ["🧾 Quotation for your order:"]
        for index, line in enumerate(business.lines, start=1):
            lines.append(
                f"{index}. {format_inr(line.denomination)} x {line.count} = {format_inr(line.subtotal)}"
            )
        lines.extend([
            "",
            f"Gross value: {format_inr(quotation.gross)}",
            f"Discount ({quotation.discount_percent}%): -{format_inr(quotation.discount)}",
            f"Net payable: {format_inr(quotation.net)}",
            f"Delivery to: {business.delivery_email} ({business.delivery_label})",
            "",
            "Reply 'accept' to proceed, 'edit' to change the order or 'cancel' to abort.",
        ])
        return "\n".join(lines)

    def quotation_hint(self, business: BusinessDraft) -> UiHint:
        quotation = business.quotation
        return UiHint(
            kind="quotation",
            details={
                "lines": [
                    {"denomination": l.denomination, "count": l.count, "subtotal": l.subtotal}
                    for l in business.lines
                ],
                "gross": quotation.gross,
                "discountPercent": quotation.discount_percent,
                "discount": quotation.discount,
                "net": quotation.net,
                "currency": config.CURRENCY_CODE,
            },
            options=[
                UiOption(id="accept", label="Accept & get PI"),
                UiOption(id="edit", label="Edit order"),
                UiOption(id="cancel", label="Cancel"),
            ],
        )

    def purchase_order_hint(self, proforma_url: str) -> UiHint:
        return UiHint(
            kind="form",
            form=FormDescriptor(
                kind="purchase_order",
                title="Upload Purchase Order",
                fields=[FormField(name="filename", label="Purchase Order (PDF)", input_type="file")],
                submit_label="Upload PDF",
            ),
            items=[DownloadItem(label="Proforma Invoice", url=proforma_url)],
        )

    def payment_hint(self, business: BusinessDraft) -> UiHint:
        return UiHint(
            kind="form",
            form=FormDescriptor(
                kind="payment",
                title="Mock Payment Gateway",
                fields=[
                    FormField(name="method", label="Payment Method", input_type="choice"),
                    FormField(name="reference", label="UTR / card reference"),
                ],
                submit_label="I Understand & Pay Now",
            ),
            options=[UiOption(id=k, label=v) for k, v in PAYMENT_METHODS.items()],
            details={"net": business.quotation.net if business.quotation else 0, "currency": config.CURRENCY_CODE},
        )

    def business_receipt_text(self, receipt: BusinessReceipt) -> str:
        lines = [
            "✅ Payment received! Your order is confirmed.",
            f"Order ID: {receipt.order_id}",
            f"Net paid: {format_inr(receipt.net)} via {receipt.payment_method}",
            f"Gift card codes will be delivered to {receipt.delivery_email} ({receipt.delivery_label}).",
            "",
            "Your GST invoice and order report are ready to download.",
        ]
        return "\n".join(lines)

    def business_receipt_hint(self, receipt: BusinessReceipt) -> UiHint:
        return UiHint(
            kind="downloads",
            items=[
                DownloadItem(label="GST Invoice", url=receipt.invoice_url),
                DownloadItem(label="Order Report", url=receipt.report_url),
            ],
            options=[UiOption(id=str(r), label=str(r)) for r in range(1, 6)]
            + [UiOption(id="skip", label="Skip")],
            details={"orderId": receipt.order_id, "net": receipt.net, "currency": config.CURRENCY_CODE},
        )

    def rating_hint(self) -> UiHint:
        return UiHint(
            kind="ratingOptions",
            options=[UiOption(id=str(r), label=str(r)) for r in range(1, 6)]
            + [UiOption(id="skip", label="Skip")],
        )
