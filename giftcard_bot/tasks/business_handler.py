"""
Business Purchase Handler for the Dialogue Engine.

This module handles the bulk purchase path: lead capture, mock business
verification, order lines, delivery email and date, quotation, proforma
invoice, purchase order upload, payment and feedback.

Multi-field stages expect a structured form payload whose ``kind`` matches
the stage. "edit" or "back" returns to the previous business stage; the
data collected there is kept so the client can prefill it.
"""

import logging
from typing import Callable, Dict

from .dialogue_messages import DialogueMessages
from .formatting import generate_document_link, generate_reference
from .message_builder import MessageBuilder
from .models import (
    BusinessLead,
    BusinessReceipt,
    BusinessVerification,
    GiftSession,
    OrderLine,
)
from .parsers import (
    ACCEPT_WORDS,
    CANCEL_WORD,
    CONTINUE_WORDS,
    EDIT_WORDS,
    PAID_WORDS,
    PAYMENT_METHODS,
    SKIP_WORDS,
    is_mock_verified_gstin,
    is_pdf_filename,
    parse_delivery_date,
    parse_rating,
    validate_email_address,
    validate_phone_number,
)
from .pricing import PricingEngine
from .schemas import (
    BUSINESS_PREVIOUS_STAGE,
    LeadForm,
    OrderLinesForm,
    PaymentForm,
    PurchaseOrderForm,
    Stage,
    VerificationForm,
)
from .schemas.result import TurnInput, TurnResult

logger = logging.getLogger(__name__)

# Stages whose data feeds the quotation; going back to one invalidates it
_PRE_QUOTATION_STAGES = {
    Stage.BIZ_AWAITING_ORDER_LINES,
    Stage.BIZ_AWAITING_DELIVERY_EMAIL,
    Stage.BIZ_AWAITING_DELIVERY_DATE,
}


class BusinessFlowHandler:
    """
    Handles the business gift card flow.

    Manages lead and verification forms, order-line pricing, delivery details,
    quotation acceptance, proforma invoice issue, purchase order upload,
    payment and post-sale feedback.
    """

    def __init__(self, message_builder: MessageBuilder, pricing: PricingEngine):
        self.message_builder = message_builder
        self.pricing = pricing
        self._prompts: Dict[Stage, Callable[[GiftSession, str], TurnResult]] = {
            Stage.BIZ_AWAITING_LEAD: self._prompt_lead,
            Stage.BIZ_AWAITING_VERIFICATION: self._prompt_verification,
            Stage.BIZ_AWAITING_ORDER_LINES: self._prompt_order_lines,
            Stage.BIZ_AWAITING_DELIVERY_EMAIL: self._prompt_delivery_email,
            Stage.BIZ_AWAITING_DELIVERY_DATE: self._prompt_delivery_date,
            Stage.BIZ_AWAITING_QUOTATION: self._prompt_quotation,
        }

    def start(self, session: GiftSession) -> TurnResult:
        """Enter the business flow at lead capture."""
        logger.info("Session %s: entering business flow", session.session_id)
        return self._prompt_lead(session, DialogueMessages.LEAD)

    # =========================================================================
    # Navigation
    # =========================================================================

    def _wants_edit(self, turn: TurnInput, session: GiftSession) -> bool:
        return turn.form is None and turn.command in EDIT_WORDS and session.stage in BUSINESS_PREVIOUS_STAGE

    def _go_back(self, session: GiftSession) -> TurnResult:
        target = BUSINESS_PREVIOUS_STAGE[session.stage]
        if target in _PRE_QUOTATION_STAGES:
            session.business.quotation = None
            session.business.proforma_number = None
        logger.debug("Session %s: edit %s -> %s", session.session_id, session.stage.value, target.value)
        return self._prompts[target](session, "")

    # =========================================================================
    # Prompts
    # =========================================================================

    def _prompt_lead(self, session: GiftSession, reply: str) -> TurnResult:
        session.stage = Stage.BIZ_AWAITING_LEAD
        return TurnResult(
            session=session,
            reply=reply or DialogueMessages.LEAD,
            ui=self.message_builder.lead_form_hint(),
        )

    def _prompt_verification(self, session: GiftSession, reply: str) -> TurnResult:
        session.stage = Stage.BIZ_AWAITING_VERIFICATION
        return TurnResult(
            session=session,
            reply=reply or DialogueMessages.VERIFICATION,
            ui=self.message_builder.verification_form_hint(session.business.lead),
        )

    def _prompt_order_lines(self, session: GiftSession, reply: str) -> TurnResult:
        session.stage = Stage.BIZ_AWAITING_ORDER_LINES
        return TurnResult(
            session=session,
            reply=reply or DialogueMessages.ORDER_LINES,
            ui=self.message_builder.order_lines_form_hint(self.pricing.max_lines),
        )

    def _prompt_delivery_email(self, session: GiftSession, reply: str) -> TurnResult:
        session.stage = Stage.BIZ_AWAITING_DELIVERY_EMAIL
        email = session.business.delivery_email
        return TurnResult(
            session=session,
            reply=reply or DialogueMessages.DELIVERY_EMAIL.format(email=email),
            ui=self.message_builder.delivery_email_hint(email),
        )

    def _prompt_delivery_date(self, session: GiftSession, reply: str) -> TurnResult:
        session.stage = Stage.BIZ_AWAITING_DELIVERY_DATE
        return TurnResult(
            session=session,
            reply=reply or DialogueMessages.DELIVERY_DATE,
            ui=self.message_builder.delivery_date_hint(),
        )

    def _prompt_quotation(self, session: GiftSession, reply: str) -> TurnResult:
        session.stage = Stage.BIZ_AWAITING_QUOTATION
        business = session.business
        business.quotation = self.pricing.quote(business.lines)
        return TurnResult(
            session=session,
            reply=reply or self.message_builder.quotation_text(business),
            ui=self.message_builder.quotation_hint(business),
        )

    # =========================================================================
    # Lead and verification
    # =========================================================================

    def handle_lead(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        form = turn.form
        if not isinstance(form, LeadForm):
            return self._prompt_lead(session, DialogueMessages.LEAD_RETRY)

        name, company = form.name.strip(), form.company.strip()
        if not name or not company:
            return self._prompt_lead(session, DialogueMessages.LEAD_RETRY)

        email, email_error = validate_email_address(form.email)
        if email_error:
            return self._prompt_lead(session, email_error)

        phone, phone_error = validate_phone_number(form.phone)
        if phone_error:
            return self._prompt_lead(session, phone_error)

        gstin = (form.gstin or "").strip().upper()
        if gstin.lower() in SKIP_WORDS:
            gstin = ""

        session.business.lead = BusinessLead(
            name=name,
            company=company,
            email=email,
            phone=phone,
            gstin=gstin or None,
        )
        return self._prompt_verification(session, "")

    def handle_verification(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        if self._wants_edit(turn, session):
            return self._go_back(session)

        form = turn.form
        if not isinstance(form, VerificationForm):
            return self._prompt_verification(session, DialogueMessages.VERIFICATION_RETRY)

        gstin = form.gstin.strip().upper()
        bank_account = form.bank_account.strip()
        ifsc = form.ifsc.strip().upper()
        if not gstin or not bank_account or not ifsc:
            return self._prompt_verification(session, DialogueMessages.VERIFICATION_RETRY)

        if not is_mock_verified_gstin(gstin):
            logger.info("Session %s: business verification rejected", session.session_id)
            return self._prompt_verification(session, DialogueMessages.VERIFICATION_FAILED)

        session.business.verification = BusinessVerification(
            gstin=gstin,
            bank_account=bank_account,
            ifsc=ifsc,
            verified=True,
        )
        lead = session.business.lead
        company = lead.company if lead else ""
        return self._prompt_order_lines(
            session,
            f"{DialogueMessages.VERIFIED} ({company}, GSTIN {gstin})\n\n{DialogueMessages.ORDER_LINES}",
        )

    # =========================================================================
    # Order lines and delivery
    # =========================================================================

    def handle_order_lines(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        if self._wants_edit(turn, session):
            return self._go_back(session)

        form = turn.form
        if not isinstance(form, OrderLinesForm):
            return self._prompt_order_lines(session, DialogueMessages.ORDER_LINES)

        # Blank rows from the client form are ignored
        lines = [
            OrderLine(denomination=line.denomination, count=line.count)
            for line in form.lines
            if line.denomination or line.count
        ]
        error = self.pricing.check_lines(lines)
        if error:
            return self._prompt_order_lines(session, error)

        business = session.business
        business.lines = lines
        if not business.delivery_email and business.lead:
            business.delivery_email = business.lead.email
        return self._prompt_delivery_email(session, "")

    def handle_delivery_email(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        if self._wants_edit(turn, session):
            return self._go_back(session)

        business = session.business
        if turn.command in CONTINUE_WORDS and business.delivery_email:
            return self._prompt_delivery_date(session, "")

        email, _ = validate_email_address(turn.text)
        if email:
            business.delivery_email = email
            return self._prompt_delivery_date(session, "")

        return self._prompt_delivery_email(session, DialogueMessages.DELIVERY_EMAIL_RETRY)

    def handle_delivery_date(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        if self._wants_edit(turn, session):
            return self._go_back(session)

        choice = parse_delivery_date(turn.text)
        if choice is None:
            return self._prompt_delivery_date(session, DialogueMessages.DELIVERY_DATE_RETRY)

        session.business.delivery_kind = choice.kind
        session.business.delivery_date = choice.value
        return self._prompt_quotation(session, "")

    # =========================================================================
    # Quotation, proforma invoice and purchase order
    # =========================================================================

    def handle_quotation(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        if self._wants_edit(turn, session):
            return self._go_back(session)

        if turn.command == CANCEL_WORD:
            session.reset(Stage.IDLE)
            return TurnResult(session=session, reply=DialogueMessages.CANCELLED)

        if turn.command in ACCEPT_WORDS:
            return self._issue_proforma(session)

        if session.business.quotation is None:
            session.business.quotation = self.pricing.quote(session.business.lines)
        return TurnResult(
            session=session,
            reply=DialogueMessages.QUOTATION_RETRY,
            ui=self.message_builder.quotation_hint(session.business),
        )

    def _issue_proforma(self, session: GiftSession) -> TurnResult:
        business = session.business
        business.proforma_number = generate_reference("PI")
        session.stage = Stage.BIZ_AWAITING_PURCHASE_ORDER
        logger.info("Session %s: proforma invoice issued", session.session_id)
        return TurnResult(
            session=session,
            reply=DialogueMessages.PROFORMA_ISSUED.format(number=business.proforma_number),
            ui=self.message_builder.purchase_order_hint(self._proforma_url(session)),
        )

    @staticmethod
    def _proforma_url(session: GiftSession) -> str:
        return generate_document_link("proforma", session.business.proforma_number)

    def handle_purchase_order(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        if self._wants_edit(turn, session):
            session.business.proforma_number = None
            return self._go_back(session)

        form = turn.form
        filename = None
        if isinstance(form, PurchaseOrderForm) and is_pdf_filename(form.filename):
            filename = form.filename.strip()
        elif form is None and is_pdf_filename(turn.text):
            filename = turn.text
        elif form is None and turn.command in SKIP_WORDS:
            filename = ""

        if filename is None:
            return TurnResult(
                session=session,
                reply=DialogueMessages.PURCHASE_ORDER_RETRY,
                ui=self.message_builder.purchase_order_hint(self._proforma_url(session)),
            )

        session.business.purchase_order = filename or None
        return self._prompt_payment(session)

    # =========================================================================
    # Payment and feedback
    # =========================================================================

    def _prompt_payment(self, session: GiftSession, reply: str = "") -> TurnResult:
        session.stage = Stage.BIZ_AWAITING_PAYMENT
        return TurnResult(
            session=session,
            reply=reply or DialogueMessages.PAYMENT,
            ui=self.message_builder.payment_hint(session.business),
        )

    def handle_payment(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        form = turn.form
        business = session.business

        if isinstance(form, PaymentForm):
            method = form.method.strip().lower()
            reference = form.reference.strip()
            if method not in PAYMENT_METHODS or not reference:
                return self._prompt_payment(session, DialogueMessages.PAYMENT_RETRY)
            business.payment_method = method
            business.payment_reference = reference
        elif form is None and turn.command in PAID_WORDS:
            business.payment_method = "neft"
        else:
            return self._prompt_payment(session, DialogueMessages.PAYMENT_RETRY)

        return self._complete(session)

    def _complete(self, session: GiftSession) -> TurnResult:
        business = session.business
        quotation = business.quotation or self.pricing.quote(business.lines)
        business.order_id = generate_reference("ORD")

        receipt = BusinessReceipt(
            order_id=business.order_id,
            lines=business.lines,
            gross=quotation.gross,
            discount=quotation.discount,
            net=quotation.net,
            delivery_email=business.delivery_email or "",
            delivery_label=business.delivery_label,
            payment_method=PAYMENT_METHODS[business.payment_method],
            invoice_url=generate_document_link("invoice", business.order_id),
            report_url=generate_document_link("report", business.order_id),
        )
        session.stage = Stage.BIZ_AWAITING_FEEDBACK
        logger.info("Session %s: business order %s paid", session.session_id, business.order_id)
        return TurnResult(
            session=session,
            reply=f"{self.message_builder.business_receipt_text(receipt)}\n\n{DialogueMessages.FEEDBACK}",
            ui=self.message_builder.business_receipt_hint(receipt),
            receipt=receipt,
        )

    def handle_feedback(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        rating = parse_rating(turn.text)
        if rating is None and turn.command not in SKIP_WORDS:
            return TurnResult(
                session=session,
                reply=DialogueMessages.FEEDBACK_RETRY,
                ui=self.message_builder.rating_hint(),
            )

        session.business.rating = rating
        session.stage = Stage.COMPLETED
        return TurnResult(session=session, reply=DialogueMessages.THANKS)
