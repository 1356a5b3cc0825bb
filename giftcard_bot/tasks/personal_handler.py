"""
Personal Purchase Handler for the Dialogue Engine.

This module handles the self/friends-and-family path: buyer type, occasion,
template, amount, recipient, personal message and the final confirmation
that issues a mock receipt. It also owns the idle and completed stages,
which both paths share.

Each handler validates one input. Valid input is stored and the session
advances; invalid input leaves the stage alone and repeats the prompt.
"""

import logging
from typing import Callable, Optional

from .. import config
from .dialogue_messages import DialogueMessages
from .formatting import generate_gift_link
from .message_builder import MessageBuilder
from .models import GiftSession, Receipt
from .parsers import (
    BUSINESS_BUYER_WORDS,
    CANCEL_WORD,
    CONFIRM_WORD,
    PERSONAL_BUYER_WORDS,
    SKIP_WORDS,
    match_occasion,
    parse_amount,
    parse_template_choice,
    validate_email_address,
    validate_phone_number,
)
from .schemas import Stage
from .schemas.result import TurnInput, TurnResult

logger = logging.getLogger(__name__)


class PersonalFlowHandler:
    """
    Handles the personal gift card flow.

    Hands over to the business flow through ``start_business`` when the
    buyer picks Business.
    """

    def __init__(
        self,
        message_builder: MessageBuilder,
        start_business: Callable[[GiftSession], TurnResult],
        max_occasion_length: Optional[int] = None,
        max_message_length: Optional[int] = None,
    ):
        """
        Initialize the personal flow handler.

        Args:
            message_builder: Builds summaries, receipts and UI hints.
            start_business: Callback that moves a session into the business flow.
            max_occasion_length: Longest accepted custom occasion.
            max_message_length: Longest accepted personal gift message.
        """
        self.message_builder = message_builder
        self._start_business = start_business
        self.max_occasion_length = (
            config.MAX_OCCASION_LENGTH if max_occasion_length is None else max_occasion_length
        )
        self.max_message_length = (
            config.MAX_GIFT_MESSAGE_LENGTH if max_message_length is None else max_message_length
        )

    # =========================================================================
    # Shared stages
    # =========================================================================

    def welcome(self, session: GiftSession) -> TurnResult:
        """Clear everything and ask for the buyer type."""
        session.reset(Stage.AWAITING_BUYER_TYPE)
        return TurnResult(
            session=session,
            reply=DialogueMessages.WELCOME,
            ui=self.message_builder.buyer_type_hint(),
        )

    def handle_idle(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        return TurnResult(session=session, reply=DialogueMessages.SAY_HI)

    def handle_completed(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        """Any input after a finished order starts over."""
        session.reset(Stage.IDLE)
        return TurnResult(session=session, reply=DialogueMessages.READY_FOR_NEW_ORDER)

    def handle_buyer_type(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        if turn.command in PERSONAL_BUYER_WORDS:
            session.draft.buyer_type = "personal"
            return self.ask_occasion(session)

        if turn.command in BUSINESS_BUYER_WORDS:
            session.draft.buyer_type = "business"
            return self._start_business(session)

        return TurnResult(
            session=session,
            reply=DialogueMessages.BUYER_TYPE_RETRY,
            ui=self.message_builder.buyer_type_hint(),
        )

    # =========================================================================
    # Occasion and template
    # =========================================================================

    def ask_occasion(self, session: GiftSession, reply: str = DialogueMessages.OCCASION) -> TurnResult:
        session.stage = Stage.AWAITING_OCCASION
        return TurnResult(session=session, reply=reply, ui=self.message_builder.occasion_hint())

    def handle_occasion(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        choice = match_occasion(turn.text, self.max_occasion_length)
        if choice is None:
            return self.ask_occasion(session)

        if choice.kind == "other":
            session.stage = Stage.AWAITING_CUSTOM_OCCASION
            return TurnResult(session=session, reply=DialogueMessages.OCCASION_CUSTOM)

        session.draft.occasion = choice.value
        return self.ask_template(session)

    def handle_custom_occasion(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        text = turn.text
        if not text or len(text) > self.max_occasion_length:
            return TurnResult(session=session, reply=DialogueMessages.OCCASION_CUSTOM)

        session.draft.occasion = text
        return self.ask_template(session)

    def ask_template(self, session: GiftSession, reply: str = DialogueMessages.TEMPLATE) -> TurnResult:
        session.stage = Stage.AWAITING_TEMPLATE
        return TurnResult(session=session, reply=reply, ui=self.message_builder.template_hint())

    def handle_template(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        template_id = parse_template_choice(turn.text, self.message_builder.template_ids)
        if template_id is None:
            return self.ask_template(session, DialogueMessages.TEMPLATE_RETRY)

        session.draft.template_id = template_id
        return self.ask_amount(session)

    # =========================================================================
    # Amount, recipient and message
    # =========================================================================

    def ask_amount(self, session: GiftSession, reply: str = DialogueMessages.AMOUNT) -> TurnResult:
        session.stage = Stage.AWAITING_AMOUNT
        return TurnResult(session=session, reply=reply, ui=self.message_builder.amount_hint())

    def handle_amount(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        amount = parse_amount(turn.text)
        if amount is None:
            return self.ask_amount(session, DialogueMessages.AMOUNT_RETRY)

        session.draft.amount = amount
        session.stage = Stage.AWAITING_RECIPIENT
        return TurnResult(session=session, reply=DialogueMessages.RECIPIENT)

    def handle_recipient(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        text = turn.text
        if "@" in text:
            email, _ = validate_email_address(text)
            if email:
                session.draft.recipient_type = "email"
                session.draft.recipient = email
                return self._ask_message(session)
        else:
            phone, _ = validate_phone_number(text)
            if phone:
                session.draft.recipient_type = "phone"
                session.draft.recipient = phone
                return self._ask_message(session)

        return TurnResult(session=session, reply=DialogueMessages.RECIPIENT_RETRY)

    def _ask_message(self, session: GiftSession) -> TurnResult:
        session.stage = Stage.AWAITING_MESSAGE
        return TurnResult(session=session, reply=DialogueMessages.GIFT_MESSAGE)

    def handle_message(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        text = turn.text
        if len(text) > self.max_message_length:
            return TurnResult(
                session=session,
                reply=f"Please keep your message under {self.max_message_length} characters.",
            )

        if turn.command in SKIP_WORDS:
            text = ""
        session.draft.personal_message = text or None
        session.stage = Stage.AWAITING_CONFIRMATION
        return TurnResult(
            session=session,
            reply=self.message_builder.confirmation_summary(session.draft),
            ui=self.message_builder.confirm_hint(session.draft),
        )

    # =========================================================================
    # Confirmation
    # =========================================================================

    def handle_confirmation(self, turn: TurnInput, session: GiftSession) -> TurnResult:
        if turn.command == CONFIRM_WORD:
            return self._complete(session)

        if turn.command == CANCEL_WORD:
            session.reset(Stage.IDLE)
            return TurnResult(session=session, reply=DialogueMessages.CANCELLED)

        return TurnResult(
            session=session,
            reply=DialogueMessages.CONFIRM_RETRY,
            ui=self.message_builder.confirm_hint(session.draft),
        )

    def _complete(self, session: GiftSession) -> TurnResult:
        draft = session.draft
        receipt = Receipt(
            amount=draft.amount,
            occasion=draft.occasion,
            template_id=draft.template_id,
            template_label=self.message_builder.template_label(draft.template_id),
            recipient=draft.recipient,
            personal_message=draft.personal_message,
            gift_link=generate_gift_link(),
        )
        session.stage = Stage.COMPLETED
        logger.info("Session %s: personal order completed", session.session_id)
        return TurnResult(
            session=session,
            reply=self.message_builder.receipt_text(receipt),
            ui=self.message_builder.receipt_hint(receipt),
            receipt=receipt,
        )
