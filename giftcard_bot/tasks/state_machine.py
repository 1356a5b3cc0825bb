"""
State Machine for the Gift Card Dialogue.

This module provides a deterministic state machine for gift card purchases.
Each stage has its own focused handler that interprets input only in the
context of that stage, so the engine can never jump to an unrelated stage.

Key insight: the engine never mutates the session it is given. It works on a
deep copy and returns the advanced copy; the caller decides when to persist it.
"""

import logging
from typing import Callable, Dict, Optional

from .business_handler import BusinessFlowHandler
from .message_builder import MessageBuilder
from .models import GiftSession
from .parsers import GREETING_PATTERN
from .personal_handler import PersonalFlowHandler
from .pricing import PricingEngine
from .schemas import FormPayload, Stage
from .schemas.result import TurnInput, TurnResult

logger = logging.getLogger(__name__)

StageHandler = Callable[[TurnInput, GiftSession], TurnResult]


class DialogueEngine:
    """
    Gift card dialogue engine.

    Usage:
        engine = DialogueEngine()
        result = engine.advance(session, "hi")
        store.save(result.session)
    """

    def __init__(
        self,
        message_builder: Optional[MessageBuilder] = None,
        pricing: Optional[PricingEngine] = None,
        max_occasion_length: Optional[int] = None,
        max_message_length: Optional[int] = None,
    ):
        self.message_builder = message_builder or MessageBuilder()
        self.pricing = pricing or PricingEngine()

        self.business_handler = BusinessFlowHandler(self.message_builder, self.pricing)
        self.personal_handler = PersonalFlowHandler(
            self.message_builder,
            start_business=self.business_handler.start,
            max_occasion_length=max_occasion_length,
            max_message_length=max_message_length,
        )

        personal = self.personal_handler
        business = self.business_handler
        self._handlers: Dict[Stage, StageHandler] = {
            Stage.IDLE: personal.handle_idle,
            Stage.AWAITING_BUYER_TYPE: personal.handle_buyer_type,
            Stage.AWAITING_OCCASION: personal.handle_occasion,
            Stage.AWAITING_CUSTOM_OCCASION: personal.handle_custom_occasion,
            Stage.AWAITING_TEMPLATE: personal.handle_template,
            Stage.AWAITING_AMOUNT: personal.handle_amount,
            Stage.AWAITING_RECIPIENT: personal.handle_recipient,
            Stage.AWAITING_MESSAGE: personal.handle_message,
            Stage.AWAITING_CONFIRMATION: personal.handle_confirmation,
            Stage.BIZ_AWAITING_LEAD: business.handle_lead,
            Stage.BIZ_AWAITING_VERIFICATION: business.handle_verification,
            Stage.BIZ_AWAITING_ORDER_LINES: business.handle_order_lines,
            Stage.BIZ_AWAITING_DELIVERY_EMAIL: business.handle_delivery_email,
            Stage.BIZ_AWAITING_DELIVERY_DATE: business.handle_delivery_date,
            Stage.BIZ_AWAITING_QUOTATION: business.handle_quotation,
            Stage.BIZ_AWAITING_PURCHASE_ORDER: business.handle_purchase_order,
            Stage.BIZ_AWAITING_PAYMENT: business.handle_payment,
            Stage.BIZ_AWAITING_FEEDBACK: business.handle_feedback,
            Stage.COMPLETED: personal.handle_completed,
        }

        missing = [stage.value for stage in Stage if stage not in self._handlers]
        if missing:
            raise RuntimeError(f"No dialogue handler for stages: {', '.join(missing)}")

    @staticmethod
    def is_greeting(message: str) -> bool:
        return bool(GREETING_PATTERN.match(message or ""))

    def advance(
        self,
        session: GiftSession,
        message: Optional[str],
        form: Optional[FormPayload] = None,
    ) -> TurnResult:
        """
        Process one user message and return the reply plus the next session.

        A greeting restarts the dialogue from any stage. Anything else is
        dispatched to the handler for the current stage.

        Args:
            session: Current session. Not modified.
            message: Raw user text. None is treated as empty.
            form: Structured form payload for multi-field business stages.

        Returns:
            TurnResult carrying the advanced session, reply text and UI hint.
        """
        working = session.model_copy(deep=True)
        turn = TurnInput(text=(message or "").strip(), form=form)
        previous = working.stage

        if turn.form is None and self.is_greeting(turn.text):
            result = self.personal_handler.welcome(working)
        else:
            result = self._handlers[working.stage](turn, working)

        result.session.touch()
        if result.session.stage != previous:
            logger.info(
                "Session %s: %s -> %s",
                result.session.session_id, previous.value, result.session.stage.value,
            )
        else:
            logger.debug("Session %s: stayed in %s", result.session.session_id, previous.value)
        return result
