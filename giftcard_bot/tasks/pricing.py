"""
Pricing Engine for Business Orders.

This module validates business order lines and turns them into a quotation:
gross value, flat percentage discount and net payable amount.
"""

import logging
from typing import List, Optional

from .. import config
from .formatting import format_inr
from .models import OrderLine, Quotation

logger = logging.getLogger(__name__)


class PricingEngine:
    """
    Validates order lines and prices business quotations.

    Limits default to the values in config.py; tests pass their own.
    """

    def __init__(
        self,
        discount_percent: Optional[int] = None,
        order_limit: Optional[int] = None,
        min_denomination: Optional[int] = None,
        max_denomination: Optional[int] = None,
        max_lines: Optional[int] = None,
    ):
        self.discount_percent = (
            config.BUSINESS_DISCOUNT_PERCENT if discount_percent is None else discount_percent
        )
        self.order_limit = config.BUSINESS_ORDER_LIMIT if order_limit is None else order_limit
        self.min_denomination = (
            config.MIN_DENOMINATION if min_denomination is None else min_denomination
        )
        self.max_denomination = (
            config.MAX_DENOMINATION if max_denomination is None else max_denomination
        )
        self.max_lines = config.MAX_ORDER_LINES if max_lines is None else max_lines

    def check_lines(self, lines: List[OrderLine]) -> Optional[str]:
        """
        Check order lines against the business limits.

        Returns:
            None when the lines are acceptable, otherwise the message to show.
        """
        if not lines:
            return "Please add at least one gift card denomination and count."
        if len(lines) > self.max_lines:
            return f"You can add up to {self.max_lines} denominations per order."

        for index, line in enumerate(lines, start=1):
            if line.denomination < self.min_denomination:
                return (
                    f"Item {index}: minimum denomination is "
                    f"{format_inr(self.min_denomination)}."
                )
            if line.denomination > self.max_denomination:
                return (
                    f"Item {index}: maximum denomination is "
                    f"{format_inr(self.max_denomination)}."
                )
            if line.count < 1:
                return f"Item {index}: count must be at least 1."

        total = sum(line.subtotal for line in lines)
        if total > self.order_limit:
            return (
                f"Orders above {format_inr(self.order_limit)} require special handling. "
                f"Please contact customer care: {config.CUSTOMER_CARE_NUMBER}"
            )
        return None

    def discount_for(self, gross: int) -> int:
        """Flat percentage of gross, rounded half-up to a whole rupee."""
        return (gross * self.discount_percent + 50) // 100

    def quote(self, lines: List[OrderLine]) -> Quotation:
        gross = sum(line.subtotal for line in lines)
        discount = self.discount_for(gross)
        quotation = Quotation(
            gross=gross,
            discount_percent=self.discount_percent,
            discount=discount,
            net=gross - discount,
        )
        logger.debug("Quoted gross=%d discount=%d net=%d", gross, discount, quotation.net)
        return quotation
