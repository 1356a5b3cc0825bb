"""
Tests for business order pricing.
"""
import pytest

from giftcard_bot.tasks.models import OrderLine
from giftcard_bot.tasks.pricing import PricingEngine


def lines(*pairs):
    return [OrderLine(denomination=d, count=c) for d, c in pairs]


class TestCheckLines:
    """Test order-line limits."""

    def test_valid_lines(self):
        assert PricingEngine().check_lines(lines((1000, 10), (500, 4))) is None

    def test_empty_order_is_rejected(self):
        assert "at least one" in PricingEngine().check_lines([])

    def test_too_many_lines(self):
        pricing = PricingEngine(max_lines=2)
        error = pricing.check_lines(lines((100, 1), (200, 1), (300, 1)))
        assert "up to 2" in error

    def test_denomination_bounds(self):
        pricing = PricingEngine()
        assert pricing.check_lines(lines((10, 1))) is None
        assert pricing.check_lines(lines((10000, 1))) is None
        assert pricing.check_lines(lines((9, 1))) == "Item 1: minimum denomination is ₹10."
        assert pricing.check_lines(lines((500, 1), (10001, 1))) == "Item 2: maximum denomination is ₹10,000."

    def test_count_must_be_positive(self):
        assert PricingEngine().check_lines(lines((500, 0))) == "Item 1: count must be at least 1."

    def test_order_limit(self):
        pricing = PricingEngine()
        assert pricing.check_lines(lines((10000, 30))) is None
        error = pricing.check_lines(lines((10000, 30), (10, 1)))
        assert "₹3,00,000" in error
        assert "180001 234567" in error


class TestQuote:
    """Test discount and net calculation."""

    def test_default_discount(self):
        quotation = PricingEngine().quote(lines((1000, 10), (500, 4)))
        assert quotation.gross == 12000
        assert quotation.discount_percent == 2
        assert quotation.discount == 240
        assert quotation.net == 11760

    def test_one_percent_variant(self):
        quotation = PricingEngine(discount_percent=1).quote(lines((1000, 10)))
        assert quotation.discount == 100
        assert quotation.net == 9900

    @pytest.mark.parametrize("gross,expected", [
        (25, 1),    # 0.50 rounds up
        (24, 0),    # 0.48 rounds down
        (1275, 26), # 25.50 rounds up
    ])
    def test_discount_rounds_half_up(self, gross, expected):
        assert PricingEngine().discount_for(gross) == expected
