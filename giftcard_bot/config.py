"""
Configuration Module for Gift Card Bot
======================================

This module centralizes all configuration settings, environment variables, and
constants used throughout the Gift Card Bot application. Values are parsed
once at import time; tests override them by patching the module attributes.

Configuration Categories:
-------------------------
- **Rate Limiting**: Controls API request throttling on the chat endpoint.

- **Session Management**: TTL and cache size settings for the in-memory
  session store, plus an optional database URL for write-through persistence.

- **Input Validation**: Maximum lengths for free-text input.

- **Mock Integrations**: Domains used when fabricating gift links and
  downloadable documents.

- **Business Orders**: Discount percentage, order ceiling, denomination
  bounds and customer care contact for bulk purchases.

- **CORS Settings**: Cross-Origin Resource Sharing configuration for frontend
  integration. Defaults allow all origins for development.

Environment Variables:
----------------------
- RATE_LIMIT_CHAT: Chat endpoint rate limit (default: "30 per minute")
- RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: "true")
- SESSION_TTL_SECONDS: Idle session lifetime (default: 3600)
- SESSION_MAX_CACHE_SIZE: Max sessions held in memory (default: 1000)
- DATABASE_URL: Optional SQLAlchemy URL for session persistence (default: unset)
- MAX_MESSAGE_LENGTH: Max user message length (default: 2000)
- MAX_OCCASION_LENGTH: Max custom occasion length (default: 60)
- MAX_GIFT_MESSAGE_LENGTH: Max personal gift message length (default: 300)
- MOCK_GIFT_DOMAIN: Prefix for generated gift links (default: "https://mock.amazon")
- MOCK_DOCUMENT_DOMAIN: Prefix for generated invoice/report links
- BUSINESS_DISCOUNT_PERCENT: Flat discount on business orders (default: 2)
- BUSINESS_ORDER_LIMIT: Max gross value of a business order (default: 300000)
- CUSTOMER_CARE_NUMBER: Number shown for orders above the limit
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")

Usage:
------
    from giftcard_bot.config import (
        RATE_LIMIT_CHAT,
        SESSION_TTL_SECONDS,
        MAX_MESSAGE_LENGTH,
    )
"""

import os
from typing import List, Optional


# =============================================================================
# Rate Limiting Configuration
# =============================================================================
# Uses slowapi with in-memory storage (use Redis for multi-worker prod).

# Rate limit format: "X per Y" where Y is second, minute, hour, or day
RATE_LIMIT_CHAT: str = os.getenv("RATE_LIMIT_CHAT", "30 per minute")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"


def get_rate_limit_chat() -> str:
    """
    Return the current chat rate limit.

    This function allows dynamic override in tests without modifying
    the module-level constant.
    """
    return RATE_LIMIT_CHAT


# =============================================================================
# Session Management Configuration
# =============================================================================
# Sessions live in a bounded in-memory store. When DATABASE_URL is set they
# are also written through to the database and restored on a cache miss.

# Sessions not touched for this long are dropped (seconds)
SESSION_TTL_SECONDS: int = int(os.getenv("SESSION_TTL_SECONDS", "3600"))  # 1 hour

# When exceeded, the oldest 10% of sessions (by last access) are evicted
SESSION_MAX_CACHE_SIZE: int = int(os.getenv("SESSION_MAX_CACHE_SIZE", "1000"))

DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL") or None


# =============================================================================
# Input Validation Configuration
# =============================================================================

MAX_MESSAGE_LENGTH: int = int(os.getenv("MAX_MESSAGE_LENGTH", "2000"))
MAX_OCCASION_LENGTH: int = int(os.getenv("MAX_OCCASION_LENGTH", "60"))
MAX_GIFT_MESSAGE_LENGTH: int = int(os.getenv("MAX_GIFT_MESSAGE_LENGTH", "300"))


# =============================================================================
# Mock Integration Configuration
# =============================================================================
# Nothing is delivered or invoiced for real; these prefixes only shape the
# fabricated links returned to the client.

MOCK_GIFT_DOMAIN: str = os.getenv("MOCK_GIFT_DOMAIN", "https://mock.amazon").rstrip("/")
MOCK_DOCUMENT_DOMAIN: str = os.getenv(
    "MOCK_DOCUMENT_DOMAIN", "https://mock.amazon/documents"
).rstrip("/")

CURRENCY_CODE = "INR"
CURRENCY_SYMBOL = "₹"


# =============================================================================
# Business Order Configuration
# =============================================================================

# Flat percentage taken off the gross value of a business quotation
BUSINESS_DISCOUNT_PERCENT: int = int(os.getenv("BUSINESS_DISCOUNT_PERCENT", "2"))

# Orders above this gross value are routed to customer care
BUSINESS_ORDER_LIMIT: int = int(os.getenv("BUSINESS_ORDER_LIMIT", "300000"))

MIN_DENOMINATION: int = 10
MAX_DENOMINATION: int = 10000
MAX_ORDER_LINES: int = 5

CUSTOMER_CARE_NUMBER: str = os.getenv("CUSTOMER_CARE_NUMBER", "180001 234567")


# =============================================================================
# CORS Configuration
# =============================================================================
# Format: comma-separated list of origins, e.g., "https://gifts.example.com"
# Default "*" allows all origins (suitable for development only)
_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]
