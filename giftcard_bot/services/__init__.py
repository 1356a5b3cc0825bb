"""
Services Package for Gift Card Bot
==================================

This package contains service modules that encapsulate infrastructure
concerns shared by the routes.

Available Services:
-------------------
- **session**: Session store with TTL/LRU cache and optional database
  persistence

Usage:
------
    from giftcard_bot.services.session import SessionStore
"""

from .session import SessionStore

__all__ = ["SessionStore"]
