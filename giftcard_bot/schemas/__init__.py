"""
Schemas Package for Gift Card Bot
=================================

This package contains the Pydantic models used for API request parsing and
response serialization. Dialogue-level models (stages, forms, UI hints) live
in ``giftcard_bot.tasks.schemas``.

Schema Organization:
--------------------
- **chat.py**: Chat request and response schemas
"""

from .chat import ChatRequest, ChatResponse

__all__ = ["ChatRequest", "ChatResponse"]
