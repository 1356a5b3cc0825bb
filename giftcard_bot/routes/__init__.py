"""
Routes Package for Gift Card Bot
================================

This package contains the API route definitions. Each module defines a
FastAPI APIRouter with related endpoints grouped together.

**Customer-Facing Routes:**
- chat.py: Gift card dialogue endpoint

Router Registration:
--------------------
Routers are registered in main.py under two prefixes:
1. /api/v1/* - Versioned API (recommended)
2. /* - Root paths for existing clients

Error Handling:
---------------
- 200: Normal replies, including re-prompts for invalid input
- 422: Body that is not valid JSON
- 429: Too many requests (rate limited)
- 500: Unexpected failure, answered with a short apology
"""

from .chat import chat_router, limiter

__all__ = [
    "chat_router",
    "limiter",
]
