"""
Chat Schemas for Gift Card Bot
==============================

This module defines Pydantic models for the chat endpoint, which carries one
user turn of the gift card dialogue and returns the bot's reply.

Endpoint Coverage:
------------------
- POST /chat: Send a message (and optional form) and receive a reply

Key Concepts:
-------------
1. **Sessions**: Each conversation is identified by a sessionId (UUID). The
   client omits it on the first turn and echoes the returned one afterwards.

2. **Forms**: Multi-field business stages send a ``form`` object tagged with
   ``kind`` instead of free text.

3. **UI Hints**: The reply may carry a ``ui`` object telling the client which
   widget to render next (options, template picker, form, downloads...).

Validation:
-----------
Requests are parsed leniently. A field of the wrong type is replaced by its
empty default instead of failing the request, so a malformed turn still gets
a re-prompt rather than an error. Messages longer than MAX_MESSAGE_LENGTH are
truncated.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import MAX_MESSAGE_LENGTH
from ..tasks.schemas import UiHint


class ChatRequest(BaseModel):
    """
    One inbound chat turn.

    Attributes:
        session_id: Existing session id, or None to start a new session
        message: User text; empty when only a form is submitted
        form: Raw form payload, validated later against the stage's form kinds
    """
    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(default=None, alias="sessionId")
    message: str = ""
    form: Optional[Dict[str, Any]] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ChatRequest":
        """Build a request from an arbitrary JSON body, defaulting bad fields."""
        if not isinstance(payload, dict):
            return cls()

        session_id = payload.get("sessionId")
        if not isinstance(session_id, str) or not session_id.strip():
            session_id = None
        else:
            session_id = session_id.strip()

        message = payload.get("message")
        if not isinstance(message, str):
            message = ""

        form = payload.get("form")
        if not isinstance(form, dict):
            form = None

        return cls(
            session_id=session_id,
            message=message[:MAX_MESSAGE_LENGTH],
            form=form,
        )


class ChatResponse(BaseModel):
    """
    Reply to a chat turn.

    Serialized in camelCase; ``ui`` is left out when there is no hint.

    Attributes:
        reply: Bot reply text
        session_id: Session id the client should send on its next turn
        ui: Optional rendering hint for the client
    """
    model_config = ConfigDict(populate_by_name=True)

    reply: str
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    ui: Optional[UiHint] = None
