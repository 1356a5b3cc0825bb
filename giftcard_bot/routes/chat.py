"""
Chat Routes for Gift Card Bot
=============================

This module contains the customer-facing chat endpoint that drives the gift
card dialogue.

Endpoints:
----------
- POST /chat: Send a message (and optional form) and receive a reply

Conversation Flow:
------------------
1. Client sends its first message without a sessionId
2. A new session is created and its id is returned with the reply
3. Client echoes the sessionId on every later turn
4. Each turn advances the session by exactly one dialogue step

Session Handling:
-----------------
The session's own lock is held from load to save, so concurrent turns for
the same session are applied one after the other. The dialogue engine works
on a copy; the session is only saved when the turn completes.

Rate Limiting:
--------------
The endpoint is rate limited per client address (default: 30/minute).

Error Handling:
---------------
Validation problems are answered with a re-prompt (HTTP 200). Any unexpected
failure is logged with its traceback and answered with HTTP 500 and a short
apology, leaving the stored session untouched.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..config import RATE_LIMIT_ENABLED, get_rate_limit_chat
from ..schemas.chat import ChatRequest, ChatResponse
from ..services.session import SessionStore
from ..tasks.dialogue_messages import DialogueMessages
from ..tasks.models import GiftSession
from ..tasks.schemas import parse_form_payload
from ..tasks.state_machine import DialogueEngine


logger = logging.getLogger(__name__)

# Router definition
chat_router = APIRouter(prefix="/chat", tags=["Chat"])


# =============================================================================
# Rate Limiting Setup
# =============================================================================

limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)


# =============================================================================
# Helper Functions
# =============================================================================

def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_dialogue_engine(request: Request) -> DialogueEngine:
    return request.app.state.dialogue_engine


def _error_response() -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"reply": DialogueMessages.INTERNAL_ERROR, "sessionId": None},
    )


# =============================================================================
# Chat Endpoint
# =============================================================================

@chat_router.post("", response_model=ChatResponse, response_model_exclude_none=True)
@limiter.limit(get_rate_limit_chat)
def chat(
    request: Request,
    payload: Any = Body(default=None),
) -> Any:
    """Send one user turn to the gift card dialogue and receive the reply."""
    req = ChatRequest.from_payload(payload)
    form = parse_form_payload(req.form) if req.form is not None else None

    try:
        store = get_session_store(request)
        engine = get_dialogue_engine(request)

        session_id, _ = store.get_or_create(req.session_id)
        with store.session_lock(session_id):
            session = store.load(session_id)
            if session is None:
                # Expired between creation and lock; start over under the same id
                session = GiftSession(session_id=session_id)
            result = engine.advance(session, req.message, form)
            store.save(result.session)

    except Exception:
        logger.exception(
            "Chat turn failed (request %s)",
            getattr(request.state, "request_id", "-"),
        )
        return _error_response()

    response = ChatResponse(reply=result.reply, session_id=session_id, ui=result.ui)
    return JSONResponse(content=response.model_dump(mode="json", by_alias=True, exclude_none=True))
