import pytest
from fastapi.testclient import TestClient

import giftcard_bot.main as main_mod
from giftcard_bot.main import app
from giftcard_bot.routes.chat import limiter
from giftcard_bot.services.session import SessionStore
from giftcard_bot.tasks.models import GiftSession
from giftcard_bot.tasks.schemas import parse_form_payload
from giftcard_bot.tasks.state_machine import DialogueEngine


@pytest.fixture
def store():
    """Fresh in-memory session store with default limits."""
    return SessionStore(ttl_seconds=3600, max_size=1000)


@pytest.fixture
def engine():
    """Dialogue engine with the default catalogue and pricing."""
    return DialogueEngine()


@pytest.fixture
def session():
    """A brand new session in the idle stage."""
    return GiftSession(session_id="test-session")


@pytest.fixture
def converse(engine):
    """Play a sequence of turns and return the last TurnResult.

    Each turn is either a text message or a dict, which is sent as a
    structured form payload.
    """
    def _converse(session, *turns):
        result = None
        for turn in turns:
            if isinstance(turn, dict):
                result = engine.advance(session, "", parse_form_payload(turn))
            else:
                result = engine.advance(session, turn)
            session = result.session
        return result

    return _converse


@pytest.fixture
def client(store, engine):
    """Shared FastAPI TestClient with a fresh session store.

    Rate limiting is disabled so tests can send many turns quickly.
    """
    original_store = main_mod.app.state.session_store
    original_engine = main_mod.app.state.dialogue_engine
    original_enabled = limiter.enabled

    app.state.session_store = store
    app.state.dialogue_engine = engine
    limiter.enabled = False

    with TestClient(app) as test_client:
        yield test_client

    app.state.session_store = original_store
    app.state.dialogue_engine = original_engine
    limiter.enabled = original_enabled
