"""
Tests for the chat HTTP endpoint.
"""
import logging

from giftcard_bot.tasks.dialogue_messages import DialogueMessages
from giftcard_bot.tasks.schemas import Stage


def start_session(client):
    resp = client.post("/chat", json={"message": "hi"})
    assert resp.status_code == 200
    return resp.json()["sessionId"]


def test_first_message_creates_session(client):
    resp = client.post("/chat", json={"message": "hi"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["reply"] == DialogueMessages.WELCOME
    assert data["sessionId"]
    assert data["ui"]["kind"] == "buyerTypeOptions"
    assert {"id": "personal", "label": "Personal / Self"} in data["ui"]["options"]


def test_session_id_is_echoed_and_state_kept(client, store):
    session_id = start_session(client)

    resp = client.post("/chat", json={"sessionId": session_id, "message": "1"})
    data = resp.json()
    assert data["sessionId"] == session_id
    assert data["ui"]["kind"] == "occasionOptions"
    assert store.load(session_id).stage == Stage.AWAITING_OCCASION


def test_ui_is_omitted_when_absent(client):
    session_id = start_session(client)
    for message in ["1", "birthday", "template:t1"]:
        client.post("/chat", json={"sessionId": session_id, "message": message})

    resp = client.post("/chat", json={"sessionId": session_id, "message": "1000"})
    data = resp.json()
    assert data["reply"] == DialogueMessages.RECIPIENT
    assert "ui" not in data


def test_template_picker_uses_camel_case(client):
    session_id = start_session(client)
    client.post("/chat", json={"sessionId": session_id, "message": "1"})
    resp = client.post("/chat", json={"sessionId": session_id, "message": "birthday"})
    template = resp.json()["ui"]["templates"][0]
    assert template == {"id": "t1", "label": "Happy Birthday", "imageUrl": "/happy-bday.png"}


def test_personal_purchase_over_http(client):
    session_id = start_session(client)
    for message in ["1", "diwali", "template:t2", "₹2,000", "priya@gmail.com", "Happy Diwali!"]:
        resp = client.post("/chat", json={"sessionId": session_id, "message": message})
        assert resp.status_code == 200

    assert resp.json()["ui"]["kind"] == "confirm"
    assert resp.json()["ui"]["details"]["amount"] == 2000

    resp = client.post("/chat", json={"sessionId": session_id, "message": "confirm"})
    data = resp.json()
    assert "https://mock.amazon/gift/" in data["reply"]
    assert data["ui"]["kind"] == "receipt"
    assert data["ui"]["details"]["giftLink"].startswith("https://mock.amazon/gift/")


def test_form_payload_over_http(client, store):
    session_id = start_session(client)
    resp = client.post("/chat", json={"sessionId": session_id, "message": "2"})
    assert resp.json()["ui"]["form"]["kind"] == "lead"
    assert resp.json()["ui"]["form"]["submitLabel"] == "Submit"

    resp = client.post("/chat", json={
        "sessionId": session_id,
        "form": {
            "kind": "lead",
            "name": "Priya Sharma",
            "company": "Acme Traders",
            "email": "priya@acmetraders.in",
            "phone": "9876543210",
        },
    })
    assert resp.status_code == 200
    assert resp.json()["ui"]["form"]["kind"] == "verification"
    assert store.load(session_id).stage == Stage.BIZ_AWAITING_VERIFICATION


def test_malformed_form_is_treated_as_no_form(client):
    session_id = start_session(client)
    client.post("/chat", json={"sessionId": session_id, "message": "2"})

    resp = client.post("/chat", json={"sessionId": session_id, "form": {"kind": "lead", "name": ["x"]}})
    assert resp.status_code == 200
    assert resp.json()["reply"] == DialogueMessages.LEAD_RETRY


def test_non_string_fields_fall_back_to_defaults(client):
    resp = client.post("/chat", json={"sessionId": 42, "message": {"text": "hi"}})
    assert resp.status_code == 200
    data = resp.json()
    assert data["reply"] == DialogueMessages.SAY_HI
    assert data["sessionId"]


def test_non_object_body_falls_back_to_defaults(client):
    resp = client.post("/chat", json=["hi"])
    assert resp.status_code == 200
    assert resp.json()["reply"] == DialogueMessages.SAY_HI


def test_empty_body(client):
    resp = client.post("/chat")
    assert resp.status_code == 200
    assert resp.json()["reply"] == DialogueMessages.SAY_HI


def test_unknown_session_id_gets_new_session(client):
    resp = client.post("/chat", json={"sessionId": "stale-id", "message": "hi"})
    data = resp.json()
    assert data["sessionId"] != "stale-id"
    assert data["reply"] == DialogueMessages.WELCOME


def test_internal_error_returns_apology(client, engine, store, monkeypatch, caplog):
    session_id = start_session(client)

    def broken_advance(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(engine, "advance", broken_advance)

    with caplog.at_level(logging.ERROR):
        resp = client.post("/chat", json={"sessionId": session_id, "message": "1"})

    assert resp.status_code == 500
    assert resp.json() == {"reply": "Something went wrong. Please try again.", "sessionId": None}
    assert any("Chat turn failed" in r.message for r in caplog.records)
    # The failed turn did not touch the stored session
    assert store.load(session_id).stage == Stage.AWAITING_BUYER_TYPE


def test_failed_save_keeps_previous_stage(client, store, monkeypatch):
    session_id = start_session(client)

    def broken_save_to_db(session):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(store, "_save_to_db", broken_save_to_db)

    resp = client.post("/chat", json={"sessionId": session_id, "message": "1"})
    assert resp.status_code == 500
    assert resp.json()["sessionId"] is None
    assert store.load(session_id).stage == Stage.AWAITING_BUYER_TYPE


def test_very_large_amount_over_http(client):
    session_id = start_session(client)
    for message in ["1", "birthday", "template:t1", "9" * 30, "priya@gmail.com", "skip"]:
        resp = client.post("/chat", json={"sessionId": session_id, "message": message})
        assert resp.status_code == 200

    assert resp.json()["ui"]["kind"] == "confirm"
    resp = client.post("/chat", json={"sessionId": session_id, "message": "confirm"})
    assert resp.status_code == 200
    assert resp.json()["ui"]["kind"] == "receipt"


def test_other_sessions_unaffected_by_failure(client, engine, monkeypatch):
    healthy = start_session(client)
    original_advance = engine.advance

    def flaky_advance(session, message, form=None):
        if message == "explode":
            raise RuntimeError("boom")
        return original_advance(session, message, form)

    monkeypatch.setattr(engine, "advance", flaky_advance)

    other = start_session(client)
    assert client.post("/chat", json={"sessionId": other, "message": "explode"}).status_code == 500

    resp = client.post("/chat", json={"sessionId": healthy, "message": "1"})
    assert resp.status_code == 200
    assert resp.json()["ui"]["kind"] == "occasionOptions"


def test_request_id_in_response_header(client):
    """Test that X-Request-ID header is returned in responses."""
    resp = client.post("/chat", json={"message": "hi"})
    assert "X-Request-ID" in resp.headers
    request_id = resp.headers["X-Request-ID"]
    assert len(request_id) == 36
    assert request_id.count("-") == 4


def test_request_id_can_be_provided_by_client(client):
    """Test that client-provided X-Request-ID is used."""
    custom_id = "test-request-id-12345"
    resp = client.post("/chat", json={"message": "hi"}, headers={"X-Request-ID": custom_id})
    assert resp.headers["X-Request-ID"] == custom_id


def test_api_v1_endpoints_work(client):
    """Test that /api/v1/ prefixed endpoints work."""
    resp = client.post("/api/v1/chat", json={"message": "hi"})
    assert resp.status_code == 200
    assert resp.json()["reply"] == DialogueMessages.WELCOME


def test_health_endpoint_not_versioned(client):
    """Test that /health remains at root level (not versioned)."""
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_long_message_is_truncated(client, store, monkeypatch):
    import giftcard_bot.schemas.chat as chat_schemas

    session_id = start_session(client)
    for message in ["1", "birthday", "template:t1", "1000", "priya@gmail.com"]:
        client.post("/chat", json={"sessionId": session_id, "message": message})

    monkeypatch.setattr(chat_schemas, "MAX_MESSAGE_LENGTH", 10)

    client.post("/chat", json={"sessionId": session_id, "message": "Happy birthday to you!"})
    assert store.load(session_id).draft.personal_message == "Happy birt"
