"""
Tests for the session store: cache behavior and database persistence.
"""
import threading
import uuid
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import giftcard_bot.services.session as session_mod
from giftcard_bot.models import Base, GiftSessionRecord
from giftcard_bot.services.session import SessionStore
from giftcard_bot.tasks.models import GiftSession, OrderLine
from giftcard_bot.tasks.schemas import Stage


class FakeClock:
    """Deterministic replacement for time.time()."""

    def __init__(self, start=1_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr(session_mod.time, "time", fake)
    # Keep the probabilistic sweep out of the way
    monkeypatch.setattr(session_mod.random, "randint", lambda a, b: b)
    return fake


@pytest.fixture
def session_factory():
    """In-memory SQLite database shared by all connections."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


class TestGetOrCreate:
    """Test session lookup and creation."""

    def test_missing_id_mints_new_session(self, store):
        session_id, session = store.get_or_create(None)
        assert uuid.UUID(session_id)
        assert session.session_id == session_id
        assert session.stage == Stage.IDLE

    def test_known_id_returns_existing_session(self, store):
        session_id, _ = store.get_or_create()
        stored = GiftSession(session_id=session_id, stage=Stage.AWAITING_AMOUNT)
        store.save(stored)

        same_id, session = store.get_or_create(session_id)
        assert same_id == session_id
        assert session.stage == Stage.AWAITING_AMOUNT

    def test_unknown_id_gets_fresh_id(self, store):
        session_id, session = store.get_or_create("no-such-session")
        assert session_id != "no-such-session"
        assert session.stage == Stage.IDLE

    def test_load_unknown_returns_none(self, store):
        assert store.load("no-such-session") is None


class TestCacheLimits:
    """Test TTL expiry and LRU eviction."""

    def test_idle_session_expires(self, clock):
        store = SessionStore(ttl_seconds=60, max_size=100)
        session_id, _ = store.get_or_create()

        clock.advance(30)
        assert store.load(session_id) is not None

        clock.advance(61)
        assert store.load(session_id) is None

    def test_access_refreshes_ttl(self, clock):
        store = SessionStore(ttl_seconds=60, max_size=100)
        session_id, _ = store.get_or_create()

        for _ in range(3):
            clock.advance(45)
            assert store.load(session_id) is not None

    def test_cleanup_expired_counts_removed(self, clock):
        store = SessionStore(ttl_seconds=60, max_size=100)
        store.get_or_create()
        store.get_or_create()
        clock.advance(61)
        store.get_or_create()

        assert store.cleanup_expired() == 2
        assert store.stats()["size"] == 1

    def test_oldest_sessions_evicted_when_full(self, clock):
        store = SessionStore(ttl_seconds=3600, max_size=10)
        ids = []
        for _ in range(10):
            session_id, _ = store.get_or_create()
            ids.append(session_id)
            clock.advance(1)

        # Touch the first session so it is no longer the oldest
        assert store.load(ids[0]) is not None
        clock.advance(1)

        store.get_or_create()

        assert store.stats()["size"] == 10
        assert store.load(ids[0]) is not None
        assert store.load(ids[1]) is None

    def test_clear_and_stats(self, store):
        assert store.stats()["size"] == 0
        assert store.stats()["oldest_access"] is None

        store.get_or_create()
        store.get_or_create()
        stats = store.stats()
        assert stats["size"] == 2
        assert stats["persistent"] is False
        assert stats["oldest_access"] <= stats["newest_access"]

        assert store.clear() == 2
        assert store.stats()["size"] == 0


class TestSessionLock:
    """Test per-session locking."""

    def test_same_session_is_serialized(self, store):
        acquired = threading.Event()

        def try_lock():
            with store.session_lock("a"):
                acquired.set()

        with store.session_lock("a"):
            worker = threading.Thread(target=try_lock)
            worker.start()
            assert not acquired.wait(0.2)

        worker.join(timeout=2)
        assert acquired.is_set()

    def test_different_sessions_do_not_block(self, store):
        acquired = threading.Event()

        def try_lock():
            with store.session_lock("b"):
                acquired.set()

        with store.session_lock("a"):
            worker = threading.Thread(target=try_lock)
            worker.start()
            assert acquired.wait(2)
        worker.join(timeout=2)

    def test_lock_survives_cache_clear_while_in_use(self, store):
        session_id, _ = store.get_or_create()
        first_in = threading.Event()
        release_first = threading.Event()
        second_in = threading.Event()

        def first_turn():
            with store.session_lock(session_id):
                first_in.set()
                release_first.wait(2)

        def second_turn():
            with store.session_lock(session_id):
                second_in.set()

        first = threading.Thread(target=first_turn)
        first.start()
        assert first_in.wait(2)

        store.clear()
        second = threading.Thread(target=second_turn)
        second.start()
        assert not second_in.wait(0.2)

        release_first.set()
        first.join(timeout=2)
        second.join(timeout=2)
        assert second_in.is_set()

    def test_lock_survives_expiry_while_waited_on(self, clock):
        store = SessionStore(ttl_seconds=60, max_size=100)
        session_id, _ = store.get_or_create()
        waiting = threading.Event()
        acquired = threading.Event()

        def waiting_turn():
            waiting.set()
            with store.session_lock(session_id):
                acquired.set()

        with store.session_lock(session_id):
            worker = threading.Thread(target=waiting_turn)
            worker.start()
            assert waiting.wait(2)
            clock.advance(61)
            assert store.cleanup_expired() == 1
            assert not acquired.wait(0.2)

        worker.join(timeout=2)
        assert acquired.is_set()

    def test_locks_are_released_after_use(self, store):
        with store.session_lock("a"):
            pass
        assert store._session_locks == {}
        assert store._lock_users == {}


class TestSessionPersistence:
    """Test write-through to the database."""

    def test_save_creates_record(self, session_factory):
        store = SessionStore(session_factory=session_factory)
        session_id, _ = store.get_or_create()

        db = session_factory()
        try:
            record = db.query(GiftSessionRecord).filter_by(session_id=session_id).first()
            assert record is not None
            assert record.stage == "idle"
        finally:
            db.close()

    def test_session_survives_restart(self, session_factory):
        store = SessionStore(session_factory=session_factory)
        session_id, session = store.get_or_create()
        session = session.model_copy(deep=True)
        session.stage = Stage.BIZ_AWAITING_QUOTATION
        session.draft.buyer_type = "business"
        session.business.lines = [OrderLine(denomination=1000, count=5)]
        session.business.delivery_kind = "date"
        session.business.delivery_date = date(2025, 12, 24)
        store.save(session)

        # A new store has an empty cache and must read from the database
        restarted = SessionStore(session_factory=session_factory)
        same_id, restored = restarted.get_or_create(session_id)

        assert same_id == session_id
        assert restored.stage == Stage.BIZ_AWAITING_QUOTATION
        assert restored.draft.buyer_type == "business"
        assert restored.business.lines[0].subtotal == 5000
        assert restored.business.delivery_date == date(2025, 12, 24)
        assert restored.created_at == session.created_at
        assert restored.updated_at == session.updated_at

    def test_save_updates_existing_record(self, session_factory):
        store = SessionStore(session_factory=session_factory)
        session_id, session = store.get_or_create()
        session = session.model_copy(deep=True)
        session.stage = Stage.AWAITING_OCCASION
        store.save(session)

        db = session_factory()
        try:
            records = db.query(GiftSessionRecord).filter_by(session_id=session_id).all()
            assert len(records) == 1
            assert records[0].stage == "awaiting_occasion"
        finally:
            db.close()

    def test_failed_database_write_leaves_cache_unchanged(self, session_factory):
        store = SessionStore(session_factory=session_factory)
        session_id, session = store.get_or_create()
        moved = session.model_copy(deep=True)
        moved.stage = Stage.AWAITING_OCCASION

        def unavailable_database():
            raise OperationalError("UPDATE gift_sessions", {}, Exception("database is locked"))

        store._session_factory = unavailable_database
        with pytest.raises(OperationalError):
            store.save(moved)

        assert store.load(session_id).stage == Stage.IDLE

    def test_clear_keeps_database_copy(self, session_factory):
        store = SessionStore(session_factory=session_factory)
        session_id, _ = store.get_or_create()
        store.clear()
        assert store.load(session_id) is not None
        assert store.stats()["persistent"] is True
