"""
Session Management Service for Gift Card Bot
============================================

This module manages gift card session state with a two-tier storage strategy:
1. **In-Memory Cache**: Fast access for active sessions (always on)
2. **Database Persistence**: Optional durable storage for session recovery

Architecture Overview:
----------------------
The session store uses a write-through cache pattern:
- Reads check the cache first, then fall back to the database if configured
- Writes go to the database first, if configured, then to the cache
- Cache entries have TTL and LRU eviction to bound memory usage

Without a database an evicted or expired session is gone; the next message
for that id starts a fresh session.

Cache Eviction Strategy:
------------------------
1. **TTL-based**: Sessions not accessed within SESSION_TTL_SECONDS are
   expired. Swept probabilistically (~1% of calls) and checked on access.

2. **LRU-based**: When the cache reaches SESSION_MAX_CACHE_SIZE, the oldest
   10% of sessions (by last access time) are evicted to make room.

Thread Safety:
--------------
The cache map is protected by a threading.Lock. Each session also has its own
lock (see ``session_lock``) which the chat route holds from load to save, so
two requests for the same session are applied one after the other. This
matters because FastAPI runs sync routes in a threadpool.

Configuration:
--------------
See config.py for these settings:
- SESSION_TTL_SECONDS: How long idle sessions are kept (default: 1 hour)
- SESSION_MAX_CACHE_SIZE: Maximum cached sessions (default: 1000)
- DATABASE_URL: Enables database write-through when set

Usage:
------
    from giftcard_bot.services.session import SessionStore

    store = SessionStore()
    session_id, _ = store.get_or_create(request_session_id)
    with store.session_lock(session_id):
        session = store.load(session_id)
        result = engine.advance(session, message)
        store.save(result.session)

Production Considerations:
--------------------------
For multi-worker deployments (e.g., Gunicorn with multiple workers) the
in-memory cache and per-session locks are per process. Route all traffic
for a session to one worker or move to a shared store.
"""

import logging
import random
import threading
import time
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional, Tuple

from sqlalchemy.orm import sessionmaker

from ..config import SESSION_TTL_SECONDS, SESSION_MAX_CACHE_SIZE
from ..models import GiftSessionRecord
from ..tasks.models import GiftSession


logger = logging.getLogger(__name__)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes for timezone-aware columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SessionStore:
    """
    Keyed store of gift card sessions.

    Cache structure:
        {session_id: {"data": GiftSession, "last_access": timestamp}}
    """

    def __init__(
        self,
        ttl_seconds: Optional[int] = None,
        max_size: Optional[int] = None,
        session_factory: Optional[sessionmaker] = None,
    ):
        """
        Initialize the session store.

        Args:
            ttl_seconds: Idle time after which a cached session expires.
            max_size: Maximum number of cached sessions.
            session_factory: SQLAlchemy sessionmaker for write-through
                persistence. None keeps sessions in memory only.
        """
        self.ttl_seconds = SESSION_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self.max_size = SESSION_MAX_CACHE_SIZE if max_size is None else max_size
        self._session_factory = session_factory

        self._cache: Dict[str, Dict[str, Any]] = {}
        self._cache_lock = threading.Lock()
        self._session_locks: Dict[str, threading.Lock] = {}
        # Threads holding or waiting on each session lock
        self._lock_users: Dict[str, int] = {}

    # =========================================================================
    # Cache Maintenance
    # =========================================================================

    def _is_expired(self, entry: Dict[str, Any], now: float) -> bool:
        return now - entry.get("last_access", 0) > self.ttl_seconds

    def _drop_locked(self, session_id: str) -> None:
        """Remove a cache entry. Caller holds _cache_lock."""
        del self._cache[session_id]

    def cleanup_expired(self) -> int:
        """
        Remove expired sessions from the cache.

        Returns:
            int: Number of sessions removed from cache
        """
        now = time.time()
        with self._cache_lock:
            expired = [sid for sid, entry in self._cache.items() if self._is_expired(entry, now)]
            for sid in expired:
                self._drop_locked(sid)

        if expired:
            logger.debug("Cleaned up %d expired sessions from cache", len(expired))

        return len(expired)

    def _evict_oldest_locked(self) -> None:
        """
        Evict the oldest 10% of sessions when the cache is full.

        Caller holds _cache_lock.
        """
        if len(self._cache) < self.max_size:
            return

        count = max(1, self.max_size // 10)
        sorted_sessions = sorted(
            self._cache.items(),
            key=lambda x: x[1].get("last_access", 0)
        )
        for sid, _ in sorted_sessions[:count]:
            self._drop_locked(sid)

        logger.debug("Evicted %d oldest sessions from cache", count)

    def _maybe_cleanup(self) -> None:
        # Runs roughly once per 100 calls
        if random.randint(1, 100) == 1:
            self.cleanup_expired()

    def _put(self, session: GiftSession) -> None:
        with self._cache_lock:
            if session.session_id not in self._cache:
                self._evict_oldest_locked()
            self._cache[session.session_id] = {
                "data": session,
                "last_access": time.time(),
            }

    # =========================================================================
    # Public API
    # =========================================================================

    def get_or_create(self, session_id: Optional[str] = None) -> Tuple[str, GiftSession]:
        """
        Return the session for ``session_id``, creating one if needed.

        A missing or unknown id gets a freshly minted UUID and a new session
        in the idle stage. The new session is stored before returning.
        """
        if session_id:
            existing = self.load(session_id)
            if existing is not None:
                return session_id, existing

        new_id = str(uuid.uuid4())
        session = GiftSession(session_id=new_id)
        self.save(session)
        logger.info("Created session %s", new_id)
        return new_id, session

    def load(self, session_id: str) -> Optional[GiftSession]:
        """
        Get a session from cache or database.

        Returns:
            The stored session, or None if it is unknown or expired.
        """
        self._maybe_cleanup()

        now = time.time()
        with self._cache_lock:
            entry = self._cache.get(session_id)
            if entry is not None:
                if not self._is_expired(entry, now):
                    entry["last_access"] = now
                    return entry["data"]
                self._drop_locked(session_id)

        session = self._load_from_db(session_id)
        if session is not None:
            self._put(session)
        return session

    def save(self, session: GiftSession) -> None:
        """
        Store a session in the database, if configured, then the cache.

        A failed database write raises before the cache is touched, so the
        cached copy never runs ahead of the stored one.
        """
        self._save_to_db(session)
        self._put(session)

    @contextmanager
    def session_lock(self, session_id: str) -> Iterator[None]:
        """
        Hold the per-session lock for the duration of one turn.

        A lock lives while any thread holds or waits on it, independent of
        the cache entry. Dropping a cached session never replaces the lock
        of a session that is in use.
        """
        with self._cache_lock:
            lock = self._session_locks.setdefault(session_id, threading.Lock())
            self._lock_users[session_id] = self._lock_users.get(session_id, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._cache_lock:
                self._lock_users[session_id] -= 1
                if not self._lock_users[session_id]:
                    del self._lock_users[session_id]
                    del self._session_locks[session_id]

    def clear(self) -> int:
        """
        Clear all sessions from the in-memory cache.

        Does NOT affect database storage.

        Returns:
            int: Number of sessions that were in cache before clearing
        """
        with self._cache_lock:
            count = len(self._cache)
            self._cache.clear()
        logger.info("Cleared %d sessions from cache", count)
        return count

    def stats(self) -> Dict[str, Any]:
        """
        Get statistics about the session cache.

        Returns:
            Dict with size, max_size, ttl_seconds, persistent, and the oldest
            and newest access timestamps (None when empty).
        """
        with self._cache_lock:
            access_times = [entry["last_access"] for entry in self._cache.values()]
            return {
                "size": len(self._cache),
                "max_size": self.max_size,
                "ttl_seconds": self.ttl_seconds,
                "persistent": self._session_factory is not None,
                "oldest_access": min(access_times) if access_times else None,
                "newest_access": max(access_times) if access_times else None,
            }

    # =========================================================================
    # Database Persistence
    # =========================================================================

    def _load_from_db(self, session_id: str) -> Optional[GiftSession]:
        if self._session_factory is None:
            return None

        db = self._session_factory()
        try:
            record = db.query(GiftSessionRecord).filter(
                GiftSessionRecord.session_id == session_id
            ).first()
            if record is None:
                return None
            return GiftSession.model_validate({
                "session_id": record.session_id,
                "stage": record.stage,
                "draft": record.draft or {},
                "business": record.business or {},
                "created_at": _as_utc(record.created_at),
                "updated_at": _as_utc(record.updated_at),
            })
        finally:
            db.close()

    def _save_to_db(self, session: GiftSession) -> None:
        if self._session_factory is None:
            return

        db = self._session_factory()
        try:
            record = db.query(GiftSessionRecord).filter(
                GiftSessionRecord.session_id == session.session_id
            ).first()
            draft = session.draft.model_dump(mode="json")
            business = session.business.model_dump(mode="json")

            if record:
                # Replace JSON columns wholesale so SQLAlchemy sees the change
                record.stage = session.stage.value
                record.draft = draft
                record.business = business
                record.updated_at = session.updated_at
            else:
                record = GiftSessionRecord(
                    session_id=session.session_id,
                    stage=session.stage.value,
                    draft=draft,
                    business=business,
                    created_at=session.created_at,
                    updated_at=session.updated_at,
                )
                db.add(record)

            db.commit()
        finally:
            db.close()
