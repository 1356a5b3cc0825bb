from sqlalchemy import (
    Column,
    Integer,
    String,
    JSON,
    DateTime,
    func,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class GiftSessionRecord(Base):
    """
    Persists gift card sessions so they survive server restarts.

    Only used when DATABASE_URL is set; otherwise sessions live in memory.
    """
    __tablename__ = "gift_sessions"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String, unique=True, nullable=False, index=True)  # UUID string
    stage = Column(String, nullable=False, default="idle")

    # Collected order data as JSON
    draft = Column(JSON, nullable=False, default=dict)
    business = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
