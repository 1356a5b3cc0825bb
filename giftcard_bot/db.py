"""
Database connection management.

Persistence is optional. When DATABASE_URL is unset the session store keeps
everything in memory and this module is never asked for a session factory.

Environment variables:
    - DATABASE_URL: SQLAlchemy connection URL (optional)
"""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from .models import Base


def create_session_factory(database_url: Optional[str]) -> Optional[sessionmaker]:
    """
    Build a sessionmaker bound to ``database_url`` and create missing tables.

    Returns None when no URL is configured.
    """
    if not database_url:
        return None

    engine = create_engine(
        database_url,
        pool_pre_ping=True,
        echo=False,
    )
    Base.metadata.create_all(bind=engine)

    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
