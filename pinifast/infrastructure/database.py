"""SQLite engine, session factory, declarative base and shared column types."""

import os
from datetime import datetime, timezone
from typing import Generator

import structlog
from sqlalchemy import Column, String, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.types import TypeDecorator

from pinifast.config import get_settings

settings = get_settings()
logger = structlog.get_logger(__name__)

_db_dir = os.path.dirname(os.path.abspath(settings.DATABASE_PATH))
os.makedirs(_db_dir, exist_ok=True)

# Handlers run in the threadpool, so the connection must not be pinned to its creating thread.
engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False},
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime persisted as an ISO-8601 UTC string."""

    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat(timespec="microseconds")

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        parsed = datetime.fromisoformat(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


class EntityMixin:
    """Columns shared by every persisted entity."""

    id = Column(String(32), primary_key=True)
    created_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=False)


def init_db() -> None:
    """Create all tables known to the metadata."""
    # Register models on Base.metadata
    from pinifast.domain.models import file, product, role, user  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified", path=settings.DATABASE_PATH)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency that provides a DB session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
