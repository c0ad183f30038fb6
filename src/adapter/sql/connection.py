"""SQLAlchemy engine and session factory management."""

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from adapter.sql.models import Base

logger = logging.getLogger(__name__)

_engine_cache: dict[str, Engine] = {}


def reset_engine():
    global _engine_cache
    for engine in _engine_cache.values():
        engine.dispose()
    _engine_cache = {}


def get_engine(database_url: str) -> Engine:
    """Get a cached engine for database_url, creating it on first use.

    In-memory SQLite gets a single shared connection so every session
    sees the same database.
    """
    engine = _engine_cache.get(database_url)
    if engine is not None:
        return engine

    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(
            database_url,
            pool_size=10,
            max_overflow=20,
            pool_recycle=3600,
            pool_pre_ping=True,  # Drop connections the server closed while idle
        )

    _engine_cache[database_url] = engine
    logger.info("[SQL] Engine created", extra={"dialect": engine.dialect.name})
    return engine


def get_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


def ensure_schema(engine: Engine) -> bool:
    """Create missing tables. Called at app startup."""
    try:
        Base.metadata.create_all(engine)
        return True
    except SQLAlchemyError as e:
        logger.error("[SQL] Failed to create schema", extra={"error": str(e)[:200]})
        return False


def ping(engine: Engine) -> bool:
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.warning("[SQL] Ping failed", extra={"error": str(e)[:200]})
        return False
