"""
db/session.py

Engine and request-scoped sessions, built lazily on first use.

Only PostgreSQL is supported: the people upsert relies on
``INSERT ... ON CONFLICT`` and onboarding progress on JSONB.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from dataclasses import dataclass

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from db.config import DatabaseConfigError, resolve_database_url


@dataclass(frozen=True)
class EngineSettings:
    """
    Connection pool tuning read from DB_POOL_* and SQL_ECHO.
    """

    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_recycle_seconds: int = 1800


def _env_int(name: str, default: int) -> int:
    raw_value = os.getenv(name, "").strip()
    if not raw_value:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def load_engine_settings() -> EngineSettings:
    defaults = EngineSettings()
    return EngineSettings(
        echo=os.getenv("SQL_ECHO", "").strip().lower() in {"1", "true", "yes", "on"},
        pool_size=max(1, _env_int("DB_POOL_SIZE", defaults.pool_size)),
        max_overflow=max(0, _env_int("DB_MAX_OVERFLOW", defaults.max_overflow)),
        pool_recycle_seconds=_env_int("DB_POOL_RECYCLE", defaults.pool_recycle_seconds),
    )


def create_db_engine(
    database_url: str | None = None,
    settings: EngineSettings | None = None,
) -> Engine:
    url = database_url or resolve_database_url()
    if not url.startswith("postgresql"):
        raise DatabaseConfigError("Only PostgreSQL URLs are supported.")

    settings = settings or load_engine_settings()
    return create_engine(
        url,
        echo=settings.echo,
        pool_pre_ping=True,
        pool_recycle=settings.pool_recycle_seconds,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
    )


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """Return the shared engine, creating it on first call."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def SessionLocal() -> Session:
    """Open a session on the shared engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False)
    return _session_factory()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding one session per request.

    Work left uncommitted when the request raises is rolled back.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
