"""SQLAlchemy 2.x engine and session (SQLite and Postgres)."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from logging import getLogger

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from account_opening.models import Base

logger = getLogger(__name__)

# Module-level engine/session_factory; set via init_db()
_engine = None
_SessionLocal: sessionmaker[Session] | None = None


def init_db(database_url: str, echo: bool = False) -> None:
    """Create engine and session factory. Call once at startup.
    SQLite: create_all. Postgres: engine only (schema via Alembic).
    """
    global _engine, _SessionLocal
    is_sqlite = database_url.startswith("sqlite")
    connect_args = {"check_same_thread": False} if is_sqlite else {}
    engine_kwargs: dict = {}
    if ":memory:" in database_url:
        # one shared connection, otherwise every pooled connection sees an empty database
        engine_kwargs["poolclass"] = StaticPool
    _engine = create_engine(
        database_url, echo=echo, connect_args=connect_args, **engine_kwargs
    )
    _SessionLocal = sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=_engine
    )
    if is_sqlite:
        Base.metadata.create_all(bind=_engine)
    logger.info("Database initialised (dialect=%s)", _engine.dialect.name)


def get_engine():
    """Return the global engine. Raises if init_db() was not called."""
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    if _SessionLocal is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _SessionLocal


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Provide a transactional scope for a block."""
    factory = get_session_factory()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
