"""
Database engine, session factory, and metadata shared across the application.
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Any, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from ..core.config import settings

logger = logging.getLogger(__name__)


def _build_engine_kwargs(db_url: str) -> dict[str, Any]:
    """Pool and connect arguments for the configured store."""
    if db_url.startswith("sqlite"):
        # In-memory SQLite must share one connection across the session factory
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
            "future": True,
        }

    return {
        "poolclass": QueuePool,
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        # Fail fast when the pool is exhausted instead of queueing callers
        "pool_timeout": settings.database_pool_timeout,
        "pool_pre_ping": True,
        "connect_args": {
            "options": f"-c statement_timeout={settings.database_statement_timeout_ms}",
            "connect_timeout": 5,
            "application_name": "slotbook",
        },
        "future": True,
    }


def create_db_engine(db_url: str) -> Engine:
    return create_engine(db_url, **_build_engine_kwargs(db_url))


db_url = settings.get_database_url()
engine: Engine = create_db_engine(db_url)


@event.listens_for(engine, "connect")
def receive_connect(dbapi_connection: Any, connection_record: Any) -> None:
    connection_record.info["connect_time"] = datetime.now()
    logger.debug("Database connection established")


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

Base: DeclarativeMeta = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Get database session with proper cleanup."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


__all__ = [
    "Base",
    "SessionLocal",
    "create_db_engine",
    "engine",
    "get_db",
]
