"""Database configuration with lazy initialization.

The engine is only created when first needed, not at module import time, so
tests and tooling can point ``DATABASE_URL`` somewhere else before any
connection is made.
"""

import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Generator

from fastapi import HTTPException, status
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

from app.common.config import get_settings

logger = logging.getLogger(__name__)

# Base class for all ORM models - this is safe to initialize at import time
Base = declarative_base()


@lru_cache(maxsize=1)
def get_sync_engine():
    """
    Lazily create the engine on first database access.

    Uses NullPool; every request gets a fresh connection.
    """
    settings = get_settings()
    return create_engine(
        settings.database_url,
        echo=settings.debug,
        future=True,
        poolclass=NullPool,
    )


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Context manager for database sessions."""
    SessionLocal = sessionmaker(
        bind=get_sync_engine(),
        autoflush=False,
        autocommit=False,
        expire_on_commit=False
    )
    session: Session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency that provides a database session."""
    with session_scope() as session:
        yield session


def init_db() -> None:
    """Create all tables that don't exist yet (local development and tests)."""
    # Import models so they register with Base.metadata
    from app.auth import models as _auth_models  # noqa: F401
    from app.admin import models as _admin_models  # noqa: F401
    from app.sites import models as _sites_models  # noqa: F401
    from app.submissions import models as _submissions_models  # noqa: F401
    from app.site_settings import models as _settings_models  # noqa: F401

    Base.metadata.create_all(get_sync_engine())


@contextmanager
def store_operation(session: Session, detail: str) -> Generator[None, None, None]:
    """
    Turn a failed read or write into a single 500 response.

    The session is rolled back so the request leaves no half-applied change
    behind; anything committed earlier in the request stays committed.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("%s: %s", detail, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        ) from exc
