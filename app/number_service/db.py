"""Storage of the number service, independent of the main database."""

from functools import lru_cache
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

from app.number_service.config import get_number_settings

NumberBase = declarative_base()


@lru_cache(maxsize=1)
def get_number_engine():
    settings = get_number_settings()
    return create_engine(
        settings.number_store_url,
        echo=settings.debug,
        future=True,
        poolclass=NullPool,
    )


def init_number_store() -> None:
    from app.number_service import models as _models  # noqa: F401

    NumberBase.metadata.create_all(get_number_engine())


def get_number_db() -> Generator[Session, None, None]:
    SessionLocal = sessionmaker(bind=get_number_engine(), autoflush=False, expire_on_commit=False)
    session: Session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
