"""Engine, session factory and declarative base.

One engine per process; each request gets its own session through the
``get_db`` dependency, which commits nothing on its own: services decide
when to commit.
"""

from __future__ import annotations

import logging
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from xeoos.core.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def build_engine(url: str, *, echo: bool = False, **kwargs) -> Engine:
    """Create an engine; SQLite connections may be shared across threads."""

    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, echo=echo, **kwargs)


engine = build_engine(settings.db.url, echo=settings.db.echo)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding a session that is always closed."""

    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create database tables if they do not exist."""
    from xeoos.db import models  # noqa: F401 (register models on the metadata)

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info("db.initialized", extra={"dialect": target.dialect.name})
