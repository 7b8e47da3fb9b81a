from typing import Optional

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings

Base = declarative_base()

# Bound to an engine by init_db()
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def make_engine(url: str) -> Engine:
    """Build an engine for ``url``.

    SQLite connections are shared across threads, and an in-memory SQLite
    database is pinned to a single connection so every session sees it.
    """
    kwargs = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def init_db(url: Optional[str] = None) -> Engine:
    # models must be imported so their tables are registered on Base
    from . import models  # noqa: F401

    engine = make_engine(url or get_settings().database_url)
    SessionLocal.configure(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database initialized at {engine.url.render_as_string()}")
    return engine


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
