from functools import lru_cache
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from src.api.models.base import Base
from src.api.settings import get_settings


def _engine_options(url: str) -> Dict[str, Any]:
    """
    Engine keyword arguments for a database URL.

    Notes:
    - SQLite (local runs and tests) shares one connection across threads, since
      store calls run in the thread pool. An in-memory database only lives as
      long as that connection.
    """
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_pre_ping": True}


def build_engine(url: str) -> Engine:
    """Create an engine configured for typical web usage."""
    return create_engine(url, **_engine_options(url))


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Return the process-wide engine for DATABASE_URL."""
    return build_engine(get_settings().database_url)


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autocommit=False, autoflush=False)


def init_db(engine: Engine | None = None) -> None:
    """Create missing tables. Existing tables are left untouched."""
    Base.metadata.create_all(bind=engine or get_engine())


# PUBLIC_INTERFACE
def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a SQLAlchemy session and ensures closure."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()

