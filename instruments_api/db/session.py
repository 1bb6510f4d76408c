"""SQLAlchemy engine and session helpers.

Nothing here is created at import time: the app factory builds an engine from
the configured URL and hands the resulting session factory to the store.
"""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# ``Base`` is the parent class for every SQLAlchemy model defined in models/.
Base = declarative_base()


def _is_memory_sqlite(db_url: str) -> bool:
    return db_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in db_url


def build_engine(db_url: str) -> Engine:
    kwargs: dict = {}
    if db_url.startswith("sqlite"):
        # FastAPI runs sync handlers in worker threads, so the SQLite
        # connection must be shareable between them.
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(db_url):
            # One connection for everyone, otherwise each session would get
            # its own empty in-memory database.
            kwargs["poolclass"] = StaticPool
    return create_engine(db_url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    """Return a session factory bound to ``engine`` with tables created."""

    # Importing the models registers them with the metadata.
    from ..models import instrument as _instrument  # noqa: F401

    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
