"""
SQLAlchemy engine and session. Supports PostgreSQL and SQLite (local runs and tests).
The app uses the pooled SessionLocal; maintenance jobs build their own NullPool engine
so each job owns its connection for its lifetime only.
"""
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool

from edubot.config import settings
from edubot.errors import StoreConnectionError, classify_store_error

logger = logging.getLogger(__name__)

Base = declarative_base()


def _connect_args(url: str) -> dict:
    """Driver connect args: thread check off for SQLite; connect timeout for every driver."""
    timeout = settings.db_connect_timeout_seconds
    if url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": timeout}
    return {"connect_timeout": timeout}


def make_engine(url: str | None = None, *, pooled: bool = True):
    """Create an engine for url (default: settings.database_url). pooled=False → NullPool (jobs)."""
    url = url or settings.database_url
    kwargs = {"connect_args": _connect_args(url), "echo": False}
    if not pooled:
        kwargs["poolclass"] = NullPool
    elif not url.startswith("sqlite"):
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


engine = make_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """Create all tables (SQLite / dev). Production schema is managed by Alembic."""
    # Import all models so they register with Base before create_all
    from edubot import models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    """Dependency: yield a DB session, close after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_session(session_factory=None):
    """
    Acquire one session for a maintenance job, verify the store answers, release on every exit path.
    Without session_factory a dedicated NullPool engine is created and disposed afterwards.
    Raises StoreConnectionError when the store is unreachable.
    """
    own_engine = None
    if session_factory is None:
        own_engine = make_engine(pooled=False)
        session_factory = sessionmaker(autocommit=False, autoflush=False, bind=own_engine)
    db = session_factory()
    failed = False
    try:
        try:
            db.execute(text("SELECT 1"))
        except Exception as e:
            err = classify_store_error(e)
            raise StoreConnectionError(str(err)) from e
        logger.info("Store connected: %s", db.get_bind().url.render_as_string(hide_password=True))
        yield db
    except BaseException:
        failed = True
        raise
    finally:
        try:
            db.close()
            if own_engine is not None:
                own_engine.dispose()
        except Exception as e:
            # never mask the error the job is already failing with
            if failed:
                logger.error("Store disconnect failed: %s", e)
            else:
                raise StoreConnectionError(f"disconnect failed: {e}") from e
