"""
Store error taxonomy shared by services, maintenance jobs and the HTTP layer.

StoreConnectionError: store unreachable or disconnect failed.
QueryError: malformed query or table absent.
WriteError: delete/update/insert rejected by the store (e.g. a unique index).
NotFoundError: a referenced row does not exist (services only; maps to 404).
"""
import logging
from contextlib import contextmanager

from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    NoSuchTableError,
    OperationalError,
    ProgrammingError,
)

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base for every failure raised from the persistence layer."""

    marker = "STORE"


class StoreConnectionError(StoreError):
    marker = "CONNECTION"


class QueryError(StoreError):
    marker = "QUERY"


class WriteError(StoreError):
    marker = "WRITE"


class NotFoundError(LookupError):
    """Referenced row missing. Not a StoreError: the store answered correctly."""


# SQLite reports a missing table as OperationalError("no such table: ...")
_MISSING_TABLE_HINTS = ("no such table", "does not exist", "undefined table")


def classify_store_error(exc: Exception) -> StoreError:
    """Map a SQLAlchemy exception onto the store error taxonomy."""
    if isinstance(exc, StoreError):
        return exc
    msg = str(exc)
    if isinstance(exc, IntegrityError):
        return WriteError(msg)
    if isinstance(exc, (ProgrammingError, NoSuchTableError)):
        return QueryError(msg)
    if isinstance(exc, OperationalError):
        if any(h in msg.lower() for h in _MISSING_TABLE_HINTS):
            return QueryError(msg)
        return StoreConnectionError(msg)
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return StoreConnectionError(msg)
    return QueryError(msg)


@contextmanager
def translate_store_errors(db=None):
    """
    Re-raise SQLAlchemy errors as StoreError subclasses.
    When a session is given, roll it back first so the caller sees a clean session.
    """
    try:
        yield
    except (DBAPIError, NoSuchTableError) as e:
        if db is not None:
            db.rollback()
        err = classify_store_error(e)
        logger.debug("Store error (%s): %s", err.marker, err)
        raise err from e
