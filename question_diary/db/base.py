"""
Database engine, session factory and store-boundary error translation.

Every round-trip that can fail because the store is slow or gone runs
inside `store_errors(...)`, which turns driver/pool failures into
`StoreTimeoutError` / `StoreUnavailableError`. Constraint violations are
NOT translated here; callers that rely on a constraint inspect the
`IntegrityError` themselves (see `is_unique_violation`).
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy import exc as sa_exc
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from question_diary.core.config import settings
from question_diary.core.errors import StoreTimeoutError, StoreUnavailableError

logger = logging.getLogger(__name__)

# SQLSTATE codes
_PG_UNIQUE_VIOLATION = "23505"
_PG_QUERY_CANCELED = "57014"


class Base(DeclarativeBase):
    pass


def _engine_kwargs(url: str) -> dict:
    timeout = settings.STORE_TIMEOUT_SECONDS
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False, "timeout": timeout}}
    return {
        "pool_pre_ping": True,
        "pool_timeout": timeout,
        "connect_args": {
            "connect_timeout": max(1, int(timeout)),
            "options": f"-c statement_timeout={int(timeout * 1000)}",
        },
    }


engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ---------------------------------------------------------------------------
# Error translation
# ---------------------------------------------------------------------------

def _sqlstate(exc: sa_exc.DBAPIError) -> Optional[str]:
    orig = exc.orig
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def is_unique_violation(exc: sa_exc.IntegrityError) -> bool:
    if _sqlstate(exc) == _PG_UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(exc.orig)


def _is_timeout(exc: sa_exc.DBAPIError) -> bool:
    if _sqlstate(exc) == _PG_QUERY_CANCELED:
        return True
    text = str(exc.orig).lower()
    return "timeout" in text or "timed out" in text


def _rollback(db: Optional[Session]) -> None:
    if db is None:
        return
    try:
        db.rollback()
    except sa_exc.SQLAlchemyError:
        logger.warning("Rollback failed after store error", exc_info=True)


@contextmanager
def store_errors(operation: str, db: Optional[Session] = None) -> Iterator[None]:
    """Translate pool/driver failures raised inside the block.

    No retry happens here. Reads may be retried by the caller; creates must not.
    """
    try:
        yield
    except sa_exc.TimeoutError as exc:
        _rollback(db)
        logger.error("Store timeout during %s: %s", operation, exc)
        raise StoreTimeoutError(operation=operation) from exc
    except (sa_exc.OperationalError, sa_exc.InterfaceError) as exc:
        _rollback(db)
        if _is_timeout(exc):
            logger.error("Store timeout during %s: %s", operation, exc.orig)
            raise StoreTimeoutError(operation=operation) from exc
        logger.error("Store unavailable during %s: %s", operation, exc.orig)
        raise StoreUnavailableError(operation=operation) from exc
