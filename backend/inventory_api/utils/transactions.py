import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_api.errors import DuplicateKey, StoreError

log = logging.getLogger(__name__)


def is_unique_violation(exc: IntegrityError) -> bool:
    # sqlite: "UNIQUE constraint failed", postgres: SQLSTATE 23505,
    # mysql: "Duplicate entry"
    if getattr(exc.orig, "pgcode", None) == "23505":
        return True
    text = str(exc.orig).lower()
    return "unique" in text or "duplicate" in text


@contextmanager
def committing(session: Session, duplicate_message: Optional[str] = None) -> Iterator:
    """
    Run a unit of work and commit it. Any failure rolls the session back.

    A unique index violation at flush/commit time is re-raised as
    DuplicateKey, so the database stays the final arbiter even when an
    application-level pre-check passed for two concurrent writers. Other
    integrity violations and database errors become StoreError.
    Usage:
        with committing(db, duplicate_message="SKU taken"):
            ... DB work ...
    """
    try:
        yield
        session.commit()
    except IntegrityError as e:
        session.rollback()
        if not is_unique_violation(e):
            log.exception("Integrity error during commit")
            raise StoreError() from e
        log.info("Unique constraint violation: %s", e.orig)
        raise DuplicateKey(duplicate_message) from e
    except SQLAlchemyError as e:
        session.rollback()
        log.exception("Database error during commit")
        raise StoreError() from e
    except Exception:
        session.rollback()
        raise
