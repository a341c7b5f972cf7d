"""
Shared helpers for service-layer store access.
"""
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import ConflictError, StorageFailure

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so ``term`` matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


@contextmanager
def store_operation(db: Session, conflict_detail: Optional[str] = None) -> Iterator[Session]:
    """
    Run store calls, rolling back and translating SQLAlchemy errors.

    A uniqueness violation becomes ``ConflictError(conflict_detail)`` when a
    detail is given; every other store error becomes ``StorageFailure``.
    """
    try:
        yield db
    except IntegrityError as e:
        db.rollback()
        if conflict_detail:
            raise ConflictError(conflict_detail) from e
        raise StorageFailure() from e
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageFailure() from e
