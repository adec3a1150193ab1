"""
Translation of SQLAlchemy errors into registry exceptions.
"""
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ....domain.exceptions import PersistenceException


@contextmanager
def persistence_errors(entity_type: str, operation: str) -> Iterator[None]:
    """
    Re-raise storage failures as PersistenceException.

    Usage:
        with persistence_errors('Microchip', 'create'):
            conn.execute(...)
    """
    try:
        yield
    except IntegrityError as e:
        raise PersistenceException(
            entity_type,
            operation,
            'constraint violation',
            original_error=str(e.orig)
        ) from e
    except SQLAlchemyError as e:
        raise PersistenceException(
            entity_type,
            operation,
            'storage error',
            original_error=str(e)
        ) from e
