"""
Helpers running service work inside a unit of work.
"""
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

from sqlalchemy.engine import Connection

from ..interfaces.unit_of_work import UnitOfWorkFactory

R = TypeVar('R')


def run_in_transaction(
    uow_factory: UnitOfWorkFactory,
    work: Callable[[Connection], R]
) -> R:
    """
    Run write work in a fresh unit of work and commit it.

    Any failure after the unit is open, the commit included, rolls back
    explicitly before the connection is released and is then re-raised.
    """
    with uow_factory() as uow:
        try:
            result = work(uow.connection)
            uow.commit()
        except Exception:
            uow.rollback_silently()
            raise
        return result


def run_read_only(
    uow_factory: UnitOfWorkFactory,
    work: Callable[[Connection], R]
) -> R:
    """
    Run read work in a fresh unit of work without committing.

    The transaction is always rolled back afterwards so the unit closes
    with nothing pending.
    """
    with uow_factory() as uow:
        try:
            return work(uow.connection)
        finally:
            uow.rollback_silently()


@contextmanager
def identities_restored_on_failure(*entities: Any) -> Iterator[None]:
    """
    Put back ``id`` and ``deleted`` on the given entities if the block fails.

    Stores assign generated IDs before the commit; a rolled back insert must
    not leave the caller holding an identity that was never persisted.

    Usage:
        with identities_restored_on_failure(pet, pet.microchip):
            run_in_transaction(uow_factory, work)
    """
    saved = [(entity, entity.id, entity.deleted) for entity in entities if entity is not None]
    try:
        yield
    except Exception:
        for entity, entity_id, deleted in saved:
            entity.id = entity_id
            entity.deleted = deleted
        raise
