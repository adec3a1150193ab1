"""
Unit of Work interface for managing transactions.

A unit of work wraps one connection in one transaction. Services thread its
connection through every repository call of a business operation and then
commit, or roll back explicitly on failure.
"""
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Callable, Optional, Type

from sqlalchemy.engine import Connection


class UnitOfWork(ABC):
    """
    Abstract Unit of Work.

    Use as context manager:

    with uow_factory() as uow:
        try:
            pets.create(pet, uow.connection)
            uow.commit()
        except Exception:
            uow.rollback_silently()
            raise

    Leaving the block always releases the connection but never rolls back.
    Rolling back on the failure path is the caller's job.
    """

    def __enter__(self) -> 'UnitOfWork':
        """Enter the context manager - open the unit."""
        self.open()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType]
    ) -> None:
        """Exit the context manager - release the connection."""
        self.close()

    @abstractmethod
    def open(self) -> None:
        """
        Acquire a connection and begin a transaction.

        Raises:
            DatabaseConnectionException: If no connection can be obtained or
                the transaction cannot be started. No connection is left
                open in that case.
        """
        pass

    @property
    @abstractmethod
    def connection(self) -> Connection:
        """Connection shared by every repository call in this unit."""
        pass

    @abstractmethod
    def commit(self) -> None:
        """
        Commit the current transaction.

        Raises:
            PersistenceException: If the commit fails. Nothing is rolled
                back on the caller's behalf.
        """
        pass

    @abstractmethod
    def rollback_silently(self) -> None:
        """Roll back the current transaction, ignoring any failure."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the connection. Never raises."""
        pass


UnitOfWorkFactory = Callable[[], UnitOfWork]
