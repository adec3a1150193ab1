"""
SQLAlchemy Unit of Work implementation.
"""
import logging
from typing import Optional

from sqlalchemy.engine import Connection, RootTransaction
from sqlalchemy.exc import SQLAlchemyError

from ...application.interfaces.unit_of_work import UnitOfWork
from ...domain.exceptions import DatabaseConnectionException, PersistenceException
from .connection import DatabaseConnectionProvider

logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work pattern.

    Owns exactly one connection for its whole lifetime and runs every
    statement issued through it inside one explicit transaction.
    """

    def __init__(self, connection_provider: DatabaseConnectionProvider):
        """
        Initialize Unit of Work.

        Args:
            connection_provider: Source of new database connections
        """
        self._provider = connection_provider
        self._connection: Optional[Connection] = None
        self._transaction: Optional[RootTransaction] = None

    def open(self) -> None:
        """Acquire a connection and begin the transaction."""
        if self._connection is not None:
            raise RuntimeError("Unit of work already open.")

        try:
            connection = self._provider.get_connection()
        except SQLAlchemyError as e:
            raise DatabaseConnectionException(
                "Could not obtain a database connection",
                original_error=str(e)
            ) from e

        try:
            transaction = connection.begin()
        except SQLAlchemyError as e:
            self._release(connection)
            raise DatabaseConnectionException(
                "Could not start a transaction",
                original_error=str(e)
            ) from e

        self._connection = connection
        self._transaction = transaction
        logger.debug("Unit of work opened")

    @property
    def connection(self) -> Connection:
        """Get the transactional connection."""
        if self._connection is None:
            raise RuntimeError("Unit of work not started. Use 'with' context.")
        return self._connection

    def commit(self) -> None:
        """Commit current transaction."""
        if self._transaction is None:
            raise RuntimeError("Unit of work not started. Use 'with' context.")
        try:
            self._transaction.commit()
        except SQLAlchemyError as e:
            raise PersistenceException(
                'Transaction',
                'commit',
                'the database rejected the commit',
                original_error=str(e)
            ) from e
        logger.debug("Unit of work committed")

    def rollback_silently(self) -> None:
        """Rollback current transaction; a failing rollback is only logged."""
        if self._transaction is None:
            return
        try:
            self._transaction.rollback()
            logger.debug("Unit of work rolled back")
        except SQLAlchemyError as e:
            logger.warning(f"Rollback failed and was ignored: {e}")

    def close(self) -> None:
        """
        End the transaction mode and release the connection.

        Does not roll back. A transaction still pending here was neither
        committed nor rolled back by the caller and is discarded by the
        driver when the connection goes away.
        """
        connection, self._connection = self._connection, None
        transaction, self._transaction = self._transaction, None
        if connection is None:
            return

        try:
            if transaction is not None and transaction.is_active:
                logger.warning("Closing unit of work with a pending transaction")
        except Exception as e:
            logger.warning(f"Could not inspect transaction state on close: {e}")

        self._release(connection)
        logger.debug("Unit of work closed")

    @staticmethod
    def _release(connection: Connection) -> None:
        """Close a connection, logging instead of raising on failure."""
        try:
            connection.close()
        except Exception as e:
            logger.warning(f"Closing the connection failed and was ignored: {e}")
