"""
Repository interfaces (ports) for domain entities.

These interfaces define the contract for persistence operations without
specifying the implementation details. Every operation receives the
connection owned by the active unit of work and never manages transaction
boundaries itself.
"""
from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from sqlalchemy.engine import Connection

from ...domain.entities.microchip import Microchip
from ...domain.entities.pet import Pet


# Generic type for entities
T = TypeVar('T')


class Repository(ABC, Generic[T]):
    """
    Base repository interface.

    Defines common CRUD operations for all repositories.
    """

    @abstractmethod
    def create(self, entity: T, conn: Connection) -> T:
        """
        Insert a new row.

        Args:
            entity: Entity to insert
            conn: Connection of the active unit of work

        Returns:
            The same entity with its generated ID assigned

        Raises:
            PersistenceException: If no identity is returned
        """
        pass

    @abstractmethod
    def get_by_id(self, id: int, conn: Connection) -> Optional[T]:
        """
        Get a non-deleted entity by ID.

        Returns:
            Entity if found, None otherwise
        """
        pass

    @abstractmethod
    def list_all(self, conn: Connection) -> List[T]:
        """List every non-deleted entity in storage order."""
        pass

    @abstractmethod
    def update(self, entity: T, conn: Connection) -> T:
        """
        Overwrite every mutable field of an existing entity.

        Raises:
            EntityNotFoundException: If no live row has the entity's ID
        """
        pass

    @abstractmethod
    def delete(self, id: int, conn: Connection) -> None:
        """
        Soft-delete an entity.

        Idempotent: no error when the ID does not exist.
        """
        pass


class PetRepository(Repository[Pet]):
    """Repository interface for Pet entities."""

    @abstractmethod
    def find_by_name(self, fragment: str, conn: Connection) -> List[Pet]:
        """Find pets whose name contains the fragment."""
        pass

    @abstractmethod
    def get_by_microchip_id(
        self,
        microchip_id: int,
        conn: Connection
    ) -> Optional[Pet]:
        """Get the non-deleted pet currently holding a chip."""
        pass


class MicrochipRepository(Repository[Microchip]):
    """Repository interface for Microchip entities."""

    @abstractmethod
    def get_by_code(self, code: str, conn: Connection) -> Optional[Microchip]:
        """Get a non-deleted chip by its unique code."""
        pass
