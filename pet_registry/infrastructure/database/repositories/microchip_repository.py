"""
SQLAlchemy implementation of MicrochipRepository.
"""
import logging
from typing import List, Optional

from sqlalchemy import false, insert, select, update
from sqlalchemy.engine import Connection, Row

from ....application.interfaces.repositories import MicrochipRepository
from ....domain.entities.microchip import Microchip
from ....domain.exceptions import EntityNotFoundException, PersistenceException
from ..models.microchip_model import MicrochipModel
from .errors import persistence_errors

logger = logging.getLogger(__name__)

microchip_table = MicrochipModel.__table__


class SQLAlchemyMicrochipRepository(MicrochipRepository):
    """SQLAlchemy implementation of microchip repository."""

    def create(self, entity: Microchip, conn: Connection) -> Microchip:
        """Insert a chip and assign its generated ID."""
        with persistence_errors('Microchip', 'create'):
            result = conn.execute(
                insert(microchip_table).values(
                    codigo=entity.code,
                    fecha_implantacion=entity.implanted_on,
                    veterinaria=entity.clinic,
                    observaciones=entity.notes,
                )
            )

        key = result.inserted_primary_key
        if not key or key[0] is None:
            raise PersistenceException(
                'Microchip', 'create', 'no generated id was returned'
            )

        entity.id = key[0]
        entity.deleted = False
        logger.debug(f"Inserted microchip {entity.id} ({entity.code})")
        return entity

    def get_by_id(self, id: int, conn: Connection) -> Optional[Microchip]:
        """Get chip by ID."""
        with persistence_errors('Microchip', 'read'):
            row = conn.execute(
                select(microchip_table).where(
                    microchip_table.c.id_microchip == id,
                    microchip_table.c.eliminado == false()
                )
            ).first()
        return self._row_to_entity(row) if row else None

    def get_by_code(self, code: str, conn: Connection) -> Optional[Microchip]:
        """Get chip by its unique code."""
        with persistence_errors('Microchip', 'read'):
            row = conn.execute(
                select(microchip_table).where(
                    microchip_table.c.codigo == code,
                    microchip_table.c.eliminado == false()
                )
            ).first()
        return self._row_to_entity(row) if row else None

    def list_all(self, conn: Connection) -> List[Microchip]:
        """List every non-deleted chip."""
        with persistence_errors('Microchip', 'read'):
            rows = conn.execute(
                select(microchip_table)
                .where(microchip_table.c.eliminado == false())
                .order_by(microchip_table.c.id_microchip)
            ).all()
        return [self._row_to_entity(row) for row in rows]

    def update(self, entity: Microchip, conn: Connection) -> Microchip:
        """Overwrite an existing chip."""
        with persistence_errors('Microchip', 'update'):
            result = conn.execute(
                update(microchip_table)
                .where(
                    microchip_table.c.id_microchip == entity.id,
                    microchip_table.c.eliminado == false()
                )
                .values(
                    codigo=entity.code,
                    fecha_implantacion=entity.implanted_on,
                    veterinaria=entity.clinic,
                    observaciones=entity.notes,
                )
            )

        if result.rowcount == 0:
            raise EntityNotFoundException('Microchip', entity.id)
        return entity

    def delete(self, id: int, conn: Connection) -> None:
        """Soft-delete chip by ID."""
        with persistence_errors('Microchip', 'delete'):
            conn.execute(
                update(microchip_table)
                .where(microchip_table.c.id_microchip == id)
                .values(eliminado=True)
            )

    @staticmethod
    def _row_to_entity(row: Row) -> Microchip:
        """Convert a microchip row to a domain entity."""
        return Microchip(
            id=row.id_microchip,
            code=row.codigo,
            implanted_on=row.fecha_implantacion,
            clinic=row.veterinaria,
            notes=row.observaciones,
            deleted=bool(row.eliminado),
        )
