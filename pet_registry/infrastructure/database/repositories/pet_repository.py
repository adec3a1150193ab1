"""
SQLAlchemy implementation of PetRepository.

Every read left-joins the microchip table so a pet comes back with its chip
already attached. The chip's own soft-delete flag is passed through as-is.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import false, insert, select, update
from sqlalchemy.engine import Connection, Row
from sqlalchemy.sql import Select

from ....application.interfaces.repositories import PetRepository
from ....domain.entities.microchip import Microchip
from ....domain.entities.pet import Pet
from ....domain.exceptions import EntityNotFoundException, PersistenceException
from ..models.mascota_model import MascotaModel
from ..models.microchip_model import MicrochipModel
from .errors import persistence_errors

logger = logging.getLogger(__name__)

pet_table = MascotaModel.__table__
microchip_table = MicrochipModel.__table__


def _select_live_pets() -> Select:
    """Pets with their (optional) chip, soft-deleted pets excluded."""
    return (
        select(
            pet_table,
            microchip_table.c.id_microchip,
            microchip_table.c.codigo,
            microchip_table.c.fecha_implantacion,
            microchip_table.c.veterinaria,
            microchip_table.c.observaciones,
            microchip_table.c.eliminado.label('chip_eliminado'),
        )
        .select_from(
            pet_table.outerjoin(
                microchip_table,
                pet_table.c.id_microchip_fk == microchip_table.c.id_microchip
            )
        )
        .where(pet_table.c.eliminado == false())
    )


class SQLAlchemyPetRepository(PetRepository):
    """SQLAlchemy implementation of pet repository."""

    def create(self, entity: Pet, conn: Connection) -> Pet:
        """Insert a pet and assign its generated ID."""
        values = self._entity_to_values(entity, 'create')
        with persistence_errors('Pet', 'create'):
            result = conn.execute(insert(pet_table).values(**values))

        key = result.inserted_primary_key
        if not key or key[0] is None:
            raise PersistenceException('Pet', 'create', 'no generated id was returned')

        entity.id = key[0]
        entity.deleted = False
        logger.debug(f"Inserted pet {entity.id} ({entity.name})")
        return entity

    def get_by_id(self, id: int, conn: Connection) -> Optional[Pet]:
        """Get pet by ID."""
        with persistence_errors('Pet', 'read'):
            row = conn.execute(
                _select_live_pets().where(pet_table.c.id_mascota == id)
            ).first()
        return self._row_to_entity(row) if row else None

    def list_all(self, conn: Connection) -> List[Pet]:
        """List every non-deleted pet."""
        with persistence_errors('Pet', 'read'):
            rows = conn.execute(
                _select_live_pets().order_by(pet_table.c.id_mascota)
            ).all()
        return [self._row_to_entity(row) for row in rows]

    def find_by_name(self, fragment: str, conn: Connection) -> List[Pet]:
        """Find pets whose name contains the fragment (SQL LIKE)."""
        with persistence_errors('Pet', 'read'):
            rows = conn.execute(
                _select_live_pets()
                .where(pet_table.c.nombre.like(f"%{fragment}%"))
                .order_by(pet_table.c.id_mascota)
            ).all()
        return [self._row_to_entity(row) for row in rows]

    def get_by_microchip_id(
        self,
        microchip_id: int,
        conn: Connection
    ) -> Optional[Pet]:
        """Get the live pet referencing a chip."""
        with persistence_errors('Pet', 'read'):
            row = conn.execute(
                _select_live_pets().where(pet_table.c.id_microchip_fk == microchip_id)
            ).first()
        return self._row_to_entity(row) if row else None

    def update(self, entity: Pet, conn: Connection) -> Pet:
        """Overwrite an existing pet, chip reference included."""
        values = self._entity_to_values(entity, 'update')
        with persistence_errors('Pet', 'update'):
            result = conn.execute(
                update(pet_table)
                .where(
                    pet_table.c.id_mascota == entity.id,
                    pet_table.c.eliminado == false()
                )
                .values(**values)
            )

        if result.rowcount == 0:
            raise EntityNotFoundException('Pet', entity.id)
        return entity

    def delete(self, id: int, conn: Connection) -> None:
        """Soft-delete pet by ID. The referenced chip is left alone."""
        with persistence_errors('Pet', 'delete'):
            conn.execute(
                update(pet_table)
                .where(pet_table.c.id_mascota == id)
                .values(eliminado=True)
            )

    @staticmethod
    def _entity_to_values(entity: Pet, operation: str) -> Dict[str, Any]:
        """Column values for insert/update."""
        if entity.microchip is not None and entity.microchip.id is None:
            raise PersistenceException(
                'Pet',
                operation,
                f"microchip '{entity.microchip.code}' must be persisted before it is referenced"
            )
        return {
            'nombre': entity.name,
            'especie': entity.species,
            'raza': entity.breed,
            'fecha_nacimiento': entity.birth_date,
            'duenio': entity.owner,
            'id_microchip_fk': entity.microchip_id,
        }

    @staticmethod
    def _row_to_entity(row: Row) -> Pet:
        """Convert a joined pet row to a domain entity."""
        microchip = None
        if row.id_microchip_fk is not None and row.id_microchip is not None:
            microchip = Microchip(
                id=row.id_microchip,
                code=row.codigo,
                implanted_on=row.fecha_implantacion,
                clinic=row.veterinaria,
                notes=row.observaciones,
                deleted=bool(row.chip_eliminado),
            )

        return Pet(
            id=row.id_mascota,
            name=row.nombre,
            species=row.especie,
            breed=row.raza,
            birth_date=row.fecha_nacimiento,
            owner=row.duenio,
            microchip=microchip,
            deleted=bool(row.eliminado),
        )
