"""
Microchip application service.
"""
import logging
from typing import List, Optional

from ..interfaces.repositories import MicrochipRepository
from ..interfaces.unit_of_work import UnitOfWorkFactory
from .transactions import (
    identities_restored_on_failure,
    run_in_transaction,
    run_read_only,
)
from ...domain.entities.microchip import Microchip
from ...domain.exceptions import ValidationException

logger = logging.getLogger(__name__)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_microchip(microchip: Microchip) -> None:
    """
    Check the business rules of a chip.

    Raises:
        ValidationException: On the first failing rule
    """
    if is_blank(microchip.code):
        raise ValidationException.for_field('code', "Microchip code is required")
    if microchip.implanted_on is None:
        raise ValidationException.for_field('implanted_on', "Implantation date is required")
    if is_blank(microchip.clinic):
        raise ValidationException.for_field('clinic', "Veterinary clinic is required")


class MicrochipService:
    """
    Microchip service.

    Validates chips and runs every operation in its own unit of work.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        microchip_repository: MicrochipRepository
    ):
        self._uow_factory = uow_factory
        self._microchips = microchip_repository

    def insert(self, microchip: Microchip) -> Microchip:
        """
        Register a new chip.

        Returns:
            The chip with its generated ID

        Raises:
            ValidationException: If a required field is missing
            PersistenceException: If the code is already registered
        """
        validate_microchip(microchip)
        with identities_restored_on_failure(microchip):
            run_in_transaction(
                self._uow_factory,
                lambda conn: self._microchips.create(microchip, conn)
            )
        logger.info(f"Registered microchip {microchip.id} ({microchip.code})")
        return microchip

    def update(self, microchip: Microchip) -> Microchip:
        """
        Overwrite an existing chip.

        Raises:
            ValidationException: If the ID is missing or a field is invalid
            EntityNotFoundException: If no live chip has that ID
        """
        if microchip.id is None:
            raise ValidationException.for_field('id', "ID is required to update a microchip")
        validate_microchip(microchip)
        run_in_transaction(
            self._uow_factory,
            lambda conn: self._microchips.update(microchip, conn)
        )
        logger.info(f"Updated microchip {microchip.id}")
        return microchip

    def delete(self, microchip_id: int) -> None:
        """Soft-delete a chip. Pets referencing it keep the reference."""
        run_in_transaction(
            self._uow_factory,
            lambda conn: self._microchips.delete(microchip_id, conn)
        )
        logger.info(f"Deleted microchip {microchip_id}")

    def get_by_id(self, microchip_id: int) -> Optional[Microchip]:
        return run_read_only(
            self._uow_factory,
            lambda conn: self._microchips.get_by_id(microchip_id, conn)
        )

    def get_all(self) -> List[Microchip]:
        return run_read_only(self._uow_factory, self._microchips.list_all)

    def get_by_code(self, code: str) -> Optional[Microchip]:
        """Get a live chip by its unique code."""
        return run_read_only(
            self._uow_factory,
            lambda conn: self._microchips.get_by_code(code, conn)
        )
