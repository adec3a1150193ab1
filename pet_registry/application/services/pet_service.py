"""
Pet application service.

Validates pets and orchestrates the operations that touch both tables:
creating a pet together with a new chip, and attaching or detaching a chip.
"""
import logging
from typing import List, Optional

from sqlalchemy.engine import Connection

from ..interfaces.repositories import MicrochipRepository, PetRepository
from ..interfaces.unit_of_work import UnitOfWorkFactory
from .microchip_service import is_blank, validate_microchip
from .transactions import (
    identities_restored_on_failure,
    run_in_transaction,
    run_read_only,
)
from ...domain.entities.pet import Pet
from ...domain.exceptions import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


class PetService:
    """
    Pet service.

    Every public operation validates first, then opens its own unit of work,
    so invalid input never reaches the database.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        pet_repository: PetRepository,
        microchip_repository: MicrochipRepository
    ):
        self._uow_factory = uow_factory
        self._pets = pet_repository
        self._microchips = microchip_repository

    # =========================================================================
    # Writes
    # =========================================================================

    def insert(self, pet: Pet) -> Pet:
        """
        Register a pet.

        An attached chip must already be persisted; use insert_with_microchip
        to create both at once.

        Returns:
            The pet with its generated ID
        """
        self._validate(pet)
        with identities_restored_on_failure(pet):
            run_in_transaction(self._uow_factory, lambda conn: self._pets.create(pet, conn))
        logger.info(f"Registered pet {pet.id} ({pet.name})")
        return pet

    def insert_with_microchip(self, pet: Pet) -> Pet:
        """
        Register a pet and, if its chip is new, the chip as well.

        Both rows are written in one transaction: either both exist
        afterwards or neither does.

        Raises:
            ValidationException: If the pet or its new chip is invalid
            PersistenceException: If either insert fails (e.g. duplicate code)
        """
        self._validate(pet)
        if pet.microchip is not None and pet.microchip.id is None:
            validate_microchip(pet.microchip)

        def work(conn: Connection) -> Pet:
            if pet.microchip is not None and pet.microchip.id is None:
                self._microchips.create(pet.microchip, conn)
            return self._pets.create(pet, conn)

        with identities_restored_on_failure(pet, pet.microchip):
            run_in_transaction(self._uow_factory, work)
        logger.info(
            f"Registered pet {pet.id} ({pet.name}) with microchip "
            f"{pet.microchip_id if pet.microchip is not None else 'none'}"
        )
        return pet

    def update(self, pet: Pet) -> Pet:
        """
        Overwrite an existing pet, including its chip reference.

        Setting ``pet.microchip`` to None and updating detaches the chip.

        Raises:
            ValidationException: If the ID is missing or a field is invalid
            EntityNotFoundException: If no live pet has that ID
        """
        if pet.id is None:
            raise ValidationException.for_field('id', "ID is required to update a pet")
        self._validate(pet)
        run_in_transaction(self._uow_factory, lambda conn: self._pets.update(pet, conn))
        logger.info(f"Updated pet {pet.id}")
        return pet

    def delete(self, pet_id: int) -> None:
        """Soft-delete a pet. Its chip is not touched."""
        run_in_transaction(self._uow_factory, lambda conn: self._pets.delete(pet_id, conn))
        logger.info(f"Deleted pet {pet_id}")

    # =========================================================================
    # Chip association
    # =========================================================================

    def assign_microchip(self, pet_id: int, code: str) -> Pet:
        """
        Attach an existing chip to a pet, replacing any current chip.

        The chip is looked up by code first. An unknown code fails the
        operation before any write transaction is opened; chips are never
        created here.

        Raises:
            ValidationException: If the code is blank
            EntityNotFoundException: If the chip or the pet does not exist
            BusinessRuleViolationException: If another pet holds the chip
        """
        if is_blank(code):
            raise ValidationException.for_field('code', "Microchip code is required")
        code = code.strip()

        microchip = run_read_only(
            self._uow_factory,
            lambda conn: self._microchips.get_by_code(code, conn)
        )
        if microchip is None:
            raise EntityNotFoundException(
                'Microchip',
                message=f"Microchip with code '{code}' not found"
            )

        def work(conn: Connection) -> Pet:
            pet = self._pets.get_by_id(pet_id, conn)
            if pet is None:
                raise EntityNotFoundException('Pet', pet_id)

            holder = self._pets.get_by_microchip_id(microchip.id, conn)
            if holder is not None and holder.id != pet.id:
                raise BusinessRuleViolationException(
                    'microchip_single_holder',
                    f"Microchip '{code}' is already assigned to pet {holder.id}"
                )

            pet.microchip = microchip
            return self._pets.update(pet, conn)

        pet = run_in_transaction(self._uow_factory, work)
        logger.info(f"Assigned microchip {microchip.id} ({code}) to pet {pet_id}")
        return pet

    def remove_microchip(self, pet_id: int) -> Pet:
        """
        Detach the chip from a pet. The chip itself is kept.

        Raises:
            EntityNotFoundException: If the pet does not exist
        """
        def work(conn: Connection) -> Pet:
            pet = self._pets.get_by_id(pet_id, conn)
            if pet is None:
                raise EntityNotFoundException('Pet', pet_id)
            pet.microchip = None
            return self._pets.update(pet, conn)

        pet = run_in_transaction(self._uow_factory, work)
        logger.info(f"Removed microchip from pet {pet_id}")
        return pet

    # =========================================================================
    # Reads
    # =========================================================================

    def get_by_id(self, pet_id: int) -> Optional[Pet]:
        return run_read_only(self._uow_factory, lambda conn: self._pets.get_by_id(pet_id, conn))

    def get_all(self) -> List[Pet]:
        return run_read_only(self._uow_factory, self._pets.list_all)

    def find_by_name(self, fragment: str) -> List[Pet]:
        """Find live pets whose name contains the fragment."""
        return run_read_only(
            self._uow_factory,
            lambda conn: self._pets.find_by_name(fragment, conn)
        )

    def _validate(self, pet: Pet) -> None:
        """Minimal business rules for a pet."""
        if is_blank(pet.name):
            raise ValidationException.for_field('name', "Pet name is required")
        if is_blank(pet.species):
            raise ValidationException.for_field('species', "Species is required")
        if is_blank(pet.owner):
            raise ValidationException.for_field('owner', "Owner name is required")
        if pet.microchip is not None and is_blank(pet.microchip.code):
            raise ValidationException.for_field(
                'microchip.code', "An attached microchip must have a valid code"
            )
