"""
Unit tests for SQLAlchemyPetRepository.

Runs against a SQLite file database inside an uncommitted unit of work.
"""
import pytest
from sqlalchemy import select

from pet_registry.domain.exceptions import EntityNotFoundException, PersistenceException
from pet_registry.infrastructure.database.models import MascotaModel
from tests.factories import MicrochipFactory, PetFactory

pet_table = MascotaModel.__table__


@pytest.fixture
def saved_chip(uow, microchip_repository):
    """A chip persisted in the current unit of work."""
    return microchip_repository.create(MicrochipFactory(code="SAVED-1"), uow.connection)


class TestCreate:
    """Test inserting pets."""

    def test_create_without_chip(self, uow, pet_repository):
        pet = PetFactory(name="Luna")

        pet_repository.create(pet, uow.connection)

        assert pet.id is not None
        loaded = pet_repository.get_by_id(pet.id, uow.connection)
        assert loaded == pet
        assert loaded.microchip is None

    def test_create_with_saved_chip(self, uow, pet_repository, saved_chip):
        pet = PetFactory(microchip=saved_chip)

        pet_repository.create(pet, uow.connection)

        loaded = pet_repository.get_by_id(pet.id, uow.connection)
        assert loaded.microchip == saved_chip

    def test_create_with_unsaved_chip_is_rejected(self, uow, pet_repository):
        pet = PetFactory(microchip=MicrochipFactory())

        with pytest.raises(PersistenceException):
            pet_repository.create(pet, uow.connection)

    def test_create_with_unknown_chip_id_is_rejected(self, uow, pet_repository):
        """Test the foreign key is enforced."""
        pet = PetFactory(microchip=MicrochipFactory(id=999))

        with pytest.raises(PersistenceException):
            pet_repository.create(pet, uow.connection)

    def test_chip_referenced_by_two_pets_is_rejected(
        self, uow, pet_repository, saved_chip
    ):
        pet_repository.create(PetFactory(microchip=saved_chip), uow.connection)

        with pytest.raises(PersistenceException):
            pet_repository.create(PetFactory(microchip=saved_chip), uow.connection)


class TestReads:
    """Test lookups."""

    def test_get_by_id_missing_returns_none(self, uow, pet_repository):
        assert pet_repository.get_by_id(999, uow.connection) is None

    def test_list_all_in_id_order(self, uow, pet_repository):
        pets = [pet_repository.create(PetFactory(), uow.connection) for _ in range(3)]

        listed = pet_repository.list_all(uow.connection)

        assert [p.id for p in listed] == [p.id for p in pets]

    def test_find_by_name_matches_fragment(self, uow, pet_repository):
        pet_repository.create(PetFactory(name="Luna"), uow.connection)
        pet_repository.create(PetFactory(name="Lunita"), uow.connection)
        pet_repository.create(PetFactory(name="Rocky"), uow.connection)

        found = pet_repository.find_by_name("Lun", uow.connection)

        assert sorted(p.name for p in found) == ["Luna", "Lunita"]

    def test_find_by_name_matches_inside_name(self, uow, pet_repository):
        pet_repository.create(PetFactory(name="Max"), uow.connection)
        pet_repository.create(PetFactory(name="Rex"), uow.connection)

        found = pet_repository.find_by_name("ax", uow.connection)

        assert [p.name for p in found] == ["Max"]

    def test_find_by_name_no_match(self, uow, pet_repository):
        pet_repository.create(PetFactory(name="Rocky"), uow.connection)

        assert pet_repository.find_by_name("zzz", uow.connection) == []

    def test_get_by_microchip_id(self, uow, pet_repository, saved_chip):
        pet = pet_repository.create(PetFactory(microchip=saved_chip), uow.connection)

        holder = pet_repository.get_by_microchip_id(saved_chip.id, uow.connection)

        assert holder.id == pet.id

    def test_get_by_microchip_id_unassigned(self, uow, pet_repository, saved_chip):
        assert pet_repository.get_by_microchip_id(saved_chip.id, uow.connection) is None

    def test_soft_deleted_chip_is_still_attached(
        self, uow, pet_repository, microchip_repository, saved_chip
    ):
        """Test a pet keeps showing its chip, flagged deleted, after the chip is deleted."""
        pet = pet_repository.create(PetFactory(microchip=saved_chip), uow.connection)
        microchip_repository.delete(saved_chip.id, uow.connection)

        loaded = pet_repository.get_by_id(pet.id, uow.connection)

        assert loaded.microchip is not None
        assert loaded.microchip.id == saved_chip.id
        assert loaded.microchip.deleted is True


class TestUpdate:
    """Test overwriting pets."""

    def test_update_overwrites_fields(self, uow, pet_repository):
        pet = pet_repository.create(PetFactory(), uow.connection)
        pet.owner = "Someone Else"
        pet.breed = "Mestizo"

        pet_repository.update(pet, uow.connection)

        loaded = pet_repository.get_by_id(pet.id, uow.connection)
        assert loaded.owner == "Someone Else"
        assert loaded.breed == "Mestizo"

    def test_update_attaches_and_detaches_chip(self, uow, pet_repository, saved_chip):
        pet = pet_repository.create(PetFactory(), uow.connection)

        pet.microchip = saved_chip
        pet_repository.update(pet, uow.connection)
        assert pet_repository.get_by_id(pet.id, uow.connection).microchip_id == saved_chip.id

        pet.microchip = None
        pet_repository.update(pet, uow.connection)
        assert pet_repository.get_by_id(pet.id, uow.connection).microchip is None

    def test_update_missing_raises_not_found(self, uow, pet_repository):
        with pytest.raises(EntityNotFoundException):
            pet_repository.update(PetFactory(id=4242), uow.connection)

    def test_update_deleted_raises_not_found(self, uow, pet_repository):
        pet = pet_repository.create(PetFactory(), uow.connection)
        pet_repository.delete(pet.id, uow.connection)

        with pytest.raises(EntityNotFoundException):
            pet_repository.update(pet, uow.connection)


class TestDelete:
    """Test soft deletion."""

    def test_delete_hides_pet_from_reads(self, uow, pet_repository):
        pet = pet_repository.create(PetFactory(name="Toby"), uow.connection)

        pet_repository.delete(pet.id, uow.connection)

        assert pet_repository.get_by_id(pet.id, uow.connection) is None
        assert pet_repository.list_all(uow.connection) == []
        assert pet_repository.find_by_name("Toby", uow.connection) == []

    def test_delete_keeps_row_and_chip(
        self, uow, pet_repository, microchip_repository, saved_chip
    ):
        pet = pet_repository.create(PetFactory(microchip=saved_chip), uow.connection)

        pet_repository.delete(pet.id, uow.connection)

        row = uow.connection.execute(
            select(pet_table).where(pet_table.c.id_mascota == pet.id)
        ).one()
        assert row.eliminado is True
        assert row.id_microchip_fk == saved_chip.id
        assert microchip_repository.get_by_id(saved_chip.id, uow.connection) == saved_chip
