"""
Shared pytest fixtures for pet registry tests.

Provides fixtures for:
- A file-backed SQLite database per test (real SQLAlchemy engine)
- Units of work, repositories and services wired against it
- Mocked unit of work and repositories for service isolation
"""
import os
from unittest.mock import MagicMock

import pytest
from sqlalchemy import select

from pet_registry.application.interfaces import MicrochipRepository, PetRepository
from pet_registry.application.services import MicrochipService, PetService
from pet_registry.config import DatabaseSettings
from pet_registry.infrastructure.database import (
    DatabaseConnectionProvider,
    SQLAlchemyUnitOfWork,
    init_db,
    unit_of_work_factory,
)
from pet_registry.infrastructure.database.repositories import (
    SQLAlchemyMicrochipRepository,
    SQLAlchemyPetRepository,
)

# Test environment configuration
os.environ.setdefault("ENVIRONMENT", "test")


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def db_settings(tmp_path) -> DatabaseSettings:
    """Settings pointing at a fresh SQLite file."""
    return DatabaseSettings(
        url=f"sqlite:///{tmp_path / 'registry.db'}",
        user="test",
        password="",
    )


@pytest.fixture
def connection_provider(db_settings):
    """
    Connection provider with the registry tables created.

    Disposed after the test.
    """
    provider = DatabaseConnectionProvider(db_settings)
    init_db(provider)
    yield provider
    provider.dispose()


@pytest.fixture
def uow_factory(connection_provider):
    """Factory producing real units of work."""
    return unit_of_work_factory(connection_provider)


@pytest.fixture
def uow(connection_provider):
    """
    An open unit of work for repository tests.

    Rolled back and closed after the test.
    """
    unit = SQLAlchemyUnitOfWork(connection_provider)
    unit.open()
    yield unit
    unit.rollback_silently()
    unit.close()


@pytest.fixture
def physical_rows(connection_provider):
    """
    Read every row of a table, soft-deleted ones included.

    Usage:
        rows = physical_rows(pet_table)
    """
    def _rows(table):
        with connection_provider.get_connection() as conn:
            return conn.execute(select(table)).all()
    return _rows


# ============================================================================
# Repository & Service Fixtures
# ============================================================================

@pytest.fixture
def pet_repository():
    return SQLAlchemyPetRepository()


@pytest.fixture
def microchip_repository():
    return SQLAlchemyMicrochipRepository()


@pytest.fixture
def microchip_service(uow_factory, microchip_repository):
    """MicrochipService against the test database."""
    return MicrochipService(uow_factory, microchip_repository)


@pytest.fixture
def pet_service(uow_factory, pet_repository, microchip_repository):
    """PetService against the test database."""
    return PetService(uow_factory, pet_repository, microchip_repository)


# ============================================================================
# Mock Fixtures
# ============================================================================

@pytest.fixture
def mock_uow():
    """
    Mock unit of work usable in a 'with' block.

    Exceptions raised inside the block propagate.
    """
    uow = MagicMock()
    uow.__enter__.return_value = uow
    uow.__exit__.return_value = False
    return uow


@pytest.fixture
def mock_uow_factory(mock_uow):
    """Factory returning the same mock unit of work on every call."""
    return MagicMock(return_value=mock_uow)


@pytest.fixture
def mock_pet_repository():
    """Mock pet repository."""
    repo = MagicMock(spec=PetRepository)
    repo.get_by_id.return_value = None
    repo.get_by_microchip_id.return_value = None
    repo.list_all.return_value = []
    repo.find_by_name.return_value = []
    repo.create.side_effect = lambda pet, conn: pet
    repo.update.side_effect = lambda pet, conn: pet
    return repo


@pytest.fixture
def mock_microchip_repository():
    """Mock microchip repository."""
    repo = MagicMock(spec=MicrochipRepository)
    repo.get_by_id.return_value = None
    repo.get_by_code.return_value = None
    repo.list_all.return_value = []
    repo.create.side_effect = lambda chip, conn: chip
    repo.update.side_effect = lambda chip, conn: chip
    return repo
