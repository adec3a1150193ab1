"""
Integration tests for the composition root and the connectivity check.
"""
import pytest

from pet_registry.__main__ import main
from pet_registry.bootstrap import create_application
from pet_registry.config import load_settings
from tests.factories import PetWithMicrochipFactory


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("DB_URL", "DB_USER", "DB_PASSWORD", "CREATE_SCHEMA"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sqlite_env_file(tmp_path):
    """Env file pointing at a SQLite database with schema creation on."""
    path = tmp_path / "registry.env"
    path.write_text(
        f"DB_URL=sqlite:///{tmp_path / 'registry.db'}\n"
        "DB_USER=registry\n"
        "DB_PASSWORD=\n"
        "CREATE_SCHEMA=true\n",
        encoding="utf-8",
    )
    return str(path)


def test_application_services_share_database(sqlite_env_file):
    app = create_application(load_settings(sqlite_env_file))
    try:
        pet = app.pet_service.insert_with_microchip(PetWithMicrochipFactory())

        assert app.microchip_service.get_by_id(pet.microchip.id) == pet.microchip
        assert app.pet_service.get_all() == [pet]
    finally:
        app.shutdown()


def test_main_succeeds_with_reachable_database(sqlite_env_file):
    assert main([sqlite_env_file]) == 0


def test_main_reports_missing_configuration(tmp_path):
    assert main([str(tmp_path / "missing.env")]) == 2


def test_main_reports_invalid_configuration(tmp_path):
    path = tmp_path / "blank.env"
    path.write_text("DB_URL=\nDB_USER=registry\nDB_PASSWORD=\n", encoding="utf-8")

    assert main([str(path)]) == 2


def test_main_reports_unreachable_database(tmp_path):
    """Test a database file in a missing directory fails the round trip."""
    path = tmp_path / "unreachable.env"
    path.write_text(
        f"DB_URL=sqlite:///{tmp_path / 'no' / 'such' / 'dir' / 'x.db'}\n"
        "DB_USER=registry\n"
        "DB_PASSWORD=\n",
        encoding="utf-8",
    )

    assert main([str(path)]) == 1
