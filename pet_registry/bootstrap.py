"""
Composition root.

Builds the object graph once at process entry: settings → connection
provider → unit of work factory → repositories → services. The presentation
layer receives the services and nothing below them.
"""
import logging
import sys
from dataclasses import dataclass
from typing import Optional

from .application.services import MicrochipService, PetService
from .config import AppSettings, load_settings
from .infrastructure.database import (
    DatabaseConnectionProvider,
    init_db,
    unit_of_work_factory,
)
from .infrastructure.database.repositories import (
    SQLAlchemyMicrochipRepository,
    SQLAlchemyPetRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class Application:
    """Wired services plus the provider they share."""
    settings: AppSettings
    connection_provider: DatabaseConnectionProvider
    pet_service: PetService
    microchip_service: MicrochipService

    def shutdown(self) -> None:
        """Release database resources."""
        self.connection_provider.dispose()
        logger.info("Application shut down")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging to stdout."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def create_application(settings: Optional[AppSettings] = None) -> Application:
    """
    Application factory.

    Raises:
        ConfigurationException: If the database configuration is unusable
    """
    if settings is None:
        settings = load_settings()

    provider = DatabaseConnectionProvider(settings.database)
    if settings.create_schema:
        init_db(provider)

    uow_factory = unit_of_work_factory(provider)
    pet_repository = SQLAlchemyPetRepository()
    microchip_repository = SQLAlchemyMicrochipRepository()

    logger.info(f"Starting {settings.app_name} ({settings.environment})")
    return Application(
        settings=settings,
        connection_provider=provider,
        pet_service=PetService(uow_factory, pet_repository, microchip_repository),
        microchip_service=MicrochipService(uow_factory, microchip_repository),
    )
