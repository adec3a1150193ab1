"""
Connectivity check: ``python -m pet_registry [ENV_FILE]``.

Loads settings, builds the application and runs a database round trip.
Exits non-zero when configuration or connectivity fails.
"""
import logging
import sys
from typing import List, Optional

from .bootstrap import configure_logging, create_application
from .config import load_settings
from .domain.exceptions import ConfigurationException
from .infrastructure.database import health_check

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    env_file = args[0] if args else None

    try:
        settings = load_settings(env_file)
        configure_logging(settings.log_level)
        app = create_application(settings)
    except ConfigurationException as e:
        configure_logging()
        logger.error(f"Configuration error ({e.kind.value}): {e.message}")
        return 2

    try:
        if not health_check(app.connection_provider):
            logger.error("Database is not reachable")
            return 1
        logger.info("Database connection OK")
        return 0
    finally:
        app.shutdown()


if __name__ == "__main__":
    sys.exit(main())
