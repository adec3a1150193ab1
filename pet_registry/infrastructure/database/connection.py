"""
Database connection management for the pet registry.

Provides the connection provider and schema/health helpers.
"""
import logging
from functools import partial
from typing import Callable

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine, URL, make_url
from sqlalchemy.exc import ArgumentError, NoSuchModuleError, SQLAlchemyError
from sqlalchemy.pool import NullPool

from ...config import DatabaseSettings
from ...domain.exceptions import ConfigurationErrorKind, ConfigurationException
from .models import Base

logger = logging.getLogger(__name__)


class DatabaseConnectionProvider:
    """
    Hands out one new database connection per call.

    Built once at process entry from explicit settings. Construction fails
    fast with ConfigurationException when the settings are unusable, so a
    misconfigured process never reaches its first query.
    """

    def __init__(self, settings: DatabaseSettings):
        """
        Validate settings and create the engine.

        Args:
            settings: Database configuration

        Raises:
            ConfigurationException: INVALID_VALUE for blank or malformed
                fields, DRIVER_UNAVAILABLE when the dialect or its DBAPI
                module cannot be loaded
        """
        self._settings = settings
        url = self._build_url(settings)
        self._engine = self._create_engine(url, settings.echo_sql)
        logger.info(f"Database connection provider ready for {url.render_as_string(hide_password=True)}")

    @staticmethod
    def _build_url(settings: DatabaseSettings) -> URL:
        """Validate required fields and build the connection URL."""
        if not settings.url or not settings.url.strip():
            raise ConfigurationException(
                ConfigurationErrorKind.INVALID_VALUE,
                "Database url must not be blank",
                field='url'
            )
        if not settings.user or not settings.user.strip():
            raise ConfigurationException(
                ConfigurationErrorKind.INVALID_VALUE,
                "Database user must not be blank",
                field='user'
            )
        if settings.password is None:
            raise ConfigurationException(
                ConfigurationErrorKind.INVALID_VALUE,
                "Database password must be set (it may be empty)",
                field='password'
            )

        try:
            url = make_url(settings.url.strip())
        except ArgumentError as e:
            raise ConfigurationException(
                ConfigurationErrorKind.INVALID_VALUE,
                f"Malformed database url: {e}",
                field='url'
            ) from e

        # SQLite has no authentication and rejects credentials in the URL
        if url.get_backend_name() != 'sqlite':
            url = url.set(username=settings.user, password=settings.password)
        return url

    @staticmethod
    def _create_engine(url: URL, echo: bool) -> Engine:
        """Create the engine, loading the dialect and its DBAPI driver."""
        try:
            engine = create_engine(url, echo=echo, poolclass=NullPool)
        except (NoSuchModuleError, ImportError) as e:
            raise ConfigurationException(
                ConfigurationErrorKind.DRIVER_UNAVAILABLE,
                f"Database driver not available for '{url.drivername}': {e}"
            ) from e
        except ArgumentError as e:
            raise ConfigurationException(
                ConfigurationErrorKind.INVALID_VALUE,
                f"Invalid database url: {e}",
                field='url'
            ) from e

        if engine.dialect.name == 'sqlite':
            @event.listens_for(engine, "connect")
            def enable_foreign_keys(dbapi_conn, connection_record):
                """SQLite only enforces foreign keys when asked to."""
                cursor = dbapi_conn.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        return engine

    @property
    def engine(self) -> Engine:
        """Underlying SQLAlchemy engine."""
        return self._engine

    def get_connection(self) -> Connection:
        """
        Open a new connection.

        The caller owns the connection and must close it. Wrap it in a unit
        of work for transactional use.
        """
        return self._engine.connect()

    def dispose(self) -> None:
        """Release the engine and any connection it still tracks."""
        self._engine.dispose()


def unit_of_work_factory(provider: DatabaseConnectionProvider) -> Callable:
    """
    Build a factory producing a fresh unit of work per call.

    Usage:
        uow_factory = unit_of_work_factory(provider)
        with uow_factory() as uow:
            ...
    """
    from .unit_of_work import SQLAlchemyUnitOfWork
    return partial(SQLAlchemyUnitOfWork, provider)


def init_db(provider: DatabaseConnectionProvider) -> None:
    """
    Create the registry tables if they do not exist.

    Development and test bootstrap only; schema changes are managed outside
    this package.
    """
    Base.metadata.create_all(provider.engine)
    logger.info("Database tables ensured")


def health_check(provider: DatabaseConnectionProvider) -> bool:
    """
    Check database connectivity.

    Returns True if database is accessible.
    """
    try:
        with provider.get_connection() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        return False
