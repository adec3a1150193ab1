"""
Configuration management for the pet registry.

Uses Pydantic settings for validation and environment variable support.
Settings are loaded once at process entry by ``load_settings`` and passed
explicitly to whatever needs them.
"""
import os
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.exceptions import ConfigurationErrorKind, ConfigurationException


class DatabaseSettings(BaseSettings):
    """Relational database configuration."""

    model_config = SettingsConfigDict(
        env_prefix='DB_',
        env_file='.env',
        extra='ignore'
    )

    url: str = Field(
        default='',
        description='SQLAlchemy database URL without credentials, '
                    'e.g. postgresql+psycopg2://localhost:5432/mascotas'
    )
    user: str = Field(default='', description='Database user')
    password: Optional[str] = Field(
        default=None,
        description='Database password (may be empty, never unset)'
    )
    echo_sql: bool = Field(default=False, description='Echo SQL queries')


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    # Application
    app_name: str = Field(default='Pet Registry')
    environment: str = Field(default='development')  # development, test, production

    # Logging
    log_level: str = Field(default='INFO')

    # Create missing tables at startup (development and tests only)
    create_schema: bool = Field(default=False)

    # Sub-settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)


def load_settings(env_file: Optional[str] = None) -> AppSettings:
    """
    Load application settings from the environment and an optional env file.

    Args:
        env_file: Explicit dotenv file. When given it must exist and be
            readable.

    Returns:
        Fully validated settings

    Raises:
        ConfigurationException: With kind UNREADABLE if the file cannot be
            read or the values cannot be parsed
    """
    if env_file is not None:
        path = Path(env_file)
        if not path.is_file() or not os.access(path, os.R_OK):
            raise ConfigurationException(
                ConfigurationErrorKind.UNREADABLE,
                f"Configuration file not found or not readable: {env_file}"
            )

    try:
        if env_file is None:
            return AppSettings()
        return AppSettings(
            _env_file=env_file,
            database=DatabaseSettings(_env_file=env_file),
        )
    except ValidationError as e:
        raise ConfigurationException(
            ConfigurationErrorKind.UNREADABLE,
            f"Invalid configuration values: {e}"
        ) from e
