"""
Database infrastructure - table models, repositories, and connection management.
"""
from .connection import (
    DatabaseConnectionProvider,
    health_check,
    init_db,
    unit_of_work_factory,
)
from .unit_of_work import SQLAlchemyUnitOfWork

__all__ = [
    'DatabaseConnectionProvider',
    'health_check',
    'init_db',
    'unit_of_work_factory',
    'SQLAlchemyUnitOfWork',
]
