"""
Application ports - repository and unit of work contracts.
"""
from .repositories import (
    Repository,
    PetRepository,
    MicrochipRepository,
)
from .unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    'Repository',
    'PetRepository',
    'MicrochipRepository',
    'UnitOfWork',
    'UnitOfWorkFactory',
]
