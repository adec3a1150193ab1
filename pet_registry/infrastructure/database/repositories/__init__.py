"""
SQLAlchemy repository implementations.
"""
from .microchip_repository import SQLAlchemyMicrochipRepository
from .pet_repository import SQLAlchemyPetRepository

__all__ = [
    'SQLAlchemyMicrochipRepository',
    'SQLAlchemyPetRepository',
]
