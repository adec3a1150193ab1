"""
Test data factories for the pet registry.
"""
from .microchip_factory import MicrochipFactory
from .pet_factory import PetFactory, PetWithMicrochipFactory

__all__ = [
    "MicrochipFactory",
    "PetFactory",
    "PetWithMicrochipFactory",
]
