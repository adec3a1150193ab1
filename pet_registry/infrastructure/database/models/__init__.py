"""
SQLAlchemy table models for the pet registry.
"""
from .base import Base, metadata
from .microchip_model import MicrochipModel
from .mascota_model import MascotaModel

__all__ = [
    "Base",
    "metadata",
    "MicrochipModel",
    "MascotaModel",
]
