"""
Domain entities for the pet registry.
"""
from .microchip import Microchip
from .pet import Pet

__all__ = [
    'Microchip',
    'Pet',
]
