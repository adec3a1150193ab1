"""
Pet entity.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .microchip import Microchip


@dataclass
class Pet:
    """
    A registered pet.

    The optional ``microchip`` is a reference, not ownership: deleting a pet
    leaves its chip untouched. In storage the reference is a nullable
    foreign key that is unique across pets.
    """
    name: str
    species: str
    owner: str
    breed: Optional[str] = None
    birth_date: Optional[date] = None
    microchip: Optional[Microchip] = None
    id: Optional[int] = None
    deleted: bool = False

    @property
    def microchip_id(self) -> Optional[int]:
        """Identity of the referenced chip, if any."""
        return self.microchip.id if self.microchip is not None else None
