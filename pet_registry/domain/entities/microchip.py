"""
Microchip entity - implantable identification chip.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Microchip:
    """
    Identification chip implanted in a pet.

    A chip is an independent record: it can exist before being linked to a
    pet and it holds no reference back to one. ``code`` is the unique
    business key; ``id`` stays ``None`` until the row is persisted.
    """
    code: str
    implanted_on: Optional[date]
    clinic: str
    notes: Optional[str] = None
    id: Optional[int] = None
    deleted: bool = False
