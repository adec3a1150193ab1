"""
Application services.
"""
from .microchip_service import MicrochipService, validate_microchip
from .pet_service import PetService
from .transactions import (
    identities_restored_on_failure,
    run_in_transaction,
    run_read_only,
)

__all__ = [
    'MicrochipService',
    'PetService',
    'validate_microchip',
    'identities_restored_on_failure',
    'run_in_transaction',
    'run_read_only',
]
