from .dtos import InventoryLineDTO, InventoryRequestDTO, InventoryResultDTO
from .handlers import (
    FinalizeInventoryHandler,
    InventoryRequestHandler,
    ReleaseInventoryHandler,
    ReserveInventoryHandler,
)

__all__ = [
    'InventoryLineDTO',
    'InventoryRequestDTO',
    'InventoryResultDTO',
    'InventoryRequestHandler',
    'ReserveInventoryHandler',
    'FinalizeInventoryHandler',
    'ReleaseInventoryHandler',
]
