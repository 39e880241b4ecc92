"""
Inventory request events raised by the order.

Each event carries the physical lines it concerns, so subscribers never need
to reload the order.
"""
from dataclasses import dataclass
from typing import Optional, Tuple
from uuid import UUID

from shared.domain import DomainEvent


@dataclass(frozen=True)
class InventoryLine:
    """Quantity of one variant an inventory request refers to."""
    variant_id: UUID
    quantity: int


@dataclass(frozen=True)
class InventoryRequest(DomainEvent):
    """Base class for inventory requests keyed by the originating order."""
    order_id: UUID
    store_id: UUID
    stock_location_id: Optional[UUID]
    lines: Tuple[InventoryLine, ...]


@dataclass(frozen=True)
class ReserveInventory(InventoryRequest):
    """Hold stock for an order entering payment."""


@dataclass(frozen=True)
class FinalizeInventory(InventoryRequest):
    """Convert reservations into permanent decrements on completion."""


@dataclass(frozen=True)
class ReleaseInventory(InventoryRequest):
    """Release reservations of a canceled order."""
