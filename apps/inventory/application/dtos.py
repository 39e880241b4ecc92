"""
Inventory request DTOs.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import UUID


@dataclass
class InventoryLineDTO:
    variant_id: UUID
    quantity: int


@dataclass
class InventoryRequestDTO:
    """Payload of a reserve, finalize or release request for one order."""
    order_id: UUID
    store_id: Optional[UUID] = None
    stock_location_id: Optional[UUID] = None
    lines: List[InventoryLineDTO] = field(default_factory=list)

    @classmethod
    def from_event(cls, event) -> 'InventoryRequestDTO':
        """Create DTO from an order's inventory request event."""
        return cls(
            order_id=event.order_id,
            store_id=event.store_id,
            stock_location_id=event.stock_location_id,
            lines=[InventoryLineDTO(variant_id=l.variant_id, quantity=l.quantity) for l in event.lines],
        )

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'InventoryRequestDTO':
        """Create DTO from the JSON payload a task receives."""
        location = payload.get('stock_location_id')
        store = payload.get('store_id')
        return cls(
            order_id=UUID(str(payload['order_id'])),
            store_id=UUID(str(store)) if store else None,
            stock_location_id=UUID(str(location)) if location else None,
            lines=[
                InventoryLineDTO(variant_id=UUID(str(l['variant_id'])), quantity=int(l['quantity']))
                for l in payload.get('lines', [])
            ],
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            'order_id': str(self.order_id),
            'store_id': str(self.store_id) if self.store_id else None,
            'stock_location_id': str(self.stock_location_id) if self.stock_location_id else None,
            'lines': [
                {'variant_id': str(l.variant_id), 'quantity': l.quantity}
                for l in self.lines
            ],
        }


@dataclass
class InventoryResultDTO:
    order_id: UUID
    stock_location_id: Optional[UUID]
    processed_lines: int
    skipped: bool = False
