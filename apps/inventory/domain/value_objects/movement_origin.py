"""
Movement origin value object.

A stock movement records what caused it as a tagged union: the kind of
business event plus that event's id. Persisted as two columns.
"""
from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from shared.domain import ValueObject


class OriginatorKind(str, Enum):
    """Kind of business event that changed a stock quantity."""
    ORDER = 'order'
    STOCK_TRANSFER = 'stock_transfer'
    SUPPLIER = 'supplier'
    ADJUSTMENT = 'adjustment'
    RETURN = 'return'
    DAMAGE = 'damage'
    LOSS = 'loss'
    FOUND = 'found'
    RECOUNT = 'recount'


class MovementAction(str, Enum):
    RECEIVED = 'received'
    SOLD = 'sold'
    RETURNED = 'returned'
    ADJUSTMENT = 'adjustment'
    RESERVED = 'reserved'
    RELEASED = 'released'


@dataclass(frozen=True)
class MovementOrigin(ValueObject):
    """Originator kind and id of a stock movement."""
    kind: OriginatorKind
    origin_id: UUID

    @classmethod
    def for_order(cls, order_id: UUID) -> 'MovementOrigin':
        return cls(kind=OriginatorKind.ORDER, origin_id=order_id)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.origin_id}"
