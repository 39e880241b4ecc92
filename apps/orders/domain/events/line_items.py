"""
Line item domain events.
"""
from dataclasses import dataclass
from uuid import UUID

from shared.domain import DomainEvent


@dataclass(frozen=True)
class LineItemAdded(DomainEvent):
    order_id: UUID
    line_item_id: UUID
    variant_id: UUID
    quantity: int


@dataclass(frozen=True)
class LineItemRemoved(DomainEvent):
    order_id: UUID
    line_item_id: UUID
    variant_id: UUID


@dataclass(frozen=True)
class LineItemQuantityChanged(DomainEvent):
    order_id: UUID
    line_item_id: UUID
    old_quantity: int
    new_quantity: int
