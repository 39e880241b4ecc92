"""
Order lifecycle domain events.
"""
from dataclasses import dataclass
from uuid import UUID

from shared.domain import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Event raised when a new order (cart) is created."""
    order_id: UUID
    store_id: UUID
    order_number: str


@dataclass(frozen=True)
class OrderStateChanged(DomainEvent):
    """Event raised when order state changes."""
    order_id: UUID
    old_state: str
    new_state: str


@dataclass(frozen=True)
class OrderCompleted(DomainEvent):
    """Event raised when an order reaches the complete state."""
    order_id: UUID
    store_id: UUID
    total_cents: int


@dataclass(frozen=True)
class OrderCanceled(DomainEvent):
    """Event raised when an order is canceled."""
    order_id: UUID
    store_id: UUID
