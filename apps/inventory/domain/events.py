"""
Inventory domain events.
"""
from dataclasses import dataclass
from uuid import UUID

from shared.domain import DomainEvent


@dataclass(frozen=True)
class StockChanged(DomainEvent):
    stock_location_id: UUID
    variant_id: UUID
    quantity: int
    origin_kind: str
    origin_id: UUID


@dataclass(frozen=True)
class StockReserved(StockChanged):
    pass


@dataclass(frozen=True)
class StockReleased(StockChanged):
    pass


@dataclass(frozen=True)
class StockUnstocked(StockChanged):
    pass


@dataclass(frozen=True)
class StockRestocked(StockChanged):
    pass
