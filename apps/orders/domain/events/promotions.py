"""
Promotion domain events.
"""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from shared.domain import DomainEvent


@dataclass(frozen=True)
class PromotionApplied(DomainEvent):
    """Event raised when a promotion's adjustments are attached to an order."""
    order_id: UUID
    promotion_id: UUID
    promo_code: Optional[str]
    discount_cents: int


@dataclass(frozen=True)
class PromotionRemoved(DomainEvent):
    order_id: UUID
    promotion_id: UUID


@dataclass(frozen=True)
class PromotionUsed(DomainEvent):
    """Event raised on completion so promotion usage can be recorded."""
    order_id: UUID
    promotion_id: UUID
