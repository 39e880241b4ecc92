"""
Promotion adjustment descriptor.
"""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from shared.domain import ValueObject


@dataclass(frozen=True)
class PromotionAdjustment(ValueObject):
    """
    One adjustment a promotion wants attached to an order.

    ``line_item_id`` scopes it to a line item; ``None`` means order level.
    Discounts are negative amounts.
    """
    amount_cents: int
    description: str
    line_item_id: Optional[UUID] = None

    @property
    def is_line_item_scoped(self) -> bool:
        return self.line_item_id is not None
