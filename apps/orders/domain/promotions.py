"""
Reference promotion actions.

Both actions cap the discount so it never exceeds the amount it applies to.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import TYPE_CHECKING, FrozenSet, List, Optional
from uuid import UUID

from shared.domain import Result
from .value_objects.promotion_adjustment import PromotionAdjustment

if TYPE_CHECKING:
    from .entities.order import Order


@dataclass(frozen=True)
class FixedOrderDiscount:
    """Fixed amount off the whole order, as one order-level adjustment."""
    id: UUID
    name: str
    amount_cents: int
    promotion_code: Optional[str] = None
    requires_coupon_code: bool = False

    def __post_init__(self):
        if self.amount_cents < 0:
            raise ValueError("Discount amount cannot be negative")

    def calculate(self, order: 'Order') -> Result[List[PromotionAdjustment]]:
        base = sum(line.subtotal_cents for line in order.line_items)
        discount = min(self.amount_cents, base)
        if discount <= 0:
            return Result.ok([])
        return Result.ok([
            PromotionAdjustment(
                amount_cents=-discount,
                description=f"Promotion ({self.name})",
            )
        ])


@dataclass(frozen=True)
class PercentageLineItemDiscount:
    """
    Percentage off each matching line item, as line-item adjustments.

    ``variant_ids`` restricts the discount to those variants; ``None`` means
    every line item.
    """
    id: UUID
    name: str
    percent: int
    promotion_code: Optional[str] = None
    requires_coupon_code: bool = False
    variant_ids: Optional[FrozenSet[UUID]] = None

    def __post_init__(self):
        if not 0 < self.percent <= 100:
            raise ValueError("Percent must be between 1 and 100")

    def calculate(self, order: 'Order') -> Result[List[PromotionAdjustment]]:
        adjustments = []
        for line in order.line_items:
            if self.variant_ids is not None and line.variant_id not in self.variant_ids:
                continue
            discount = int(
                (Decimal(line.subtotal_cents) * self.percent / Decimal(100))
                .quantize(Decimal('1'), rounding=ROUND_HALF_UP)
            )
            discount = min(discount, line.subtotal_cents)
            if discount > 0:
                adjustments.append(
                    PromotionAdjustment(
                        amount_cents=-discount,
                        description=f"Promotion ({self.name}) {self.percent}% off",
                        line_item_id=line.id,
                    )
                )
        return Result.ok(adjustments)
