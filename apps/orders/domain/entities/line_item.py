"""
Line item entity.
"""
from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

from shared.domain import BaseEntity, Result
from ..collaborators import Variant
from ..constraints import QUANTITY_MIN_VALUE
from ..exceptions import (
    TooFewItemsError,
    VariantNotPurchasableError,
    VariantRequiredError,
)
from .adjustment import LineItemAdjustment


@dataclass(eq=False, kw_only=True)
class LineItem(BaseEntity):
    """Quantity of one variant within an order, priced at add time."""
    order_id: UUID
    variant_id: UUID
    quantity: int
    unit_price_cents: int
    currency: str
    variant_name: str = ""
    variant_sku: str = ""
    is_digital: bool = False
    adjustments: List[LineItemAdjustment] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        order_id: UUID,
        variant: Optional[Variant],
        quantity: int,
        currency: str,
    ) -> Result['LineItem']:
        """Factory method capturing the variant's price in ``currency``."""
        if variant is None:
            return Result.fail(VariantRequiredError())
        if quantity < QUANTITY_MIN_VALUE:
            return Result.fail(TooFewItemsError("quantity", QUANTITY_MIN_VALUE))
        unit_price = variant.price_in(currency)
        if unit_price is None or unit_price < 0:
            return Result.fail(VariantNotPurchasableError(str(variant.id), currency))
        return Result.ok(cls(
            order_id=order_id,
            variant_id=variant.id,
            quantity=quantity,
            unit_price_cents=unit_price,
            currency=currency,
            variant_name=getattr(variant, 'name', ""),
            variant_sku=getattr(variant, 'sku', ""),
            is_digital=bool(variant.is_digital),
        ))

    def update_quantity(self, quantity: int) -> Result['LineItem']:
        """Set a new quantity."""
        if quantity < QUANTITY_MIN_VALUE:
            return Result.fail(TooFewItemsError("quantity", QUANTITY_MIN_VALUE))
        self.quantity = quantity
        self.touch()
        return Result.ok(self)

    def remove_promotion_adjustments(self, promotion_id: UUID) -> int:
        """Drop adjustments originating from a promotion; return how many."""
        kept = [a for a in self.adjustments if a.promotion_id != promotion_id]
        removed = len(self.adjustments) - len(kept)
        self.adjustments = kept
        return removed

    @property
    def subtotal_cents(self) -> int:
        """Calculate the item subtotal."""
        return self.unit_price_cents * self.quantity

    @property
    def eligible_adjustment_total_cents(self) -> int:
        return sum(a.counted_amount_cents for a in self.adjustments)

    @property
    def total_cents(self) -> int:
        """Subtotal after eligible line-level adjustments."""
        return self.subtotal_cents + self.eligible_adjustment_total_cents
