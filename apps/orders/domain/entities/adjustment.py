"""
Adjustment entities.

An adjustment is a signed monetary delta (negative for discounts, positive for
fees and taxes). Ineligible adjustments are kept for audit but excluded from
every total.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from uuid import UUID

from shared.domain import BaseEntity, Result
from ..constraints import ADJUSTMENT_DESCRIPTION_MAX_LENGTH
from ..exceptions import (
    FieldRequiredError,
    FieldTooLongError,
    MandatoryAdjustmentIneligibleError,
)


class AdjustmentScope(str, Enum):
    """What an order-level adjustment applies to."""
    ORDER = 'order'
    SHIPPING = 'shipping'
    TAX = 'tax'


def _validate_description(prefix: str, description: Optional[str]):
    if description is None or not description.strip():
        return FieldRequiredError(prefix, "Description")
    if len(description) > ADJUSTMENT_DESCRIPTION_MAX_LENGTH:
        return FieldTooLongError(prefix, "Description", ADJUSTMENT_DESCRIPTION_MAX_LENGTH)
    return None


@dataclass(eq=False, kw_only=True)
class Adjustment(BaseEntity):
    """Common fields of order- and line-item-level adjustments."""
    amount_cents: int
    description: str
    promotion_id: Optional[UUID] = None
    eligible: bool = True

    @property
    def is_promotion(self) -> bool:
        return self.promotion_id is not None

    @property
    def counted_amount_cents(self) -> int:
        """Amount that contributes to totals."""
        return self.amount_cents if self.eligible else 0

    def set_eligibility(self, eligible: bool) -> Result['Adjustment']:
        if self.eligible != eligible:
            self.eligible = eligible
            self.touch()
        return Result.ok(self)


@dataclass(eq=False, kw_only=True)
class OrderAdjustment(Adjustment):
    """Adjustment applied to the order as a whole."""
    order_id: UUID
    scope: AdjustmentScope = AdjustmentScope.ORDER
    mandatory: bool = False

    @classmethod
    def create(
        cls,
        order_id: UUID,
        amount_cents: int,
        description: str,
        scope: AdjustmentScope = AdjustmentScope.ORDER,
        promotion_id: Optional[UUID] = None,
        eligible: bool = True,
        mandatory: bool = False,
    ) -> Result['OrderAdjustment']:
        """Factory method to create an order adjustment."""
        error = _validate_description("OrderAdjustment", description)
        if error:
            return Result.fail(error)
        if mandatory and not eligible:
            return Result.fail(MandatoryAdjustmentIneligibleError())
        return Result.ok(cls(
            order_id=order_id,
            amount_cents=amount_cents,
            description=description.strip(),
            scope=scope,
            promotion_id=promotion_id,
            eligible=eligible,
            mandatory=mandatory,
        ))

    def set_eligibility(self, eligible: bool) -> Result['OrderAdjustment']:
        if self.mandatory and not eligible:
            return Result.fail(MandatoryAdjustmentIneligibleError())
        return super().set_eligibility(eligible)


@dataclass(eq=False, kw_only=True)
class LineItemAdjustment(Adjustment):
    """Adjustment applied to a single line item."""
    line_item_id: UUID

    @classmethod
    def create(
        cls,
        line_item_id: UUID,
        amount_cents: int,
        description: str,
        promotion_id: Optional[UUID] = None,
        eligible: bool = True,
    ) -> Result['LineItemAdjustment']:
        """Factory method to create a line item adjustment."""
        error = _validate_description("LineItemAdjustment", description)
        if error:
            return Result.fail(error)
        return Result.ok(cls(
            line_item_id=line_item_id,
            amount_cents=amount_cents,
            description=description.strip(),
            promotion_id=promotion_id,
            eligible=eligible,
        ))
