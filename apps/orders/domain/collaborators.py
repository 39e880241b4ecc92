"""
Contracts of the catalog, shipping and promotion collaborators.

The order core reads these objects but never owns or mutates them.
"""
from typing import TYPE_CHECKING, List, Optional, Protocol, runtime_checkable
from uuid import UUID

from shared.domain import Result
from .value_objects.promotion_adjustment import PromotionAdjustment

if TYPE_CHECKING:
    from .entities.order import Order


@runtime_checkable
class Variant(Protocol):
    """A purchasable product variant."""
    id: UUID
    sku: str
    name: str
    is_digital: bool

    def price_in(self, currency: str) -> Optional[int]:
        """Unit price in cents for ``currency``, or ``None`` when not sold in it."""
        ...


@runtime_checkable
class ShippingMethod(Protocol):
    """A shipping option with a flat base cost."""
    id: UUID
    name: str
    base_cost_cents: int


@runtime_checkable
class Promotion(Protocol):
    """
    An already-evaluated discount descriptor.

    Eligibility rules live outside the order core; ``calculate`` only turns
    the promotion's action into adjustments for a given order.
    """
    id: UUID
    name: str
    promotion_code: Optional[str]
    requires_coupon_code: bool

    def calculate(self, order: 'Order') -> Result[List[PromotionAdjustment]]:
        ...
