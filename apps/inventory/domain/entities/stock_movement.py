"""
Stock movement entity.
"""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from shared.domain import BaseEntity, Result
from ..exceptions import InvalidStockQuantityError
from ..value_objects import MovementAction, MovementOrigin


@dataclass(eq=False, kw_only=True)
class StockMovement(BaseEntity):
    """Signed quantity change of one stock item, tagged with its origin."""
    stock_item_id: UUID
    quantity: int
    action: MovementAction
    origin: MovementOrigin
    reason: Optional[str] = None

    @classmethod
    def create(
        cls,
        stock_item_id: UUID,
        quantity: int,
        action: MovementAction,
        origin: MovementOrigin,
        reason: Optional[str] = None,
    ) -> Result['StockMovement']:
        if quantity == 0:
            return Result.fail(InvalidStockQuantityError("StockMovement"))
        return Result.ok(cls(
            stock_item_id=stock_item_id,
            quantity=quantity,
            action=action,
            origin=origin,
            reason=reason,
        ))
