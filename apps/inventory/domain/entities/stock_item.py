"""
Stock item entity.

Tracks on-hand and reserved quantities of one variant at one location.
Every mutation is keyed by a movement origin and is idempotent per
(origin, action), so duplicate deliveries of the same request are harmless.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from uuid import UUID

from shared.domain import BaseEntity, Result
from ..exceptions import InvalidStockQuantityError, StockItemInsufficientStockError
from ..value_objects import MovementAction, MovementOrigin
from .stock_movement import StockMovement


@dataclass(eq=False, kw_only=True)
class StockItem(BaseEntity):
    """Stock of one variant at one stock location."""
    stock_location_id: UUID
    variant_id: UUID
    sku: str = ""
    quantity_on_hand: int = 0
    backorderable: bool = False
    reservations: Dict[MovementOrigin, int] = field(default_factory=dict)
    movements: List[StockMovement] = field(default_factory=list)

    @property
    def quantity_reserved(self) -> int:
        return sum(self.reservations.values())

    @property
    def count_available(self) -> int:
        """On-hand quantity not held by any reservation (may be negative when backordered)."""
        return self.quantity_on_hand - self.quantity_reserved

    def has_movement(self, origin: MovementOrigin, action: MovementAction) -> bool:
        return any(m.origin == origin and m.action == action for m in self.movements)

    def reserve(self, quantity: int, origin: MovementOrigin) -> Result['StockItem']:
        """Hold ``quantity`` for ``origin``; a second reservation for the same origin is a no-op."""
        if quantity <= 0:
            return Result.fail(InvalidStockQuantityError())
        if origin in self.reservations:
            return Result.ok(self)
        if not self.backorderable and self.count_available < quantity:
            return Result.fail(
                StockItemInsufficientStockError(str(self.variant_id), quantity, self.count_available)
            )

        self.reservations[origin] = quantity
        return self._record(-quantity, MovementAction.RESERVED, origin, f"Reserved for {origin}")

    def release(self, origin: MovementOrigin) -> Result['StockItem']:
        """Drop the reservation held for ``origin``, if any."""
        quantity = self.reservations.pop(origin, None)
        if quantity is None:
            return Result.ok(self)
        return self._record(quantity, MovementAction.RELEASED, origin, f"Released for {origin}")

    def unstock(
        self,
        quantity: int,
        origin: MovementOrigin,
        action: MovementAction = MovementAction.SOLD,
    ) -> Result['StockItem']:
        """
        Permanently remove ``quantity`` from on-hand stock.

        Consumes the origin's reservation. Fails when on-hand would go
        negative, backorderable or not.
        """
        if quantity <= 0:
            return Result.fail(InvalidStockQuantityError())
        if self.has_movement(origin, action):
            return Result.ok(self)
        if self.quantity_on_hand - quantity < 0:
            return Result.fail(
                StockItemInsufficientStockError(str(self.variant_id), quantity, self.quantity_on_hand)
            )

        self.reservations.pop(origin, None)
        self.quantity_on_hand -= quantity
        return self._record(-quantity, action, origin, "Unstock")

    def restock(
        self,
        quantity: int,
        origin: MovementOrigin,
        action: MovementAction = MovementAction.RECEIVED,
    ) -> Result['StockItem']:
        """Add ``quantity`` to on-hand stock once per origin."""
        if quantity <= 0:
            return Result.fail(InvalidStockQuantityError())
        if self.has_movement(origin, action):
            return Result.ok(self)

        self.quantity_on_hand += quantity
        return self._record(quantity, action, origin, "Restock")

    def _record(
        self,
        quantity: int,
        action: MovementAction,
        origin: MovementOrigin,
        reason: Optional[str],
    ) -> Result['StockItem']:
        movement = StockMovement.create(
            stock_item_id=self.id,
            quantity=quantity,
            action=action,
            origin=origin,
            reason=reason,
        )
        if movement.is_error:
            return Result.fail(movement.error)
        self.movements.append(movement.value)
        self.touch()
        return Result.ok(self)
