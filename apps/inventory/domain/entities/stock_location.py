"""
Stock location entity (Aggregate Root).
"""
from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

from shared.domain import AggregateRoot, Result
from ..events import StockReleased, StockReserved, StockRestocked, StockUnstocked
from ..exceptions import StockLocationInsufficientStockError
from ..value_objects import MovementAction, MovementOrigin
from .stock_item import StockItem


@dataclass(eq=False, kw_only=True)
class StockLocation(AggregateRoot):
    """Warehouse or shop holding stock items."""
    name: str
    is_default: bool = False
    stock_items: List[StockItem] = field(default_factory=list)

    def stock_item_for(self, variant_id: UUID) -> Optional[StockItem]:
        for item in self.stock_items:
            if item.variant_id == variant_id:
                return item
        return None

    def stock_item_or_create(self, variant_id: UUID, sku: str = "", backorderable: bool = False) -> StockItem:
        item = self.stock_item_for(variant_id)
        if item is None:
            item = StockItem(
                stock_location_id=self.id,
                variant_id=variant_id,
                sku=sku,
                backorderable=backorderable,
            )
            self.stock_items.append(item)
        return item

    def reserve(self, variant_id: UUID, quantity: int, origin: MovementOrigin) -> Result['StockLocation']:
        item = self.stock_item_for(variant_id)
        if item is None:
            return Result.fail(StockLocationInsufficientStockError(str(variant_id), quantity))
        already = origin in item.reservations
        result = item.reserve(quantity, origin)
        if result.is_error:
            return Result.fail(result.error)
        if not already:
            self.add_domain_event(self._event(StockReserved, item, quantity, origin))
        return Result.ok(self)

    def release(self, variant_id: UUID, origin: MovementOrigin) -> Result['StockLocation']:
        item = self.stock_item_for(variant_id)
        if item is None:
            return Result.ok(self)
        quantity = item.reservations.get(origin)
        result = item.release(origin)
        if result.is_error:
            return Result.fail(result.error)
        if quantity is not None:
            self.add_domain_event(self._event(StockReleased, item, quantity, origin))
        return Result.ok(self)

    def unstock(
        self,
        variant_id: UUID,
        quantity: int,
        origin: MovementOrigin,
        action: MovementAction = MovementAction.SOLD,
    ) -> Result['StockLocation']:
        """Decrease on-hand stock; a variant not stocked here is insufficient stock."""
        item = self.stock_item_for(variant_id)
        if item is None:
            return Result.fail(StockLocationInsufficientStockError(str(variant_id), quantity))
        already = item.has_movement(origin, action)
        result = item.unstock(quantity, origin, action)
        if result.is_error:
            return Result.fail(result.error)
        if not already:
            self.add_domain_event(self._event(StockUnstocked, item, quantity, origin))
        return Result.ok(self)

    def restock(
        self,
        variant_id: UUID,
        quantity: int,
        origin: MovementOrigin,
        action: MovementAction = MovementAction.RECEIVED,
    ) -> Result['StockLocation']:
        """Increase on-hand stock, creating the stock item when missing."""
        item = self.stock_item_or_create(variant_id)
        already = item.has_movement(origin, action)
        result = item.restock(quantity, origin, action)
        if result.is_error:
            return Result.fail(result.error)
        if not already:
            self.add_domain_event(self._event(StockRestocked, item, quantity, origin))
        return Result.ok(self)

    def _event(self, event_cls, item: StockItem, quantity: int, origin: MovementOrigin):
        return event_cls(
            stock_location_id=self.id,
            variant_id=item.variant_id,
            quantity=quantity,
            origin_kind=origin.kind.value,
            origin_id=origin.origin_id,
        )
