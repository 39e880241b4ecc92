"""
Django ORM implementation of StockLocationRepository.
"""
import logging
from typing import Optional
from uuid import UUID

from django.db import transaction

from shared.infrastructure.events import DomainEventDispatcher
from ...domain.entities import StockItem, StockLocation, StockMovement
from ...domain.repositories import StockLocationRepository
from ...domain.value_objects import MovementAction, MovementOrigin, OriginatorKind
from ..models import (
    StockItemModel,
    StockLocationModel,
    StockMovementModel,
    StockReservationModel,
)

logger = logging.getLogger(__name__)


class DjangoStockLocationRepository(StockLocationRepository):
    """Django ORM based stock location repository implementation."""

    def __init__(self, dispatcher: Optional[DomainEventDispatcher] = None):
        self.dispatcher = dispatcher

    def save(self, location: StockLocation) -> StockLocation:
        """Save a stock location with its items, reservations and new movements."""
        with transaction.atomic():
            StockLocationModel.objects.update_or_create(
                id=location.id,
                defaults={
                    'name': location.name,
                    'is_default': location.is_default,
                    'created_at': location.created_at,
                    'updated_at': location.updated_at,
                }
            )
            for item in location.stock_items:
                self._save_item(location, item)

            events = location.clear_domain_events()
            if self.dispatcher is not None:
                self.dispatcher.publish_on_commit(events)
        logger.debug(f"Saved stock location {location.id} ({len(events)} events)")
        return location

    def _save_item(self, location: StockLocation, item: StockItem) -> None:
        StockItemModel.objects.update_or_create(
            id=item.id,
            defaults={
                'stock_location_id': location.id,
                'variant_id': item.variant_id,
                'sku': item.sku,
                'quantity_on_hand': item.quantity_on_hand,
                'backorderable': item.backorderable,
                'created_at': item.created_at,
                'updated_at': item.updated_at,
            }
        )

        StockReservationModel.objects.filter(stock_item_id=item.id).delete()
        StockReservationModel.objects.bulk_create([
            StockReservationModel(
                stock_item_id=item.id,
                origin_kind=origin.kind.value,
                origin_id=origin.origin_id,
                quantity=quantity,
            )
            for origin, quantity in item.reservations.items()
        ])

        stored = set(
            StockMovementModel.objects.filter(stock_item_id=item.id).values_list('id', flat=True)
        )
        StockMovementModel.objects.bulk_create([
            StockMovementModel(
                id=movement.id,
                stock_item_id=item.id,
                quantity=movement.quantity,
                action=movement.action.value,
                origin_kind=movement.origin.kind.value,
                origin_id=movement.origin.origin_id,
                reason=movement.reason,
                created_at=movement.created_at,
                updated_at=movement.updated_at,
            )
            for movement in item.movements
            if movement.id not in stored
        ])

    def find_by_id(self, location_id: UUID) -> Optional[StockLocation]:
        """Find a stock location by ID."""
        try:
            model = StockLocationModel.objects.get(id=location_id)
            return self._to_entity(model)
        except StockLocationModel.DoesNotExist:
            return None

    def find_default(self) -> Optional[StockLocation]:
        model = StockLocationModel.objects.filter(is_default=True).first()
        return self._to_entity(model) if model else None

    def delete(self, location_id: UUID) -> bool:
        """Delete a stock location."""
        deleted, _ = StockLocationModel.objects.filter(id=location_id).delete()
        return deleted > 0

    def _to_entity(self, model: StockLocationModel) -> StockLocation:
        """Convert Django model to domain entity."""
        items = [
            self._item_to_entity(item_model)
            for item_model in model.stock_items.prefetch_related('reservations', 'movements')
        ]
        return StockLocation(
            id=model.id,
            name=model.name,
            is_default=model.is_default,
            stock_items=items,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _item_to_entity(self, model: StockItemModel) -> StockItem:
        return StockItem(
            id=model.id,
            stock_location_id=model.stock_location_id,
            variant_id=model.variant_id,
            sku=model.sku,
            quantity_on_hand=model.quantity_on_hand,
            backorderable=model.backorderable,
            reservations={
                MovementOrigin(kind=OriginatorKind(r.origin_kind), origin_id=r.origin_id): r.quantity
                for r in model.reservations.all()
            },
            movements=[
                StockMovement(
                    id=m.id,
                    stock_item_id=model.id,
                    quantity=m.quantity,
                    action=MovementAction(m.action),
                    origin=MovementOrigin(kind=OriginatorKind(m.origin_kind), origin_id=m.origin_id),
                    reason=m.reason,
                    created_at=m.created_at,
                    updated_at=m.updated_at,
                )
                for m in model.movements.all()
            ],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
