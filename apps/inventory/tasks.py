"""
Inventory Celery tasks.

Each task receives the JSON payload of an order's inventory request and
applies it to the fulfilling stock location. Deliveries are at-least-once;
the stock operations are idempotent per order, so a redelivered task is a
no-op.
"""
import logging
from typing import Any, Dict, Type
from uuid import UUID

from celery import shared_task
from django.conf import settings

from .application import (
    FinalizeInventoryHandler,
    InventoryRequestDTO,
    InventoryRequestHandler,
    ReleaseInventoryHandler,
    ReserveInventoryHandler,
)

logger = logging.getLogger(__name__)


def _default_stock_location_id():
    value = getattr(settings, 'INVENTORY_DEFAULT_STOCK_LOCATION_ID', None)
    return UUID(str(value)) if value else None


def _run(handler_cls: Type[InventoryRequestHandler], payload: Dict[str, Any]) -> dict:
    from .infrastructure.repositories import DjangoStockLocationRepository

    handler = handler_cls(
        stock_location_repository=DjangoStockLocationRepository(),
        default_stock_location_id=_default_stock_location_id(),
    )
    try:
        input_dto = InventoryRequestDTO.from_payload(payload)
    except (KeyError, ValueError, TypeError) as e:
        logger.error(f"Malformed inventory payload {payload!r}: {e}")
        return {'success': False, 'error': f'Malformed payload: {e}', 'code': 'Inventory.InvalidPayload'}

    result = handler.execute(input_dto)
    if not result.success:
        logger.error(
            f"{handler.action_name} inventory failed for order {input_dto.order_id}: "
            f"[{result.error_code}] {result.error}"
        )
        return {'success': False, 'error': result.error, 'code': result.error_code}

    return {
        'success': True,
        'order_id': str(result.data.order_id),
        'stock_location_id': str(result.data.stock_location_id) if result.data.stock_location_id else None,
        'processed_lines': result.data.processed_lines,
        'skipped': result.data.skipped,
    }


@shared_task(name='inventory.reserve_order_inventory')
def reserve_order_inventory(payload: Dict[str, Any]) -> dict:
    """Reserve stock for an order that entered payment."""
    return _run(ReserveInventoryHandler, payload)


@shared_task(name='inventory.finalize_order_inventory')
def finalize_order_inventory(payload: Dict[str, Any]) -> dict:
    """Unstock a completed order's lines, consuming its reservations."""
    return _run(FinalizeInventoryHandler, payload)


@shared_task(name='inventory.release_order_inventory')
def release_order_inventory(payload: Dict[str, Any]) -> dict:
    """Release the reservations of a canceled order."""
    return _run(ReleaseInventoryHandler, payload)
