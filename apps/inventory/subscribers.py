"""
Wires the order's inventory events to the inventory Celery tasks.

Referenced from ``settings.DOMAIN_EVENT_SUBSCRIBERS``.
"""
import logging

from apps.orders.domain.events import FinalizeInventory, ReleaseInventory, ReserveInventory
from shared.infrastructure.events import DomainEventDispatcher
from .application import InventoryRequestDTO
from .tasks import finalize_order_inventory, release_order_inventory, reserve_order_inventory

logger = logging.getLogger(__name__)


def _enqueue(task, event) -> None:
    payload = InventoryRequestDTO.from_event(event).to_payload()
    task.delay(payload)
    logger.info(f"Enqueued {task.name} for order {event.order_id}")


def on_reserve_inventory(event: ReserveInventory) -> None:
    _enqueue(reserve_order_inventory, event)


def on_finalize_inventory(event: FinalizeInventory) -> None:
    _enqueue(finalize_order_inventory, event)


def on_release_inventory(event: ReleaseInventory) -> None:
    _enqueue(release_order_inventory, event)


def register(dispatcher: DomainEventDispatcher) -> None:
    dispatcher.subscribe(ReserveInventory, on_reserve_inventory)
    dispatcher.subscribe(FinalizeInventory, on_finalize_inventory)
    dispatcher.subscribe(ReleaseInventory, on_release_inventory)
