"""
In-memory implementation of OrderRepository.
"""
import copy
import logging
from typing import Dict, Optional
from uuid import UUID

from shared.domain import ConcurrencyConflictError
from shared.infrastructure.events import DomainEventDispatcher
from ...domain.entities import Order
from ...domain.repositories import OrderRepository

logger = logging.getLogger(__name__)


class InMemoryOrderRepository(OrderRepository):
    """
    Dictionary-backed repository with the same version check as the
    database implementation. Events are published right after the
    (instantaneous) commit.
    """

    def __init__(self, dispatcher: Optional[DomainEventDispatcher] = None):
        self.dispatcher = dispatcher
        self._orders: Dict[UUID, Order] = {}

    def save(self, order: Order) -> Order:
        stored = self._orders.get(order.id)
        stored_version = stored.version if stored else 0
        if stored_version != order.version:
            raise ConcurrencyConflictError("Order", str(order.id), order.version)

        order.version += 1
        events = order.clear_domain_events()
        self._orders[order.id] = copy.deepcopy(order)
        if self.dispatcher is not None:
            self.dispatcher.publish(events)
        return order

    def find_by_id(self, order_id: UUID) -> Optional[Order]:
        order = self._orders.get(order_id)
        return copy.deepcopy(order) if order else None

    def find_by_number(self, number: str) -> Optional[Order]:
        for order in self._orders.values():
            if str(order.number) == number:
                return copy.deepcopy(order)
        return None

    def delete(self, order_id: UUID) -> bool:
        return self._orders.pop(order_id, None) is not None
