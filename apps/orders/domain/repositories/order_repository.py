"""
Order repository interface.
"""
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from ..entities.order import Order


class OrderRepository(ABC):
    """
    Abstract repository for the Order aggregate.

    ``save`` persists the whole order graph atomically, bumps ``version`` and
    publishes the drained domain events only after the write has committed.
    A save whose loaded version is stale raises ``ConcurrencyConflictError``.
    """

    @abstractmethod
    def save(self, order: Order) -> Order:
        """Save an order."""
        pass

    @abstractmethod
    def find_by_id(self, order_id: UUID) -> Optional[Order]:
        """Find an order by ID."""
        pass

    @abstractmethod
    def find_by_number(self, number: str) -> Optional[Order]:
        """Find an order by order number."""
        pass

    @abstractmethod
    def delete(self, order_id: UUID) -> bool:
        """Delete an order."""
        pass
