"""
Stock location repository interface.
"""
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from ..entities.stock_location import StockLocation


class StockLocationRepository(ABC):
    """Abstract repository for StockLocation aggregate."""

    @abstractmethod
    def save(self, location: StockLocation) -> StockLocation:
        """Save a stock location with its items, reservations and movements."""
        pass

    @abstractmethod
    def find_by_id(self, location_id: UUID) -> Optional[StockLocation]:
        """Find a stock location by ID."""
        pass

    @abstractmethod
    def find_default(self) -> Optional[StockLocation]:
        """Find the location flagged as default."""
        pass

    @abstractmethod
    def delete(self, location_id: UUID) -> bool:
        """Delete a stock location."""
        pass
