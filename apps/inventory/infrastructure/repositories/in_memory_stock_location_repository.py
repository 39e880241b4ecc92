"""
In-memory implementation of StockLocationRepository.
"""
import copy
from typing import Dict, Optional
from uuid import UUID

from shared.infrastructure.events import DomainEventDispatcher
from ...domain.entities import StockLocation
from ...domain.repositories import StockLocationRepository


class InMemoryStockLocationRepository(StockLocationRepository):
    """Dictionary-backed repository; stores deep copies so callers never share state."""

    def __init__(self, dispatcher: Optional[DomainEventDispatcher] = None):
        self.dispatcher = dispatcher
        self._locations: Dict[UUID, StockLocation] = {}

    def save(self, location: StockLocation) -> StockLocation:
        events = location.clear_domain_events()
        self._locations[location.id] = copy.deepcopy(location)
        if self.dispatcher is not None:
            self.dispatcher.publish(events)
        return location

    def find_by_id(self, location_id: UUID) -> Optional[StockLocation]:
        location = self._locations.get(location_id)
        return copy.deepcopy(location) if location else None

    def find_default(self) -> Optional[StockLocation]:
        for location in self._locations.values():
            if location.is_default:
                return copy.deepcopy(location)
        return None

    def delete(self, location_id: UUID) -> bool:
        return self._locations.pop(location_id, None) is not None
