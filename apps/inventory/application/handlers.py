"""
Inventory request handlers.

Each handler applies one order's request to a single stock location. The
location is saved only when every line succeeded, so a failed request leaves
stock untouched and can be retried as a whole.
"""
import logging
from abc import abstractmethod
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from shared.application import UseCase, UseCaseResult
from shared.domain import Result
from ..domain.entities import StockLocation
from ..domain.exceptions import StockLocationNotFoundError
from ..domain.repositories import StockLocationRepository
from ..domain.value_objects import MovementOrigin
from .dtos import InventoryLineDTO, InventoryRequestDTO, InventoryResultDTO

logger = logging.getLogger(__name__)


@dataclass
class InventoryRequestHandler(UseCase[InventoryRequestDTO, InventoryResultDTO]):
    """Shared flow: resolve the location, apply every line, save once."""

    stock_location_repository: StockLocationRepository
    default_stock_location_id: Optional[UUID] = None

    action_name = "inventory"

    def execute(self, input_dto: InventoryRequestDTO) -> UseCaseResult[InventoryResultDTO]:
        location_id = input_dto.stock_location_id or self.default_stock_location_id
        if location_id is None:
            location = self.stock_location_repository.find_default()
            if location is None:
                logger.warning(
                    f"No stock location for {self.action_name} of order {input_dto.order_id}; skipping"
                )
                return UseCaseResult.ok(InventoryResultDTO(
                    order_id=input_dto.order_id,
                    stock_location_id=None,
                    processed_lines=0,
                    skipped=True,
                ))
        else:
            location = self.stock_location_repository.find_by_id(location_id)
            if location is None:
                return UseCaseResult.from_error(StockLocationNotFoundError(str(location_id)))

        origin = MovementOrigin.for_order(input_dto.order_id)
        for line in input_dto.lines:
            result = self.apply_line(location, line, origin)
            if result.is_error:
                logger.warning(
                    f"{self.action_name} failed for order {input_dto.order_id}, "
                    f"variant {line.variant_id}: {result.error.message}"
                )
                return UseCaseResult.from_error(result.error)

        self.stock_location_repository.save(location)
        logger.info(
            f"{self.action_name} applied for order {input_dto.order_id} "
            f"at location {location.id} ({len(input_dto.lines)} lines)"
        )
        return UseCaseResult.ok(InventoryResultDTO(
            order_id=input_dto.order_id,
            stock_location_id=location.id,
            processed_lines=len(input_dto.lines),
        ))

    @abstractmethod
    def apply_line(
        self,
        location: StockLocation,
        line: InventoryLineDTO,
        origin: MovementOrigin,
    ) -> Result[StockLocation]:
        pass


@dataclass
class ReserveInventoryHandler(InventoryRequestHandler):
    """Hold stock for an order entering payment."""

    action_name = "Reserve"

    def apply_line(self, location, line, origin):
        return location.reserve(line.variant_id, line.quantity, origin)


@dataclass
class FinalizeInventoryHandler(InventoryRequestHandler):
    """Turn a completed order's reservations into permanent decrements."""

    action_name = "Finalize"

    def apply_line(self, location, line, origin):
        return location.unstock(line.variant_id, line.quantity, origin)


@dataclass
class ReleaseInventoryHandler(InventoryRequestHandler):
    """Give back the reservations of a canceled order."""

    action_name = "Release"

    def apply_line(self, location, line, origin):
        return location.release(line.variant_id, origin)
