"""
Shared flow of order use cases: load, mutate, save.
"""
import logging
from dataclasses import dataclass
from typing import TypeVar
from uuid import UUID

from shared.application import UseCase, UseCaseResult
from shared.domain import Result
from ...domain.entities import Order
from ...domain.exceptions import OrderNotFoundError
from ...domain.repositories import OrderRepository
from ..dtos import OrderDTO

logger = logging.getLogger(__name__)

InputDTO = TypeVar('InputDTO')


@dataclass
class OrderUseCase(UseCase[InputDTO, OrderDTO]):
    """
    Base class for use cases operating on one stored order.

    A failed domain ``Result`` is returned without saving, so nothing the
    aggregate did in memory is persisted or published.
    """

    order_repository: OrderRepository

    def load(self, order_id: UUID) -> Result[Order]:
        order = self.order_repository.find_by_id(order_id)
        if order is None:
            return Result.fail(OrderNotFoundError(str(order_id)))
        return Result.ok(order)

    def commit(self, order: Order, result: Result) -> UseCaseResult[OrderDTO]:
        if result.is_error:
            logger.info(
                f"{type(self).__name__} rejected for order {order.id}: "
                f"[{result.code}] {result.error.message}"
            )
            return UseCaseResult.from_error(result.error)
        saved = self.order_repository.save(order)
        return UseCaseResult.ok(OrderDTO.from_entity(saved))
