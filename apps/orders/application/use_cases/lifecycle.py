"""
Order state machine use cases.
"""
import logging
from dataclasses import dataclass

from shared.application import UseCaseResult
from ..dtos import OrderDTO, OrderIdDTO
from .base import OrderUseCase

logger = logging.getLogger(__name__)


@dataclass
class AdvanceOrderUseCase(OrderUseCase[OrderIdDTO]):
    """Use case for moving an order one checkout step forward."""

    def execute(self, input_dto: OrderIdDTO) -> UseCaseResult[OrderDTO]:
        loaded = self.load(input_dto.order_id)
        if loaded.is_error:
            return UseCaseResult.from_error(loaded.error)
        order = loaded.value

        previous = order.state
        result = self.commit(order, order.next())
        if result.success:
            logger.info(f"Order {order.number} advanced {previous.value} -> {order.state.value}")
        return result


@dataclass
class CancelOrderUseCase(OrderUseCase[OrderIdDTO]):
    """Use case for canceling an order."""

    def execute(self, input_dto: OrderIdDTO) -> UseCaseResult[OrderDTO]:
        loaded = self.load(input_dto.order_id)
        if loaded.is_error:
            return UseCaseResult.from_error(loaded.error)
        order = loaded.value

        result = self.commit(order, order.cancel())
        if result.success:
            logger.info(f"Order {order.number} canceled")
        return result
