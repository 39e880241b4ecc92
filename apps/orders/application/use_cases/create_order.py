"""
Create order use case.
"""
import logging
from dataclasses import dataclass

from shared.application import UseCase, UseCaseResult
from ...domain.entities import Order
from ...domain.repositories import OrderRepository
from ..dtos import CreateOrderDTO, OrderDTO

logger = logging.getLogger(__name__)


@dataclass
class CreateOrderUseCase(UseCase[CreateOrderDTO, OrderDTO]):
    """Use case for opening a new cart."""

    order_repository: OrderRepository

    def execute(self, input_dto: CreateOrderDTO) -> UseCaseResult[OrderDTO]:
        result = Order.create(
            store_id=input_dto.store_id,
            currency=input_dto.currency,
            user_id=input_dto.user_id,
            email=input_dto.email,
        )
        if result.is_error:
            return UseCaseResult.from_error(result.error)

        order = self.order_repository.save(result.value)
        logger.info(f"Created order {order.number} for store {order.store_id}")
        return UseCaseResult.ok(OrderDTO.from_entity(order))
