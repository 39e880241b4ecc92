"""
Promotion use cases.
"""
import logging
from dataclasses import dataclass

from shared.application import UseCaseResult
from ...domain.exceptions import PromotionNotFoundError, PromotionRequiredError
from ...domain.repositories import PromotionCatalog
from ..dtos import ApplyPromotionDTO, OrderDTO, OrderIdDTO
from .base import OrderUseCase

logger = logging.getLogger(__name__)


@dataclass
class ApplyPromotionUseCase(OrderUseCase[ApplyPromotionDTO]):
    """Use case for applying a promotion by id or coupon code."""

    promotion_catalog: PromotionCatalog

    def execute(self, input_dto: ApplyPromotionDTO) -> UseCaseResult[OrderDTO]:
        loaded = self.load(input_dto.order_id)
        if loaded.is_error:
            return UseCaseResult.from_error(loaded.error)
        order = loaded.value

        if input_dto.promotion_id is not None:
            promotion = self.promotion_catalog.find_by_id(input_dto.promotion_id)
            missing = str(input_dto.promotion_id)
        elif input_dto.code:
            promotion = self.promotion_catalog.find_by_code(input_dto.code)
            missing = input_dto.code
        else:
            return UseCaseResult.from_error(PromotionRequiredError())
        if promotion is None:
            return UseCaseResult.from_error(PromotionNotFoundError(missing))

        result = self.commit(order, order.apply_promotion(promotion, input_dto.code))
        if result.success:
            logger.info(
                f"Applied promotion {promotion.id} to order {order.number}: "
                f"{order.promotion_total_cents} cents"
            )
        return result


@dataclass
class RemovePromotionUseCase(OrderUseCase[OrderIdDTO]):

    def execute(self, input_dto: OrderIdDTO) -> UseCaseResult[OrderDTO]:
        loaded = self.load(input_dto.order_id)
        if loaded.is_error:
            return UseCaseResult.from_error(loaded.error)
        order = loaded.value
        return self.commit(order, order.remove_promotion())
