"""
Line item use cases.
"""
from dataclasses import dataclass

from shared.application import UseCaseResult
from ...domain.exceptions import VariantNotFoundError
from ...domain.repositories import VariantCatalog
from ..dtos import AddLineItemDTO, OrderDTO, RemoveLineItemDTO, UpdateLineItemQuantityDTO
from .base import OrderUseCase


@dataclass
class AddLineItemUseCase(OrderUseCase[AddLineItemDTO]):
    """Use case for adding a variant to the cart."""

    variant_catalog: VariantCatalog

    def execute(self, input_dto: AddLineItemDTO) -> UseCaseResult[OrderDTO]:
        loaded = self.load(input_dto.order_id)
        if loaded.is_error:
            return UseCaseResult.from_error(loaded.error)
        order = loaded.value

        variant = self.variant_catalog.find_by_id(input_dto.variant_id)
        if variant is None:
            return UseCaseResult.from_error(VariantNotFoundError(str(input_dto.variant_id)))

        return self.commit(order, order.add_line_item(variant, input_dto.quantity))


@dataclass
class RemoveLineItemUseCase(OrderUseCase[RemoveLineItemDTO]):

    def execute(self, input_dto: RemoveLineItemDTO) -> UseCaseResult[OrderDTO]:
        loaded = self.load(input_dto.order_id)
        if loaded.is_error:
            return UseCaseResult.from_error(loaded.error)
        order = loaded.value
        return self.commit(order, order.remove_line_item(input_dto.line_item_id))


@dataclass
class UpdateLineItemQuantityUseCase(OrderUseCase[UpdateLineItemQuantityDTO]):

    def execute(self, input_dto: UpdateLineItemQuantityDTO) -> UseCaseResult[OrderDTO]:
        loaded = self.load(input_dto.order_id)
        if loaded.is_error:
            return UseCaseResult.from_error(loaded.error)
        order = loaded.value
        return self.commit(
            order,
            order.update_line_item_quantity(input_dto.line_item_id, input_dto.quantity),
        )
