"""
Checkout detail use cases: addresses and shipping method.
"""
from dataclasses import dataclass

from shared.application import UseCaseResult
from shared.domain import Result
from ...domain.exceptions import AddressRequiredError, ShippingMethodNotFoundError
from ...domain.repositories import ShippingMethodCatalog
from ..dtos import OrderDTO, SetAddressesDTO, SetShippingMethodDTO
from .base import OrderUseCase


@dataclass
class SetAddressesUseCase(OrderUseCase[SetAddressesDTO]):
    """Use case for setting the shipping and/or billing address."""

    def execute(self, input_dto: SetAddressesDTO) -> UseCaseResult[OrderDTO]:
        loaded = self.load(input_dto.order_id)
        if loaded.is_error:
            return UseCaseResult.from_error(loaded.error)
        order = loaded.value

        if input_dto.ship_address is None and input_dto.bill_address is None:
            return UseCaseResult.from_error(AddressRequiredError())

        result = Result.ok(order)
        if input_dto.bill_address is not None:
            result = order.set_billing_address(input_dto.bill_address.to_value_object())
        if result.is_success and input_dto.ship_address is not None:
            result = order.set_shipping_address(input_dto.ship_address.to_value_object())
        return self.commit(order, result)


@dataclass
class SetShippingMethodUseCase(OrderUseCase[SetShippingMethodDTO]):

    shipping_method_catalog: ShippingMethodCatalog

    def execute(self, input_dto: SetShippingMethodDTO) -> UseCaseResult[OrderDTO]:
        loaded = self.load(input_dto.order_id)
        if loaded.is_error:
            return UseCaseResult.from_error(loaded.error)
        order = loaded.value

        method = self.shipping_method_catalog.find_by_id(input_dto.shipping_method_id)
        if method is None:
            return UseCaseResult.from_error(ShippingMethodNotFoundError(str(input_dto.shipping_method_id)))
        return self.commit(order, order.set_shipping_method(method))
