"""
Payment use cases.
"""
import logging
from dataclasses import dataclass

from shared.application import UseCaseResult
from ...domain.exceptions import PaymentNotFoundError
from ..dtos import AddPaymentDTO, OrderDTO, PaymentAction, PaymentEventDTO
from .base import OrderUseCase

logger = logging.getLogger(__name__)


@dataclass
class AddPaymentUseCase(OrderUseCase[AddPaymentDTO]):
    """Use case for attaching a pending payment to an order."""

    def execute(self, input_dto: AddPaymentDTO) -> UseCaseResult[OrderDTO]:
        loaded = self.load(input_dto.order_id)
        if loaded.is_error:
            return UseCaseResult.from_error(loaded.error)
        order = loaded.value

        result = order.add_payment(
            amount_cents=input_dto.amount_cents,
            payment_method_id=input_dto.payment_method_id,
            payment_method_type=input_dto.payment_method_type,
            idempotency_key=input_dto.idempotency_key,
        )
        return self.commit(order, result)


@dataclass
class ProcessPaymentEventUseCase(OrderUseCase[PaymentEventDTO]):
    """
    Use case applying a payment gateway callback.

    Callbacks may be duplicated or reordered by the gateway; the payment's
    own transitions decide whether a callback is a retry, a conflict or an
    invalid transition.
    """

    def execute(self, input_dto: PaymentEventDTO) -> UseCaseResult[OrderDTO]:
        loaded = self.load(input_dto.order_id)
        if loaded.is_error:
            return UseCaseResult.from_error(loaded.error)
        order = loaded.value

        payment = order.find_payment(input_dto.payment_id)
        if payment is None:
            return UseCaseResult.from_error(PaymentNotFoundError(str(input_dto.payment_id)))

        key = input_dto.idempotency_key
        if input_dto.action == PaymentAction.AUTHORIZE:
            result = payment.authorize(
                input_dto.reference_transaction_id,
                gateway_auth_code=input_dto.gateway_auth_code,
                idempotency_key=key,
            )
        elif input_dto.action == PaymentAction.CAPTURE:
            result = payment.capture(input_dto.reference_transaction_id, idempotency_key=key)
        elif input_dto.action == PaymentAction.VOID:
            result = payment.void(idempotency_key=key)
        elif input_dto.action == PaymentAction.REFUND:
            result = payment.refund(input_dto.amount_cents, input_dto.reason, idempotency_key=key)
        else:
            result = payment.mark_as_failed(
                input_dto.error_message,
                gateway_error_code=input_dto.gateway_error_code,
                idempotency_key=key,
            )

        response = self.commit(order, result)
        if response.success:
            logger.info(
                f"Payment {payment.id} of order {order.number}: {input_dto.action.value} -> {payment.state.value}"
            )
        return response
