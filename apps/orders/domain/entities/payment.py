"""
Payment entity.

A payment is one funding attempt for an order. It moves through its own state
machine independently of the order; the order only reads payment states to
gate checkout.

Gateway callbacks may arrive twice or out of order, so every transition:

* rejects a call whose idempotency key differs from the stored one,
* succeeds without change when the payment is already in (or past) the
  requested state,
* rejects genuinely invalid transitions with a typed error.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from shared.domain import AggregateRoot, Result, utcnow
from ..constraints import (
    AMOUNT_CENTS_MIN_VALUE,
    CURRENCY_CODE_LENGTH,
    FAILURE_REASON_MAX_LENGTH,
    GATEWAY_AUTH_CODE_MAX_LENGTH,
    GATEWAY_ERROR_CODE_MAX_LENGTH,
    PAYMENT_METHOD_TYPE_MAX_LENGTH,
    REFERENCE_TRANSACTION_ID_MAX_LENGTH,
)
from ..events.payments import (
    PaymentAuthorized,
    PaymentAuthorizing,
    PaymentCaptured,
    PaymentCapturing,
    PaymentCreated,
    PaymentFailed,
    PaymentPartiallyRefunded,
    PaymentRefunded,
    PaymentVoided,
)
from ..exceptions import (
    AuthorizationRequiredError,
    CannotRefundNonCompletedError,
    CannotVoidCapturedError,
    FieldRequiredError,
    FieldTooLongError,
    IdempotencyKeyConflictError,
    InvalidAmountCentsError,
    InvalidCurrencyError,
    PartialRefundExceedsAmountError,
    PaymentInvalidStateTransitionError,
)
from ..value_objects.payment_state import PaymentState

_PREFIX = "Payment"


def _check_length(field_name: str, value: Optional[str], max_length: int):
    if value is not None and len(value) > max_length:
        return FieldTooLongError(_PREFIX, field_name, max_length)
    return None


@dataclass(eq=False, kw_only=True)
class Payment(AggregateRoot):
    """Payment entity."""
    order_id: UUID
    amount_cents: int
    currency: str
    payment_method_id: Optional[UUID] = None
    payment_method_type: str = ""
    state: PaymentState = PaymentState.PENDING
    reference_transaction_id: Optional[str] = None
    gateway_auth_code: Optional[str] = None
    gateway_error_code: Optional[str] = None
    failure_reason: Optional[str] = None
    idempotency_key: Optional[str] = None
    refunded_amount_cents: int = 0
    refund_keys: List[str] = field(default_factory=list)
    authorized_at: Optional[datetime] = None
    captured_at: Optional[datetime] = None
    voided_at: Optional[datetime] = None
    refunded_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        order_id: UUID,
        amount_cents: int,
        currency: str,
        payment_method_id: Optional[UUID],
        payment_method_type: str,
        idempotency_key: Optional[str] = None,
    ) -> Result['Payment']:
        """Factory method to create a pending payment."""
        if amount_cents is None or amount_cents < AMOUNT_CENTS_MIN_VALUE:
            return Result.fail(InvalidAmountCentsError(_PREFIX, AMOUNT_CENTS_MIN_VALUE))
        if not currency or len(currency.strip()) != CURRENCY_CODE_LENGTH:
            return Result.fail(InvalidCurrencyError(currency))
        if not payment_method_type or not payment_method_type.strip():
            return Result.fail(FieldRequiredError(_PREFIX, "PaymentMethodType"))
        error = _check_length("PaymentMethodType", payment_method_type, PAYMENT_METHOD_TYPE_MAX_LENGTH)
        if error:
            return Result.fail(error)

        payment = cls(
            order_id=order_id,
            amount_cents=amount_cents,
            currency=currency.strip().upper(),
            payment_method_id=payment_method_id,
            payment_method_type=payment_method_type.strip(),
            idempotency_key=idempotency_key,
        )
        payment.add_domain_event(
            PaymentCreated(
                payment_id=payment.id,
                order_id=order_id,
                amount_cents=amount_cents,
                idempotency_key=idempotency_key,
            )
        )
        return Result.ok(payment)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start_authorizing(self, idempotency_key: Optional[str] = None) -> Result['Payment']:
        """Mark the payment as sent to the gateway for authorization."""
        conflict = self._check_idempotency(idempotency_key)
        if conflict:
            return conflict
        if self.state in (PaymentState.AUTHORIZING, PaymentState.AUTHORIZED) or self.state.is_captured:
            return Result.ok(self)
        if self.state != PaymentState.PENDING:
            return self._invalid_transition(PaymentState.AUTHORIZING)

        self._change_state(PaymentState.AUTHORIZING, idempotency_key)
        self.add_domain_event(PaymentAuthorizing(payment_id=self.id, order_id=self.order_id))
        return Result.ok(self)

    def authorize(
        self,
        reference_transaction_id: str,
        gateway_auth_code: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> Result['Payment']:
        """Record a successful authorization."""
        conflict = self._check_idempotency(idempotency_key)
        if conflict:
            return conflict
        if self.state == PaymentState.AUTHORIZED or self.state == PaymentState.CAPTURING or self.state.is_captured:
            return Result.ok(self)
        if self.state not in (PaymentState.PENDING, PaymentState.AUTHORIZING):
            return self._invalid_transition(PaymentState.AUTHORIZED)

        error = (
            self._require_reference(reference_transaction_id)
            or _check_length("GatewayAuthCode", gateway_auth_code, GATEWAY_AUTH_CODE_MAX_LENGTH)
        )
        if error:
            return Result.fail(error)

        self.reference_transaction_id = reference_transaction_id
        self.gateway_auth_code = gateway_auth_code
        self.authorized_at = utcnow()
        self._change_state(PaymentState.AUTHORIZED, idempotency_key)
        self.add_domain_event(
            PaymentAuthorized(
                payment_id=self.id,
                order_id=self.order_id,
                reference_transaction_id=reference_transaction_id,
            )
        )
        return Result.ok(self)

    def start_capturing(self, idempotency_key: Optional[str] = None) -> Result['Payment']:
        """Mark an authorized payment as sent to the gateway for capture."""
        conflict = self._check_idempotency(idempotency_key)
        if conflict:
            return conflict
        if self.state == PaymentState.CAPTURING or self.state.is_captured:
            return Result.ok(self)
        if self.state in (PaymentState.PENDING, PaymentState.AUTHORIZING):
            return Result.fail(AuthorizationRequiredError(self.state.value))
        if self.state != PaymentState.AUTHORIZED:
            return self._invalid_transition(PaymentState.CAPTURING)

        self._change_state(PaymentState.CAPTURING, idempotency_key)
        self.add_domain_event(PaymentCapturing(payment_id=self.id, order_id=self.order_id))
        return Result.ok(self)

    def capture(
        self,
        reference_transaction_id: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> Result['Payment']:
        """Record a successful capture; the payment becomes completed."""
        conflict = self._check_idempotency(idempotency_key)
        if conflict:
            return conflict
        if self.state.is_captured:
            return Result.ok(self)
        if self.state in (PaymentState.PENDING, PaymentState.AUTHORIZING):
            return Result.fail(AuthorizationRequiredError(self.state.value))
        if self.state not in (PaymentState.AUTHORIZED, PaymentState.CAPTURING):
            return self._invalid_transition(PaymentState.COMPLETED)

        reference = reference_transaction_id or self.reference_transaction_id
        error = self._require_reference(reference)
        if error:
            return Result.fail(error)

        self.reference_transaction_id = reference
        self.captured_at = utcnow()
        self._change_state(PaymentState.COMPLETED, idempotency_key)
        self.add_domain_event(
            PaymentCaptured(
                payment_id=self.id,
                order_id=self.order_id,
                reference_transaction_id=reference,
            )
        )
        return Result.ok(self)

    def void(self, idempotency_key: Optional[str] = None) -> Result['Payment']:
        """Cancel an uncaptured payment."""
        conflict = self._check_idempotency(idempotency_key)
        if conflict:
            return conflict
        if self.state == PaymentState.VOID:
            return Result.ok(self)
        if self.state.is_captured:
            return Result.fail(CannotVoidCapturedError(self.state.value))
        if self.state == PaymentState.FAILED:
            return self._invalid_transition(PaymentState.VOID)

        self.voided_at = utcnow()
        self._change_state(PaymentState.VOID, idempotency_key)
        self.add_domain_event(
            PaymentVoided(
                payment_id=self.id,
                order_id=self.order_id,
                reference_transaction_id=self.reference_transaction_id,
            )
        )
        return Result.ok(self)

    def refund(
        self,
        amount_cents: int,
        reason: str = "",
        idempotency_key: Optional[str] = None,
    ) -> Result['Payment']:
        """
        Refund part or all of a captured payment.

        A key different from the payment's stored key is a conflict. When no
        key is stored, each refund may carry its own; a key already used for
        an earlier refund on this payment is treated as a retry. Refunds do
        not adopt the key as the payment's stored key.
        """
        conflict = self._check_idempotency(idempotency_key)
        if conflict:
            return conflict
        if self.state == PaymentState.REFUNDED:
            return Result.ok(self)
        if idempotency_key and idempotency_key in self.refund_keys:
            return Result.ok(self)
        if self.state not in (PaymentState.COMPLETED, PaymentState.PARTIALLY_REFUNDED):
            return Result.fail(CannotRefundNonCompletedError(self.state.value))
        if amount_cents is None or amount_cents <= 0:
            return Result.fail(InvalidAmountCentsError(_PREFIX, 1))

        available = self.refundable_amount_cents
        if amount_cents > available:
            return Result.fail(PartialRefundExceedsAmountError(amount_cents, available))

        self.refunded_amount_cents += amount_cents
        self.refunded_at = utcnow()
        if idempotency_key:
            self.refund_keys.append(idempotency_key)

        if self.refunded_amount_cents == self.amount_cents:
            self._change_state(PaymentState.REFUNDED)
            event_cls = PaymentRefunded
        else:
            self._change_state(PaymentState.PARTIALLY_REFUNDED)
            event_cls = PaymentPartiallyRefunded
        self.add_domain_event(
            event_cls(
                payment_id=self.id,
                order_id=self.order_id,
                refund_amount_cents=amount_cents,
                reference_transaction_id=self.reference_transaction_id,
                reason=reason or "",
            )
        )
        return Result.ok(self)

    def mark_as_failed(
        self,
        error_message: str,
        gateway_error_code: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> Result['Payment']:
        """Record a gateway failure."""
        conflict = self._check_idempotency(idempotency_key)
        if conflict:
            return conflict
        if self.state == PaymentState.FAILED:
            return Result.ok(self)
        if self.state.is_captured or self.state == PaymentState.VOID:
            return self._invalid_transition(PaymentState.FAILED)

        error = (
            _check_length("FailureReason", error_message, FAILURE_REASON_MAX_LENGTH)
            or _check_length("GatewayErrorCode", gateway_error_code, GATEWAY_ERROR_CODE_MAX_LENGTH)
        )
        if error:
            return Result.fail(error)

        self.failure_reason = error_message
        self.gateway_error_code = gateway_error_code
        self._change_state(PaymentState.FAILED, idempotency_key)
        self.add_domain_event(
            PaymentFailed(
                payment_id=self.id,
                order_id=self.order_id,
                error_message=error_message or "",
                gateway_error_code=gateway_error_code,
            )
        )
        return Result.ok(self)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_idempotency(self, idempotency_key: Optional[str]) -> Optional[Result['Payment']]:
        """Reject a key that differs from the stored one."""
        if idempotency_key and self.idempotency_key and self.idempotency_key != idempotency_key:
            return Result.fail(IdempotencyKeyConflictError(self.idempotency_key, idempotency_key))
        return None

    def _require_reference(self, reference_transaction_id: Optional[str]):
        if not reference_transaction_id or not reference_transaction_id.strip():
            return FieldRequiredError(_PREFIX, "ReferenceTransactionId")
        return _check_length(
            "ReferenceTransactionId", reference_transaction_id, REFERENCE_TRANSACTION_ID_MAX_LENGTH
        )

    def _invalid_transition(self, target: PaymentState) -> Result['Payment']:
        return Result.fail(PaymentInvalidStateTransitionError(self.state.value, target.value))

    def _change_state(self, new_state: PaymentState, idempotency_key: Optional[str] = None) -> None:
        if idempotency_key and not self.idempotency_key:
            self.idempotency_key = idempotency_key
        self.state = new_state
        self.touch()

    @property
    def refundable_amount_cents(self) -> int:
        return self.amount_cents - self.refunded_amount_cents

    @property
    def counts_toward_total(self) -> bool:
        return self.state.counts_toward_total

    @property
    def is_completed(self) -> bool:
        """Captured with nothing refunded."""
        return self.state == PaymentState.COMPLETED
