"""
Payment state machine, idempotency and refunds.
"""
from uuid import uuid4

import pytest

from apps.orders.domain.entities import Payment
from apps.orders.domain.events import (
    PaymentAuthorized,
    PaymentCaptured,
    PaymentCreated,
    PaymentPartiallyRefunded,
    PaymentRefunded,
)
from apps.orders.domain.value_objects import OrderState, PaymentState


@pytest.fixture
def payment():
    return Payment.create(
        order_id=uuid4(),
        amount_cents=1000,
        currency="usd",
        payment_method_id=uuid4(),
        payment_method_type="card",
    ).unwrap()


@pytest.fixture
def captured(payment):
    payment.authorize("txn_1").unwrap()
    payment.capture().unwrap()
    return payment


class TestPaymentCreation:

    def test_create_pending(self, payment):
        assert payment.state == PaymentState.PENDING
        assert payment.currency == "USD"
        assert isinstance(payment.domain_events[0], PaymentCreated)

    @pytest.mark.parametrize("kwargs, code", [
        ({"amount_cents": -1}, "Payment.InvalidAmountCents"),
        ({"currency": "US"}, "Order.InvalidCurrency"),
        ({"payment_method_type": "  "}, "Payment.PaymentMethodType.Required"),
        ({"payment_method_type": "x" * 101}, "Payment.PaymentMethodType.TooLong"),
    ])
    def test_create_validation(self, kwargs, code):
        params = dict(
            order_id=uuid4(),
            amount_cents=1000,
            currency="USD",
            payment_method_id=None,
            payment_method_type="card",
        )
        params.update(kwargs)

        assert Payment.create(**params).code == code


class TestAuthorizeAndCapture:

    def test_happy_path(self, payment):
        assert payment.start_authorizing().is_success
        assert payment.authorize("txn_1", gateway_auth_code="A1").is_success
        assert payment.start_capturing().is_success
        assert payment.capture().is_success

        assert payment.state == PaymentState.COMPLETED
        assert payment.reference_transaction_id == "txn_1"
        assert payment.authorized_at is not None
        assert payment.captured_at is not None
        assert payment.is_completed

    def test_capture_requires_authorization(self, payment):
        assert payment.capture("txn_1").code == "Payment.AuthorizationRequired"
        assert payment.start_capturing().code == "Payment.AuthorizationRequired"
        assert payment.state == PaymentState.PENDING

    def test_authorize_requires_reference(self, payment):
        assert payment.authorize("").code == "Payment.ReferenceTransactionId.Required"

    def test_late_authorize_after_capture_is_a_no_op(self, captured):
        captured.clear_domain_events()

        assert captured.authorize("txn_late").is_success
        assert captured.state == PaymentState.COMPLETED
        assert captured.reference_transaction_id == "txn_1"
        assert captured.domain_events == []

    def test_duplicate_capture_emits_once(self, payment):
        payment.authorize("txn_1").unwrap()
        payment.capture(idempotency_key="cap-1").unwrap()
        payment.capture(idempotency_key="cap-1").unwrap()

        captures = [e for e in payment.domain_events if isinstance(e, PaymentCaptured)]
        assert len(captures) == 1

    def test_different_idempotency_key_conflicts(self, payment):
        payment.authorize("txn_1", idempotency_key="k1").unwrap()

        result = payment.capture(idempotency_key="k2")

        assert result.code == "Payment.IdempotencyKeyConflict"
        assert payment.state == PaymentState.AUTHORIZED

    def test_failed_validation_does_not_adopt_key(self, payment):
        assert payment.authorize("", idempotency_key="k1").is_error

        assert payment.idempotency_key is None
        assert payment.authorize("txn_1", idempotency_key="k2").is_success
        assert payment.idempotency_key == "k2"

    def test_authorize_from_failed_is_invalid(self, payment):
        payment.mark_as_failed("declined").unwrap()

        assert payment.authorize("txn_1").code == "Payment.InvalidStateTransition"


class TestVoidAndFail:

    def test_void_pending(self, payment):
        assert payment.void().is_success
        assert payment.state == PaymentState.VOID
        assert payment.voided_at is not None
        assert not payment.counts_toward_total
        assert payment.void().is_success

    def test_cannot_void_captured(self, captured):
        assert captured.void().code == "Payment.CannotVoidCaptured"

    def test_cannot_void_failed(self, payment):
        payment.mark_as_failed("declined").unwrap()

        assert payment.void().code == "Payment.InvalidStateTransition"

    def test_mark_as_failed(self, payment):
        result = payment.mark_as_failed("declined", gateway_error_code="card_declined")

        assert result.is_success
        assert payment.state == PaymentState.FAILED
        assert payment.failure_reason == "declined"
        assert payment.gateway_error_code == "card_declined"
        assert payment.mark_as_failed("declined again").is_success
        assert payment.failure_reason == "declined"

    def test_cannot_fail_captured(self, captured):
        assert captured.mark_as_failed("late").code == "Payment.InvalidStateTransition"


class TestRefund:

    def test_partial_then_full(self, captured):
        assert captured.refund(400, reason="damaged").is_success
        assert captured.state == PaymentState.PARTIALLY_REFUNDED
        assert captured.refundable_amount_cents == 600
        assert not captured.is_completed

        assert captured.refund(600).is_success
        assert captured.state == PaymentState.REFUNDED
        assert not captured.is_completed

        kinds = [type(e) for e in captured.domain_events]
        assert PaymentPartiallyRefunded in kinds
        assert PaymentRefunded in kinds

    def test_refund_more_than_remaining(self, captured):
        captured.refund(700).unwrap()

        result = captured.refund(301)

        assert result.code == "Payment.PartialRefundExceedsAmount"
        assert result.error.available_cents == 300
        assert captured.refunded_amount_cents == 700

    @pytest.mark.parametrize("amount", [0, -5])
    def test_refund_amount_must_be_positive(self, captured, amount):
        assert captured.refund(amount).code == "Payment.InvalidAmountCents"

    def test_cannot_refund_uncaptured(self, payment):
        payment.authorize("txn_1").unwrap()

        assert payment.refund(100).code == "Payment.CannotRefundNonCompleted"

    def test_retried_refund_key_applies_once(self, captured):
        captured.refund(250, idempotency_key="refund-1").unwrap()
        captured.refund(250, idempotency_key="refund-1").unwrap()

        assert captured.refunded_amount_cents == 250
        assert captured.refund(250, idempotency_key="refund-2").is_success
        assert captured.refunded_amount_cents == 500
        assert captured.idempotency_key is None

    def test_refund_with_conflicting_key(self, payment):
        payment.authorize("txn_1", idempotency_key="k1").unwrap()
        payment.capture(idempotency_key="k1").unwrap()

        result = payment.refund(100, idempotency_key="other")

        assert result.code == "Payment.IdempotencyKeyConflict"
        assert payment.state == PaymentState.COMPLETED
        assert payment.refunded_amount_cents == 0
        assert payment.refund_keys == []

    def test_refund_with_stored_key_is_retried_once(self, payment):
        payment.authorize("txn_1", idempotency_key="k1").unwrap()
        payment.capture(idempotency_key="k1").unwrap()

        assert payment.refund(100, idempotency_key="k1").is_success
        assert payment.refund(100, idempotency_key="k1").is_success
        assert payment.refunded_amount_cents == 100
        assert payment.idempotency_key == "k1"

    def test_refund_after_full_refund_is_a_no_op(self, captured):
        captured.refund(1000).unwrap()

        assert captured.refund(1).is_success
        assert captured.refunded_amount_cents == 1000


class TestOrderPayments:

    def test_add_payment_is_idempotent_per_key(self, order_in_state):
        order = order_in_state(OrderState.PAYMENT)
        first = order.add_payment(order.total_cents, None, "card", idempotency_key="pay-1").unwrap()
        second = order.add_payment(order.total_cents, None, "card", idempotency_key="pay-1").unwrap()

        assert first is second
        assert len(order.payments) == 1

    def test_add_payment_rejects_negative_amount(self, order_in_state):
        order = order_in_state(OrderState.PAYMENT)

        assert order.add_payment(-1, None, "card").code == "Order.InvalidAmountCents"

    def test_payment_events_surface_on_the_order(self, order_in_state):
        order = order_in_state(OrderState.PAYMENT)
        order.clear_domain_events()
        payment = order.add_payment(order.total_cents, None, "card").unwrap()
        payment.authorize("txn_1").unwrap()

        kinds = [type(e) for e in order.domain_events]
        assert kinds == [PaymentCreated, PaymentAuthorized]
        order.clear_domain_events()
        assert payment.domain_events == []

    def test_voided_payment_no_longer_covers_total(self, order_in_state):
        order = order_in_state(OrderState.PAYMENT)
        payment = order.add_payment(order.total_cents, None, "card").unwrap()
        assert order.counted_payment_total_cents == order.total_cents

        payment.void().unwrap()

        assert order.counted_payment_total_cents == 0
        assert order.next().code == "Order.InsufficientPayment"
