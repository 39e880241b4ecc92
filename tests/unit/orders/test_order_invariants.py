"""
Diagnostic invariant checks on the order aggregate.
"""
from uuid import uuid4

from apps.orders.domain.entities import OrderAdjustment
from apps.orders.domain.value_objects import OrderState


def codes(order):
    return [v.code for v in order.invariant_violations()]


class TestValidateInvariants:

    def test_consistent_order_passes(self, cart_with_item):
        cart_with_item.add_adjustment(-100, "Credit").unwrap()

        assert cart_with_item.validate_invariants().is_success
        assert codes(cart_with_item) == []

    def test_tampered_item_total(self, cart_with_item):
        cart_with_item.item_total_cents = 1

        result = cart_with_item.validate_invariants()

        assert result.code == "Order.InconsistentItemTotal"
        assert result.error.expected == 2000
        assert result.error.actual == 1
        # the grand total no longer adds up either
        assert "Order.InconsistentTotal" in codes(cart_with_item)

    def test_tampered_total(self, cart_with_item):
        cart_with_item.total_cents += 5

        assert codes(cart_with_item) == ["Order.InconsistentTotal"]

    def test_adjustment_total_ignores_ineligible(self, cart_with_item):
        cart_with_item.adjustments.append(OrderAdjustment.create(
            order_id=cart_with_item.id, amount_cents=-300, description="Hidden", eligible=False,
        ).unwrap())

        assert codes(cart_with_item) == []

        cart_with_item.adjustments[-1].eligible = True

        assert "Order.InconsistentAdjustmentTotal" in codes(cart_with_item)

    def test_line_quantity_below_minimum(self, cart_with_item):
        line = cart_with_item.line_items[0]
        line.quantity = 0
        cart_with_item.recalculate_totals()

        assert codes(cart_with_item) == ["Order.InvalidLineItemQuantity"]

    def test_missing_timestamps(self, cart_with_item):
        cart_with_item.cancel().unwrap()
        cart_with_item.canceled_at = None

        assert codes(cart_with_item) == ["Order.MissingCancellationTimestamp"]

        cart_with_item.state = OrderState.COMPLETE

        assert codes(cart_with_item) == ["Order.MissingCompletionTimestamp"]

    def test_over_refunded_payment(self, order_in_state):
        order = order_in_state(OrderState.PAYMENT)
        payment = order.add_payment(order.total_cents, None, "card").unwrap()
        payment.refunded_amount_cents = payment.amount_cents + 1

        assert codes(order) == ["Order.InconsistentPaymentRefund"]

    def test_orphaned_promotion_adjustment(self, cart_with_item):
        cart_with_item.adjustments.append(OrderAdjustment.create(
            order_id=cart_with_item.id, amount_cents=0, description="Stale", promotion_id=uuid4(),
        ).unwrap())

        assert codes(cart_with_item) == ["Order.OrphanedPromotionAdjustment"]

    def test_reports_every_violation(self, cart_with_item):
        cart_with_item.item_total_cents = 0
        cart_with_item.adjustment_total_cents = 7
        cart_with_item.total_cents = -1

        assert codes(cart_with_item) == [
            "Order.InconsistentItemTotal",
            "Order.InconsistentAdjustmentTotal",
            "Order.InconsistentTotal",
        ]
