"""
Line item management and total recalculation.
"""
from uuid import uuid4

import pytest

from apps.orders.domain.events import LineItemAdded, LineItemQuantityChanged, LineItemRemoved
from apps.orders.domain.value_objects import OrderState
from tests.fakes import FakeShippingMethod, FakeVariant


def assert_totals_consistent(order):
    assert order.total_cents == (
        order.item_total_cents + order.shipment_total_cents + order.adjustment_total_cents
    )


class TestAddLineItem:

    def test_scenario_two_units_at_ten_dollars(self, order, variant):
        result = order.add_line_item(variant, 2)

        assert result.is_success
        assert order.item_total_cents == 2000
        assert order.total_cents == 2000
        assert order.item_count == 2
        line = result.value
        assert line.subtotal_cents == 2000
        assert line.variant_sku == variant.sku
        assert any(isinstance(e, LineItemAdded) for e in order.domain_events)

    def test_zero_quantity_is_too_few_items(self, order, variant):
        result = order.add_line_item(variant, 0)

        assert result.code == "Order.TooFewItems"
        assert order.line_items == []

    def test_variant_without_price_in_currency_is_not_purchasable(self, order):
        euro_only = FakeVariant(prices={"EUR": 900})

        assert order.add_line_item(euro_only, 1).code == "Order.VariantNotPurchasable"

    def test_missing_variant(self, order):
        assert order.add_line_item(None, 1).code == "Order.VariantRequired"

    def test_same_variant_merges_into_one_line(self, order, variant):
        first = order.add_line_item(variant, 1).unwrap()
        second = order.add_line_item(variant, 3).unwrap()

        assert first is second
        assert len(order.line_items) == 1
        assert order.line_items[0].quantity == 4
        assert order.item_total_cents == 4000
        assert any(
            isinstance(e, LineItemQuantityChanged) and e.new_quantity == 4
            for e in order.domain_events
        )

    def test_only_allowed_in_cart(self, cart_with_item, variant):
        cart_with_item.next().unwrap()

        result = cart_with_item.add_line_item(variant, 1)

        assert result.code == "Order.CannotModifyAfterCart"
        assert cart_with_item.item_total_cents == 2000

    def test_closed_order_cannot_be_modified(self, cart_with_item, variant):
        cart_with_item.cancel().unwrap()

        assert cart_with_item.add_line_item(variant, 1).code == "Order.CannotModifyClosedOrder"


class TestRemoveAndUpdateLineItem:

    def test_add_then_remove_restores_item_total(self, cart_with_item):
        before = cart_with_item.item_total_cents
        extra = cart_with_item.add_line_item(FakeVariant(prices={"USD": 750}), 2).unwrap()

        assert cart_with_item.remove_line_item(extra.id).is_success
        assert cart_with_item.item_total_cents == before
        assert_totals_consistent(cart_with_item)
        assert any(isinstance(e, LineItemRemoved) for e in cart_with_item.domain_events)

    def test_remove_unknown_line(self, cart_with_item):
        assert cart_with_item.remove_line_item(uuid4()).code == "Order.LineItemNotFound"

    def test_update_quantity_recalculates(self, cart_with_item):
        line = cart_with_item.line_items[0]

        assert cart_with_item.update_line_item_quantity(line.id, 5).is_success
        assert cart_with_item.item_total_cents == 5000
        assert_totals_consistent(cart_with_item)

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_update_quantity_below_one(self, cart_with_item, quantity):
        line = cart_with_item.line_items[0]

        assert cart_with_item.update_line_item_quantity(line.id, quantity).code == "Order.TooFewItems"
        assert line.quantity == 2

    def test_update_unknown_line(self, cart_with_item):
        assert cart_with_item.update_line_item_quantity(uuid4(), 2).code == "Order.LineItemNotFound"


class TestTotals:

    def test_total_includes_shipping(self, order_in_state):
        order = order_in_state(OrderState.DELIVERY)
        order.set_shipping_method(FakeShippingMethod(base_cost_cents=799)).unwrap()

        assert order.shipment_total_cents == 799
        assert order.total_cents == 1000 + 799
        assert_totals_consistent(order)

    def test_ineligible_adjustments_are_kept_but_not_counted(self, cart_with_item):
        fee = cart_with_item.add_adjustment(300, "Gift wrap").unwrap()
        assert cart_with_item.total_cents == 2300

        cart_with_item.set_adjustment_eligibility(fee.id, False).unwrap()

        assert cart_with_item.adjustments == [fee]
        assert cart_with_item.adjustment_total_cents == 0
        assert cart_with_item.total_cents == 2000

    def test_recalculation_is_idempotent(self, cart_with_item):
        cart_with_item.add_adjustment(-150, "Loyalty credit").unwrap()
        snapshot = (
            cart_with_item.item_total_cents,
            cart_with_item.adjustment_total_cents,
            cart_with_item.total_cents,
        )

        cart_with_item.recalculate_totals()
        cart_with_item.recalculate_totals()

        assert snapshot == (
            cart_with_item.item_total_cents,
            cart_with_item.adjustment_total_cents,
            cart_with_item.total_cents,
        )

    def test_line_adjustments_count_toward_item_total(self, cart_with_item):
        line = cart_with_item.line_items[0]

        cart_with_item.add_adjustment(-250, "Damaged box", line_item_id=line.id).unwrap()

        assert line.total_cents == 1750
        assert cart_with_item.item_total_cents == 1750
        assert cart_with_item.adjustment_total_cents == 0
        assert cart_with_item.total_cents == 1750

    def test_fully_digital_order_drops_shipping(self, order, variant, digital_variant):
        physical = order.add_line_item(variant, 1).unwrap()
        order.add_line_item(digital_variant, 1).unwrap()
        order.set_shipping_method(FakeShippingMethod(base_cost_cents=500)).unwrap()
        assert order.total_cents == 1000 + 1500 + 500

        order.remove_line_item(physical.id).unwrap()

        assert order.is_fully_digital
        assert order.shipping_method_id is None
        assert order.shipment_total_cents == 0
        assert order.total_cents == 1500
