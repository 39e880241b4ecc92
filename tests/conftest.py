"""
Pytest configuration and fixtures.
"""
from uuid import uuid4

import pytest

from apps.orders.domain.entities import Order
from apps.orders.domain.value_objects import Address, OrderState
from tests.fakes import FakeShippingMethod, FakeVariant


# ============================================================
# Fixtures
# ============================================================

@pytest.fixture
def store_id():
    return uuid4()


@pytest.fixture
def variant():
    """Physical variant at $10.00."""
    return FakeVariant()


@pytest.fixture
def digital_variant():
    return FakeVariant(sku="EBOOK-1", name="E-book", is_digital=True, prices={"USD": 1500})


@pytest.fixture
def shipping_method():
    return FakeShippingMethod()


@pytest.fixture
def address():
    return Address(
        first_name="Ada",
        last_name="Lovelace",
        address1="12 Analytical Row",
        city="London",
        zipcode="N1 9GU",
        country_code="GB",
    )


@pytest.fixture
def order(store_id):
    return Order.create(store_id=store_id, currency="USD").unwrap()


@pytest.fixture
def cart_with_item(order, variant):
    """USD order holding two units of the $10.00 variant."""
    order.add_line_item(variant, 2).unwrap()
    return order


@pytest.fixture
def order_in_state(store_id, variant, address, shipping_method):
    """
    Build a physical order advanced to ``state``.

    Usage: ``order_in_state(OrderState.PAYMENT)``.
    """
    def _build(state: OrderState, quantity: int = 1) -> Order:
        order = Order.create(store_id=store_id, currency="USD").unwrap()
        order.add_line_item(variant, quantity).unwrap()
        steps = [OrderState.ADDRESS, OrderState.DELIVERY, OrderState.PAYMENT]
        for step in steps:
            if order.state == state:
                break
            if step == OrderState.DELIVERY:
                order.set_shipping_address(address).unwrap()
                order.set_billing_address(address).unwrap()
            if step == OrderState.PAYMENT:
                order.set_shipping_method(shipping_method).unwrap()
            order.next().unwrap()
        assert order.state == state
        return order

    return _build
