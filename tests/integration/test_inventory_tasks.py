"""
Inventory Celery tasks running eagerly against the Django stock repository.
"""
from uuid import uuid4

import pytest

from apps.inventory.domain.entities import StockLocation
from apps.inventory.domain.value_objects import MovementAction, MovementOrigin, OriginatorKind
from apps.inventory.infrastructure.models import StockMovementModel
from apps.inventory.infrastructure.repositories import DjangoStockLocationRepository
from apps.inventory.subscribers import register
from apps.inventory.tasks import (
    finalize_order_inventory,
    release_order_inventory,
    reserve_order_inventory,
)
from apps.orders.domain.value_objects import OrderState
from apps.orders.infrastructure.repositories import DjangoOrderRepository
from shared.infrastructure.events import DomainEventDispatcher

pytestmark = pytest.mark.django_db


@pytest.fixture
def stock_repository():
    return DjangoStockLocationRepository()


@pytest.fixture
def location(stock_repository, variant):
    location = StockLocation(name="Main warehouse", is_default=True)
    receipt = MovementOrigin(kind=OriginatorKind.SUPPLIER, origin_id=uuid4())
    location.restock(variant.id, 10, receipt).unwrap()
    stock_repository.save(location)
    return location


def payload(order_id, variant_id, quantity, location_id=None):
    return {
        'order_id': str(order_id),
        'store_id': None,
        'stock_location_id': str(location_id) if location_id else None,
        'lines': [{'variant_id': str(variant_id), 'quantity': quantity}],
    }


def on_hand(stock_repository, location, variant_id):
    return stock_repository.find_by_id(location.id).stock_item_for(variant_id).quantity_on_hand


class TestInventoryTasks:

    def test_duplicate_finalize_decrements_once(self, stock_repository, location, variant):
        request = payload(uuid4(), variant.id, 4, location.id)

        first = finalize_order_inventory(request)
        second = finalize_order_inventory(request)

        assert first['success'] and second['success']
        assert on_hand(stock_repository, location, variant.id) == 6
        sold = StockMovementModel.objects.filter(action=MovementAction.SOLD.value)
        assert sold.count() == 1

    def test_reserve_release_round_trip(self, stock_repository, location, variant):
        request = payload(uuid4(), variant.id, 3)

        assert reserve_order_inventory(request)['stock_location_id'] == str(location.id)
        item = stock_repository.find_by_id(location.id).stock_item_for(variant.id)
        assert item.count_available == 7

        assert release_order_inventory(request)['success']
        item = stock_repository.find_by_id(location.id).stock_item_for(variant.id)
        assert item.count_available == 10
        assert item.reservations == {}

    def test_insufficient_stock_is_reported(self, stock_repository, location, variant):
        result = reserve_order_inventory(payload(uuid4(), variant.id, 11, location.id))

        assert result == {
            'success': False,
            'error': result['error'],
            'code': 'StockItem.InsufficientStock',
        }
        assert on_hand(stock_repository, location, variant.id) == 10

    def test_malformed_payload(self):
        result = finalize_order_inventory({'lines': []})

        assert not result['success']
        assert result['code'] == 'Inventory.InvalidPayload'

    def test_without_any_location_the_request_is_skipped(self, variant):
        result = finalize_order_inventory(payload(uuid4(), variant.id, 1))

        assert result['success']
        assert result['skipped']


class TestOrderToInventoryWiring:

    def test_order_lifecycle_moves_stock(
        self, stock_repository, location, variant, order_in_state, django_capture_on_commit_callbacks,
    ):
        dispatcher = DomainEventDispatcher()
        register(dispatcher)
        orders = DjangoOrderRepository(dispatcher=dispatcher)

        order = order_in_state(OrderState.PAYMENT, quantity=2)
        with django_capture_on_commit_callbacks(execute=True):
            orders.save(order)

        item = stock_repository.find_by_id(location.id).stock_item_for(variant.id)
        assert item.reservations == {MovementOrigin.for_order(order.id): 2}

        payment = order.add_payment(order.total_cents, None, "card").unwrap()
        payment.authorize("txn_1").unwrap()
        payment.capture().unwrap()
        order.next().unwrap()
        order.next().unwrap()
        with django_capture_on_commit_callbacks(execute=True):
            orders.save(order)

        item = stock_repository.find_by_id(location.id).stock_item_for(variant.id)
        assert item.quantity_on_hand == 8
        assert item.reservations == {}
