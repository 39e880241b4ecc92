"""
Django order repository: mapping, optimistic concurrency and post-commit events.
"""
from uuid import uuid4

import pytest

from apps.orders.domain.entities import AdjustmentScope
from apps.orders.domain.events import OrderCreated, ReserveInventory
from apps.orders.domain.promotions import PercentageLineItemDiscount
from apps.orders.domain.value_objects import OrderState, PaymentState
from apps.orders.infrastructure.models import OrderModel
from apps.orders.infrastructure.repositories import DjangoOrderRepository
from shared.domain import ConcurrencyConflictError, DomainEvent
from shared.infrastructure.events import DomainEventDispatcher

pytestmark = pytest.mark.django_db


@pytest.fixture
def published():
    return []


@pytest.fixture
def repository(published):
    dispatcher = DomainEventDispatcher()
    dispatcher.subscribe(DomainEvent, published.append)
    return DjangoOrderRepository(dispatcher=dispatcher)


class TestSaveAndLoad:

    def test_round_trips_the_order_graph(self, repository, order_in_state):
        order = order_in_state(OrderState.PAYMENT, quantity=2)
        order.add_adjustment(120, "VAT", scope=AdjustmentScope.TAX, mandatory=True).unwrap()
        order.apply_promotion(PercentageLineItemDiscount(id=uuid4(), name="Ten", percent=10)).unwrap()
        order.set_metadata("channel", "web").unwrap()
        payment = order.add_payment(order.total_cents, None, "card", idempotency_key="pay-1").unwrap()
        payment.authorize("txn_1").unwrap()

        repository.save(order)
        loaded = repository.find_by_id(order.id)

        assert loaded.version == 1
        assert loaded.state == OrderState.PAYMENT
        assert loaded.number == order.number
        assert loaded.ship_address == order.ship_address
        assert loaded.public_metadata == {"channel": "web"}
        assert loaded.total_cents == order.total_cents
        assert loaded.item_total_cents == 1800
        assert loaded.line_items[0].adjustments[0].amount_cents == -200
        assert loaded.adjustments[0].scope == AdjustmentScope.TAX
        assert loaded.adjustments[0].mandatory
        assert loaded.payments[0].state == PaymentState.AUTHORIZED
        assert loaded.payments[0].idempotency_key == "pay-1"
        assert [s.number for s in loaded.shipments] == [s.number for s in order.shipments]
        assert loaded.validate_invariants().is_success

    def test_find_by_number_and_delete(self, repository, cart_with_item):
        repository.save(cart_with_item)

        assert repository.find_by_number(str(cart_with_item.number)).id == cart_with_item.id
        assert repository.delete(cart_with_item.id)
        assert repository.find_by_id(cart_with_item.id) is None
        assert not repository.delete(cart_with_item.id)

    def test_children_are_rewritten(self, repository, cart_with_item):
        repository.save(cart_with_item)
        cart_with_item.remove_line_item(cart_with_item.line_items[0].id).unwrap()

        repository.save(cart_with_item)

        assert repository.find_by_id(cart_with_item.id).line_items == []


class TestOptimisticConcurrency:

    def test_second_writer_conflicts(self, repository, cart_with_item):
        repository.save(cart_with_item)
        first = repository.find_by_id(cart_with_item.id)
        second = repository.find_by_id(cart_with_item.id)

        first.set_email("first@example.com").unwrap()
        repository.save(first)
        second.set_email("second@example.com").unwrap()

        with pytest.raises(ConcurrencyConflictError) as exc_info:
            repository.save(second)

        assert exc_info.value.expected_version == 1
        stored = OrderModel.objects.get(id=cart_with_item.id)
        assert stored.version == 2
        assert stored.email == "first@example.com"

    def test_creating_an_existing_order_conflicts(self, repository, cart_with_item):
        repository.save(cart_with_item)
        cart_with_item.version = 0

        with pytest.raises(ConcurrencyConflictError):
            repository.save(cart_with_item)


class TestPostCommitEvents:

    def test_events_are_published_after_commit(self, repository, order, published, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            repository.save(order)
            assert published == []

        assert [type(e) for e in published] == [OrderCreated]
        assert order.domain_events == []

    def test_conflicting_save_publishes_nothing(
        self, repository, order_in_state, published, django_capture_on_commit_callbacks,
    ):
        order = order_in_state(OrderState.PAYMENT)
        repository.save(order)
        stale = repository.find_by_id(order.id)
        repository.save(repository.find_by_id(order.id))
        stale.cancel().unwrap()
        published.clear()

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            with pytest.raises(ConcurrencyConflictError):
                repository.save(stale)

        assert callbacks == []
        assert published == []

    def test_reserve_request_reaches_subscribers(self, repository, order_in_state, published, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            repository.save(order_in_state(OrderState.PAYMENT, quantity=3))

        reserve = [e for e in published if isinstance(e, ReserveInventory)]
        assert len(reserve) == 1
        assert reserve[0].lines[0].quantity == 3
