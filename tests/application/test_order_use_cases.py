"""
Order use cases against the in-memory repository.
"""
from uuid import uuid4

import pytest

from apps.orders.application.dtos import (
    AddLineItemDTO,
    AddPaymentDTO,
    AddressDTO,
    ApplyPromotionDTO,
    CreateOrderDTO,
    OrderIdDTO,
    PaymentAction,
    PaymentEventDTO,
    RemoveLineItemDTO,
    SetAddressesDTO,
    SetShippingMethodDTO,
    UpdateLineItemQuantityDTO,
)
from apps.orders.application.use_cases import (
    AddLineItemUseCase,
    AddPaymentUseCase,
    AdvanceOrderUseCase,
    ApplyPromotionUseCase,
    CancelOrderUseCase,
    CreateOrderUseCase,
    ProcessPaymentEventUseCase,
    RemoveLineItemUseCase,
    RemovePromotionUseCase,
    SetAddressesUseCase,
    SetShippingMethodUseCase,
    UpdateLineItemQuantityUseCase,
    ValidateOrderUseCase,
)
from apps.orders.domain.events import OrderCanceled, ReleaseInventory, ReserveInventory
from apps.orders.domain.promotions import FixedOrderDiscount
from apps.orders.infrastructure.repositories import InMemoryOrderRepository
from shared.domain import ConcurrencyConflictError, DomainEvent
from shared.infrastructure.events import DomainEventDispatcher
from tests.fakes import (
    FakeShippingMethod,
    FakeVariant,
    InMemoryPromotionCatalog,
    InMemoryShippingMethodCatalog,
    InMemoryVariantCatalog,
)


@pytest.fixture
def published():
    return []


@pytest.fixture
def repository(published):
    dispatcher = DomainEventDispatcher()
    dispatcher.subscribe(DomainEvent, published.append)
    return InMemoryOrderRepository(dispatcher=dispatcher)


@pytest.fixture
def variant():
    return FakeVariant()


@pytest.fixture
def shipping_method():
    return FakeShippingMethod(base_cost_cents=500)


@pytest.fixture
def promotion():
    return FixedOrderDiscount(
        id=uuid4(), name="Welcome", amount_cents=200, promotion_code="WELCOME",
    )


@pytest.fixture
def address_dto():
    return AddressDTO(
        first_name="Ada",
        last_name="Lovelace",
        address1="12 Analytical Row",
        city="London",
        zipcode="N1 9GU",
        country_code="GB",
    )


@pytest.fixture
def cart(repository, variant):
    """Stored USD order with two $10.00 units."""
    order = CreateOrderUseCase(order_repository=repository).execute(
        CreateOrderDTO(store_id=uuid4(), currency="usd")
    ).data
    AddLineItemUseCase(
        order_repository=repository,
        variant_catalog=InMemoryVariantCatalog(variant),
    ).execute(AddLineItemDTO(order_id=order.id, variant_id=variant.id, quantity=2))
    return repository.find_by_id(order.id)


def advance(repository, order_id):
    return AdvanceOrderUseCase(order_repository=repository).execute(OrderIdDTO(order_id=order_id))


class TestCreateAndLineItems:

    def test_create_order(self, repository, published):
        result = CreateOrderUseCase(order_repository=repository).execute(
            CreateOrderDTO(store_id=uuid4(), currency="usd", email="Ada@Example.com")
        )

        assert result.success
        assert result.data.currency == "USD"
        assert result.data.state == "cart"
        assert result.data.email == "ada@example.com"
        assert result.data.version == 1
        assert [e.event_type for e in published] == ["OrderCreated"]

    def test_create_order_invalid_currency(self, repository):
        result = CreateOrderUseCase(order_repository=repository).execute(
            CreateOrderDTO(store_id=uuid4(), currency="dollars")
        )

        assert not result.success
        assert result.error_code == "Order.InvalidCurrency"

    def test_add_line_item(self, cart):
        assert cart.item_total_cents == 2000
        assert cart.total_cents == 2000
        assert cart.version == 2

    def test_add_unknown_variant(self, repository, cart):
        result = AddLineItemUseCase(
            order_repository=repository,
            variant_catalog=InMemoryVariantCatalog(),
        ).execute(AddLineItemDTO(order_id=cart.id, variant_id=uuid4()))

        assert result.error_code == "Variant.NotFound"

    def test_unknown_order(self, repository):
        result = RemoveLineItemUseCase(order_repository=repository).execute(
            RemoveLineItemDTO(order_id=uuid4(), line_item_id=uuid4())
        )

        assert result.error_code == "Order.NotFound"

    def test_update_and_remove(self, repository, cart):
        line_id = cart.line_items[0].id

        updated = UpdateLineItemQuantityUseCase(order_repository=repository).execute(
            UpdateLineItemQuantityDTO(order_id=cart.id, line_item_id=line_id, quantity=3)
        )
        assert updated.data.item_total_cents == 3000

        removed = RemoveLineItemUseCase(order_repository=repository).execute(
            RemoveLineItemDTO(order_id=cart.id, line_item_id=line_id)
        )
        assert removed.data.line_items == []
        assert removed.data.total_cents == 0

    def test_failed_operation_is_not_saved(self, repository, cart, published):
        published.clear()

        result = UpdateLineItemQuantityUseCase(order_repository=repository).execute(
            UpdateLineItemQuantityDTO(order_id=cart.id, line_item_id=cart.line_items[0].id, quantity=0)
        )

        assert result.error_code == "Order.TooFewItems"
        assert repository.find_by_id(cart.id).version == cart.version
        assert published == []


class TestCheckoutFlow:

    def test_full_checkout(self, repository, cart, address_dto, shipping_method, published):
        assert advance(repository, cart.id).data.state == "address"

        blocked = advance(repository, cart.id)
        assert blocked.error_code == "Address.Required"

        SetAddressesUseCase(order_repository=repository).execute(
            SetAddressesDTO(order_id=cart.id, ship_address=address_dto, bill_address=address_dto)
        )
        assert advance(repository, cart.id).data.state == "delivery"

        shipping = SetShippingMethodUseCase(
            order_repository=repository,
            shipping_method_catalog=InMemoryShippingMethodCatalog(shipping_method),
        ).execute(SetShippingMethodDTO(order_id=cart.id, shipping_method_id=shipping_method.id))
        assert shipping.data.total_cents == 2500

        published.clear()
        payment_state = advance(repository, cart.id)
        assert payment_state.data.state == "payment"
        assert any(isinstance(e, ReserveInventory) for e in published)

        paid = AddPaymentUseCase(order_repository=repository).execute(
            AddPaymentDTO(order_id=cart.id, amount_cents=2500, payment_method_type="card")
        )
        payment_id = paid.data.payments[0].id
        assert advance(repository, cart.id).data.state == "confirm"
        assert advance(repository, cart.id).error_code == "Order.PaymentNotCompleted"

        process = ProcessPaymentEventUseCase(order_repository=repository)
        process.execute(PaymentEventDTO(
            order_id=cart.id, payment_id=payment_id,
            action=PaymentAction.AUTHORIZE, reference_transaction_id="txn_1",
        ))
        captured = process.execute(PaymentEventDTO(
            order_id=cart.id, payment_id=payment_id, action=PaymentAction.CAPTURE,
        ))
        assert captured.data.payments[0].state == "completed"

        completed = advance(repository, cart.id)
        assert completed.data.state == "complete"
        assert completed.data.completed_at is not None

        canceled = CancelOrderUseCase(order_repository=repository).execute(OrderIdDTO(order_id=cart.id))
        assert canceled.error_code == "Order.CannotCancelCompleted"

    def test_addresses_require_at_least_one(self, repository, cart):
        result = SetAddressesUseCase(order_repository=repository).execute(SetAddressesDTO(order_id=cart.id))

        assert result.error_code == "Address.Required"

    def test_unknown_shipping_method(self, repository, cart):
        result = SetShippingMethodUseCase(
            order_repository=repository,
            shipping_method_catalog=InMemoryShippingMethodCatalog(),
        ).execute(SetShippingMethodDTO(order_id=cart.id, shipping_method_id=uuid4()))

        assert result.error_code == "ShippingMethod.NotFound"

    def test_cancel_publishes_release(self, repository, cart, published):
        published.clear()

        result = CancelOrderUseCase(order_repository=repository).execute(OrderIdDTO(order_id=cart.id))

        assert result.data.state == "canceled"
        kinds = [type(e) for e in published]
        assert OrderCanceled in kinds
        assert ReleaseInventory in kinds


class TestPromotionUseCases:

    def test_apply_by_code_and_remove(self, repository, cart, promotion):
        apply = ApplyPromotionUseCase(
            order_repository=repository,
            promotion_catalog=InMemoryPromotionCatalog(promotion),
        )

        applied = apply.execute(ApplyPromotionDTO(order_id=cart.id, code="welcome"))

        assert applied.data.total_cents == 1800
        assert applied.data.promo_code == "WELCOME"

        removed = RemovePromotionUseCase(order_repository=repository).execute(OrderIdDTO(order_id=cart.id))
        assert removed.data.total_cents == 2000

    def test_apply_by_id(self, repository, cart, promotion):
        result = ApplyPromotionUseCase(
            order_repository=repository,
            promotion_catalog=InMemoryPromotionCatalog(promotion),
        ).execute(ApplyPromotionDTO(order_id=cart.id, promotion_id=promotion.id))

        assert result.data.promotion_id == promotion.id

    def test_unknown_promotion(self, repository, cart):
        apply = ApplyPromotionUseCase(
            order_repository=repository,
            promotion_catalog=InMemoryPromotionCatalog(),
        )

        assert apply.execute(ApplyPromotionDTO(order_id=cart.id, code="NOPE")).error_code == "Promotion.NotFound"
        assert apply.execute(ApplyPromotionDTO(order_id=cart.id)).error_code == "Order.PromotionRequired"


class TestPaymentEvents:

    @pytest.fixture
    def payment_id(self, repository, cart):
        paid = AddPaymentUseCase(order_repository=repository).execute(
            AddPaymentDTO(order_id=cart.id, amount_cents=2000, payment_method_type="card", idempotency_key="pay-1")
        )
        return paid.data.payments[0].id

    def test_retried_add_payment_returns_same_payment(self, repository, cart, payment_id):
        again = AddPaymentUseCase(order_repository=repository).execute(
            AddPaymentDTO(order_id=cart.id, amount_cents=2000, payment_method_type="card", idempotency_key="pay-1")
        )

        assert [p.id for p in again.data.payments] == [payment_id]

    def test_unknown_payment(self, repository, cart):
        result = ProcessPaymentEventUseCase(order_repository=repository).execute(
            PaymentEventDTO(order_id=cart.id, payment_id=uuid4(), action=PaymentAction.VOID)
        )

        assert result.error_code == "Payment.NotFound"

    def test_refund_flow(self, repository, cart, payment_id):
        process = ProcessPaymentEventUseCase(order_repository=repository)
        process.execute(PaymentEventDTO(
            order_id=cart.id, payment_id=payment_id,
            action=PaymentAction.AUTHORIZE, reference_transaction_id="txn_1",
        ))
        process.execute(PaymentEventDTO(order_id=cart.id, payment_id=payment_id, action=PaymentAction.CAPTURE))

        refunded = process.execute(PaymentEventDTO(
            order_id=cart.id, payment_id=payment_id,
            action=PaymentAction.REFUND, amount_cents=500, idempotency_key="pay-1",
        ))

        payment = refunded.data.payments[0]
        assert payment.state == "partially_refunded"
        assert payment.refunded_amount_cents == 500

        conflicting = process.execute(PaymentEventDTO(
            order_id=cart.id, payment_id=payment_id,
            action=PaymentAction.REFUND, amount_cents=100, idempotency_key="refund-2",
        ))

        assert conflicting.error_code == "Payment.IdempotencyKeyConflict"
        assert repository.find_by_id(cart.id).payments[0].refunded_amount_cents == 500

    def test_failure_callback(self, repository, cart, payment_id):
        result = ProcessPaymentEventUseCase(order_repository=repository).execute(PaymentEventDTO(
            order_id=cart.id, payment_id=payment_id,
            action=PaymentAction.FAIL, error_message="declined", gateway_error_code="card_declined",
        ))

        assert result.data.payments[0].state == "failed"

    def test_conflicting_key(self, repository, cart, payment_id):
        result = ProcessPaymentEventUseCase(order_repository=repository).execute(PaymentEventDTO(
            order_id=cart.id, payment_id=payment_id,
            action=PaymentAction.AUTHORIZE, reference_transaction_id="txn_1", idempotency_key="other",
        ))

        assert result.error_code == "Payment.IdempotencyKeyConflict"


class TestValidateOrder:

    def test_valid_order(self, repository, cart):
        result = ValidateOrderUseCase(order_repository=repository).execute(OrderIdDTO(order_id=cart.id))

        assert result.data.valid
        assert result.data.violations == []

    def test_reports_violations(self, repository, cart):
        stored = repository.find_by_id(cart.id)
        stored.total_cents = 1
        repository.save(stored)

        result = ValidateOrderUseCase(order_repository=repository).execute(OrderIdDTO(order_id=cart.id))

        assert not result.data.valid
        assert result.data.violations[0]['code'] == "Order.InconsistentTotal"
        assert result.data.violations[0]['expected'] == 2000

    def test_unknown_order(self, repository):
        result = ValidateOrderUseCase(order_repository=repository).execute(OrderIdDTO(order_id=uuid4()))

        assert result.error_code == "Order.NotFound"


class TestInMemoryRepository:

    def test_stale_writer_conflicts(self, repository, cart):
        first = repository.find_by_id(cart.id)
        second = repository.find_by_id(cart.id)
        first.set_email("first@example.com").unwrap()
        repository.save(first)

        second.set_email("second@example.com").unwrap()
        with pytest.raises(ConcurrencyConflictError):
            repository.save(second)

        assert repository.find_by_id(cart.id).email == "first@example.com"

    def test_find_by_number(self, repository, cart):
        assert repository.find_by_number(str(cart.number)).id == cart.id
        assert repository.find_by_number("R000") is None

    def test_loaded_copies_are_isolated(self, repository, cart):
        loaded = repository.find_by_id(cart.id)
        loaded.line_items.clear()

        assert len(repository.find_by_id(cart.id).line_items) == 1
