"""
Django ORM implementation of OrderRepository.
"""
import logging
from dataclasses import asdict
from typing import Optional
from uuid import UUID

from django.db import transaction

from shared.domain import ConcurrencyConflictError
from shared.infrastructure.events import DomainEventDispatcher
from ...domain.entities import (
    AdjustmentScope,
    LineItem,
    LineItemAdjustment,
    Order,
    OrderAdjustment,
    Payment,
    Shipment,
    ShipmentState,
)
from ...domain.repositories import OrderRepository
from ...domain.value_objects import Address, OrderNumber, OrderState, PaymentState
from ..models import (
    LineItemAdjustmentModel,
    LineItemModel,
    OrderAdjustmentModel,
    OrderModel,
    PaymentModel,
    ShipmentModel,
)

logger = logging.getLogger(__name__)


class DjangoOrderRepository(OrderRepository):
    """
    Django ORM based order repository implementation.

    The order row carries a ``version`` column; an update only matches the
    row still holding the version the order was loaded with. Child rows are
    rewritten on every save. Drained domain events are handed to the
    dispatcher through ``transaction.on_commit``.
    """

    def __init__(self, dispatcher: Optional[DomainEventDispatcher] = None):
        self.dispatcher = dispatcher

    def save(self, order: Order) -> Order:
        """Save an order graph and schedule its events for after commit."""
        expected_version = order.version
        with transaction.atomic():
            fields = self._order_fields(order)
            if expected_version == 0:
                if OrderModel.objects.filter(id=order.id).exists():
                    raise ConcurrencyConflictError("Order", str(order.id), expected_version)
                OrderModel.objects.create(id=order.id, version=1, **fields)
            else:
                updated = (
                    OrderModel.objects
                    .filter(id=order.id, version=expected_version)
                    .update(version=expected_version + 1, **fields)
                )
                if updated == 0:
                    raise ConcurrencyConflictError("Order", str(order.id), expected_version)

            self._replace_children(order)
            order.version = expected_version + 1

            events = order.clear_domain_events()
            if self.dispatcher is not None:
                self.dispatcher.publish_on_commit(events)

        logger.debug(f"Saved order {order.number} at version {order.version} ({len(events)} events)")
        return order

    def find_by_id(self, order_id: UUID) -> Optional[Order]:
        """Find an order by ID."""
        try:
            model = OrderModel.objects.get(id=order_id)
            return self._to_entity(model)
        except OrderModel.DoesNotExist:
            return None

    def find_by_number(self, number: str) -> Optional[Order]:
        """Find an order by order number."""
        try:
            model = OrderModel.objects.get(number=number)
            return self._to_entity(model)
        except OrderModel.DoesNotExist:
            return None

    def delete(self, order_id: UUID) -> bool:
        """Delete an order."""
        deleted, _ = OrderModel.objects.filter(id=order_id).delete()
        return deleted > 0

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def _order_fields(self, order: Order) -> dict:
        return {
            'number': str(order.number),
            'store_id': order.store_id,
            'user_id': order.user_id,
            'email': order.email,
            'currency': order.currency,
            'state': order.state.value,
            'item_total_cents': order.item_total_cents,
            'shipment_total_cents': order.shipment_total_cents,
            'adjustment_total_cents': order.adjustment_total_cents,
            'total_cents': order.total_cents,
            'promotion_id': order.promotion_id,
            'promo_code': order.promo_code,
            'ship_address': asdict(order.ship_address) if order.ship_address else None,
            'bill_address': asdict(order.bill_address) if order.bill_address else None,
            'shipping_method_id': order.shipping_method_id,
            'fulfillment_location_id': order.fulfillment_location_id,
            'special_instructions': order.special_instructions,
            'public_metadata': dict(order.public_metadata),
            'private_metadata': dict(order.private_metadata),
            'completed_at': order.completed_at,
            'canceled_at': order.canceled_at,
            'created_at': order.created_at,
            'updated_at': order.updated_at,
        }

    def _replace_children(self, order: Order) -> None:
        LineItemModel.objects.filter(order_id=order.id).delete()
        OrderAdjustmentModel.objects.filter(order_id=order.id).delete()
        PaymentModel.objects.filter(order_id=order.id).delete()
        ShipmentModel.objects.filter(order_id=order.id).delete()

        LineItemModel.objects.bulk_create([
            LineItemModel(
                id=line.id,
                order_id=order.id,
                variant_id=line.variant_id,
                variant_name=line.variant_name,
                variant_sku=line.variant_sku,
                is_digital=line.is_digital,
                quantity=line.quantity,
                unit_price_cents=line.unit_price_cents,
                currency=line.currency,
                position=position,
                created_at=line.created_at,
                updated_at=line.updated_at,
            )
            for position, line in enumerate(order.line_items)
        ])
        LineItemAdjustmentModel.objects.bulk_create([
            LineItemAdjustmentModel(
                id=adjustment.id,
                line_item_id=line.id,
                amount_cents=adjustment.amount_cents,
                description=adjustment.description,
                promotion_id=adjustment.promotion_id,
                eligible=adjustment.eligible,
                position=position,
                created_at=adjustment.created_at,
                updated_at=adjustment.updated_at,
            )
            for line in order.line_items
            for position, adjustment in enumerate(line.adjustments)
        ])
        OrderAdjustmentModel.objects.bulk_create([
            OrderAdjustmentModel(
                id=adjustment.id,
                order_id=order.id,
                scope=adjustment.scope.value,
                amount_cents=adjustment.amount_cents,
                description=adjustment.description,
                promotion_id=adjustment.promotion_id,
                eligible=adjustment.eligible,
                mandatory=adjustment.mandatory,
                position=position,
                created_at=adjustment.created_at,
                updated_at=adjustment.updated_at,
            )
            for position, adjustment in enumerate(order.adjustments)
        ])
        PaymentModel.objects.bulk_create([
            PaymentModel(
                id=payment.id,
                order_id=order.id,
                amount_cents=payment.amount_cents,
                currency=payment.currency,
                payment_method_id=payment.payment_method_id,
                payment_method_type=payment.payment_method_type,
                state=payment.state.value,
                reference_transaction_id=payment.reference_transaction_id,
                gateway_auth_code=payment.gateway_auth_code,
                gateway_error_code=payment.gateway_error_code,
                failure_reason=payment.failure_reason,
                idempotency_key=payment.idempotency_key,
                refunded_amount_cents=payment.refunded_amount_cents,
                refund_keys=list(payment.refund_keys),
                position=position,
                authorized_at=payment.authorized_at,
                captured_at=payment.captured_at,
                voided_at=payment.voided_at,
                refunded_at=payment.refunded_at,
                created_at=payment.created_at,
                updated_at=payment.updated_at,
            )
            for position, payment in enumerate(order.payments)
        ])
        ShipmentModel.objects.bulk_create([
            ShipmentModel(
                id=shipment.id,
                order_id=order.id,
                number=shipment.number,
                shipping_method_id=shipment.shipping_method_id,
                stock_location_id=shipment.stock_location_id,
                state=shipment.state.value,
                created_at=shipment.created_at,
                updated_at=shipment.updated_at,
            )
            for shipment in order.shipments
        ])

    def _to_entity(self, model: OrderModel) -> Order:
        """Convert Django model to domain entity."""
        line_items = [
            self._line_item_to_entity(line_model)
            for line_model in model.line_items.prefetch_related('adjustments')
        ]
        return Order(
            id=model.id,
            store_id=model.store_id,
            currency=model.currency,
            number=OrderNumber(value=model.number),
            state=OrderState(model.state),
            user_id=model.user_id,
            email=model.email,
            item_total_cents=model.item_total_cents,
            shipment_total_cents=model.shipment_total_cents,
            adjustment_total_cents=model.adjustment_total_cents,
            total_cents=model.total_cents,
            promotion_id=model.promotion_id,
            promo_code=model.promo_code,
            ship_address=Address(**model.ship_address) if model.ship_address else None,
            bill_address=Address(**model.bill_address) if model.bill_address else None,
            shipping_method_id=model.shipping_method_id,
            fulfillment_location_id=model.fulfillment_location_id,
            special_instructions=model.special_instructions,
            completed_at=model.completed_at,
            canceled_at=model.canceled_at,
            public_metadata=dict(model.public_metadata or {}),
            private_metadata=dict(model.private_metadata or {}),
            line_items=line_items,
            adjustments=[self._order_adjustment_to_entity(a) for a in model.adjustments.all()],
            payments=[self._payment_to_entity(p) for p in model.payments.all()],
            shipments=[self._shipment_to_entity(s) for s in model.shipments.all()],
            version=model.version,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _line_item_to_entity(self, model: LineItemModel) -> LineItem:
        return LineItem(
            id=model.id,
            order_id=model.order_id,
            variant_id=model.variant_id,
            quantity=model.quantity,
            unit_price_cents=model.unit_price_cents,
            currency=model.currency,
            variant_name=model.variant_name,
            variant_sku=model.variant_sku,
            is_digital=model.is_digital,
            adjustments=[
                LineItemAdjustment(
                    id=a.id,
                    line_item_id=model.id,
                    amount_cents=a.amount_cents,
                    description=a.description,
                    promotion_id=a.promotion_id,
                    eligible=a.eligible,
                    created_at=a.created_at,
                    updated_at=a.updated_at,
                )
                for a in model.adjustments.all()
            ],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _order_adjustment_to_entity(self, model: OrderAdjustmentModel) -> OrderAdjustment:
        return OrderAdjustment(
            id=model.id,
            order_id=model.order_id,
            scope=AdjustmentScope(model.scope),
            amount_cents=model.amount_cents,
            description=model.description,
            promotion_id=model.promotion_id,
            eligible=model.eligible,
            mandatory=model.mandatory,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _payment_to_entity(self, model: PaymentModel) -> Payment:
        return Payment(
            id=model.id,
            order_id=model.order_id,
            amount_cents=model.amount_cents,
            currency=model.currency,
            payment_method_id=model.payment_method_id,
            payment_method_type=model.payment_method_type,
            state=PaymentState(model.state),
            reference_transaction_id=model.reference_transaction_id,
            gateway_auth_code=model.gateway_auth_code,
            gateway_error_code=model.gateway_error_code,
            failure_reason=model.failure_reason,
            idempotency_key=model.idempotency_key,
            refunded_amount_cents=model.refunded_amount_cents,
            refund_keys=list(model.refund_keys or []),
            authorized_at=model.authorized_at,
            captured_at=model.captured_at,
            voided_at=model.voided_at,
            refunded_at=model.refunded_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _shipment_to_entity(self, model: ShipmentModel) -> Shipment:
        return Shipment(
            id=model.id,
            order_id=model.order_id,
            number=model.number,
            shipping_method_id=model.shipping_method_id,
            stock_location_id=model.stock_location_id,
            state=ShipmentState(model.state),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
