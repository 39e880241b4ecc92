"""
Order DTOs.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from ...domain.entities import LineItem, Order, OrderAdjustment, Payment
from ...domain.value_objects import Address


# ============================================================
# Input DTOs
# ============================================================

@dataclass
class CreateOrderDTO:
    """DTO for creating an order."""
    store_id: UUID
    currency: str
    user_id: Optional[UUID] = None
    email: Optional[str] = None


@dataclass
class OrderIdDTO:
    """DTO for use cases that only need the order."""
    order_id: UUID


@dataclass
class AddLineItemDTO:
    order_id: UUID
    variant_id: UUID
    quantity: int = 1


@dataclass
class RemoveLineItemDTO:
    order_id: UUID
    line_item_id: UUID


@dataclass
class UpdateLineItemQuantityDTO:
    order_id: UUID
    line_item_id: UUID
    quantity: int


@dataclass
class ApplyPromotionDTO:
    """Promotion is looked up by id, or by coupon code when no id is given."""
    order_id: UUID
    promotion_id: Optional[UUID] = None
    code: Optional[str] = None


@dataclass
class AddressDTO:
    first_name: str
    last_name: str
    address1: str
    city: str
    zipcode: str
    country_code: str
    address2: str = ""
    state_name: str = ""
    phone: str = ""
    company: str = ""

    def to_value_object(self) -> Address:
        return Address(
            first_name=self.first_name,
            last_name=self.last_name,
            address1=self.address1,
            city=self.city,
            zipcode=self.zipcode,
            country_code=self.country_code,
            address2=self.address2,
            state_name=self.state_name,
            phone=self.phone,
            company=self.company,
        )


@dataclass
class SetAddressesDTO:
    """Either address may be omitted; a missing one is left unchanged."""
    order_id: UUID
    ship_address: Optional[AddressDTO] = None
    bill_address: Optional[AddressDTO] = None


@dataclass
class SetShippingMethodDTO:
    order_id: UUID
    shipping_method_id: UUID


@dataclass
class AddPaymentDTO:
    order_id: UUID
    amount_cents: int
    payment_method_type: str
    payment_method_id: Optional[UUID] = None
    idempotency_key: Optional[str] = None


# ============================================================
# Output DTOs
# ============================================================

@dataclass
class AdjustmentDTO:
    id: UUID
    amount_cents: int
    description: str
    eligible: bool
    promotion_id: Optional[UUID]
    scope: Optional[str] = None
    mandatory: bool = False

    @classmethod
    def from_entity(cls, adjustment) -> 'AdjustmentDTO':
        """Create DTO from an order- or line-item-level adjustment."""
        is_order_level = isinstance(adjustment, OrderAdjustment)
        return cls(
            id=adjustment.id,
            amount_cents=adjustment.amount_cents,
            description=adjustment.description,
            eligible=adjustment.eligible,
            promotion_id=adjustment.promotion_id,
            scope=adjustment.scope.value if is_order_level else None,
            mandatory=adjustment.mandatory if is_order_level else False,
        )


@dataclass
class LineItemDTO:
    id: UUID
    variant_id: UUID
    variant_name: str
    variant_sku: str
    quantity: int
    unit_price_cents: int
    subtotal_cents: int
    total_cents: int
    is_digital: bool
    adjustments: List[AdjustmentDTO] = field(default_factory=list)

    @classmethod
    def from_entity(cls, line: LineItem) -> 'LineItemDTO':
        return cls(
            id=line.id,
            variant_id=line.variant_id,
            variant_name=line.variant_name,
            variant_sku=line.variant_sku,
            quantity=line.quantity,
            unit_price_cents=line.unit_price_cents,
            subtotal_cents=line.subtotal_cents,
            total_cents=line.total_cents,
            is_digital=line.is_digital,
            adjustments=[AdjustmentDTO.from_entity(a) for a in line.adjustments],
        )


@dataclass
class PaymentDTO:
    id: UUID
    amount_cents: int
    currency: str
    state: str
    payment_method_type: str
    reference_transaction_id: Optional[str]
    refunded_amount_cents: int
    idempotency_key: Optional[str]

    @classmethod
    def from_entity(cls, payment: Payment) -> 'PaymentDTO':
        return cls(
            id=payment.id,
            amount_cents=payment.amount_cents,
            currency=payment.currency,
            state=payment.state.value,
            payment_method_type=payment.payment_method_type,
            reference_transaction_id=payment.reference_transaction_id,
            refunded_amount_cents=payment.refunded_amount_cents,
            idempotency_key=payment.idempotency_key,
        )


@dataclass
class OrderDTO:
    """DTO for order output."""
    id: UUID
    number: str
    store_id: UUID
    user_id: Optional[UUID]
    email: Optional[str]
    currency: str
    state: str
    item_total_cents: int
    shipment_total_cents: int
    adjustment_total_cents: int
    total_cents: int
    promotion_id: Optional[UUID]
    promo_code: Optional[str]
    item_count: int
    line_items: List[LineItemDTO]
    adjustments: List[AdjustmentDTO]
    payments: List[PaymentDTO]
    completed_at: Optional[datetime]
    canceled_at: Optional[datetime]
    version: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, order: Order) -> 'OrderDTO':
        """Create DTO from entity."""
        return cls(
            id=order.id,
            number=str(order.number),
            store_id=order.store_id,
            user_id=order.user_id,
            email=order.email,
            currency=order.currency,
            state=order.state.value,
            item_total_cents=order.item_total_cents,
            shipment_total_cents=order.shipment_total_cents,
            adjustment_total_cents=order.adjustment_total_cents,
            total_cents=order.total_cents,
            promotion_id=order.promotion_id,
            promo_code=order.promo_code,
            item_count=order.item_count,
            line_items=[LineItemDTO.from_entity(line) for line in order.line_items],
            adjustments=[AdjustmentDTO.from_entity(a) for a in order.adjustments],
            payments=[PaymentDTO.from_entity(p) for p in order.payments],
            completed_at=order.completed_at,
            canceled_at=order.canceled_at,
            version=order.version,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


@dataclass
class InvariantReportDTO:
    """Outcome of the order diagnostic check."""
    order_id: UUID
    valid: bool
    violations: List[Dict[str, object]] = field(default_factory=list)
