"""
Checkout detail domain events (addresses, shipping, fulfillment).
"""
from dataclasses import dataclass
from uuid import UUID

from shared.domain import DomainEvent


@dataclass(frozen=True)
class ShippingAddressSet(DomainEvent):
    order_id: UUID


@dataclass(frozen=True)
class BillingAddressSet(DomainEvent):
    order_id: UUID


@dataclass(frozen=True)
class ShippingMethodSelected(DomainEvent):
    order_id: UUID
    shipping_method_id: UUID
    shipment_total_cents: int


@dataclass(frozen=True)
class FulfillmentLocationSelected(DomainEvent):
    order_id: UUID
    store_id: UUID
    stock_location_id: UUID
