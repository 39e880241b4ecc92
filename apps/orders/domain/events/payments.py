"""
Payment domain events.
"""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from shared.domain import DomainEvent


@dataclass(frozen=True)
class PaymentCreated(DomainEvent):
    payment_id: UUID
    order_id: UUID
    amount_cents: int
    idempotency_key: Optional[str] = None


@dataclass(frozen=True)
class PaymentAuthorizing(DomainEvent):
    payment_id: UUID
    order_id: UUID


@dataclass(frozen=True)
class PaymentAuthorized(DomainEvent):
    payment_id: UUID
    order_id: UUID
    reference_transaction_id: str


@dataclass(frozen=True)
class PaymentCapturing(DomainEvent):
    payment_id: UUID
    order_id: UUID


@dataclass(frozen=True)
class PaymentCaptured(DomainEvent):
    payment_id: UUID
    order_id: UUID
    reference_transaction_id: str


@dataclass(frozen=True)
class PaymentVoided(DomainEvent):
    payment_id: UUID
    order_id: UUID
    reference_transaction_id: Optional[str]


@dataclass(frozen=True)
class PaymentPartiallyRefunded(DomainEvent):
    payment_id: UUID
    order_id: UUID
    refund_amount_cents: int
    reference_transaction_id: Optional[str]
    reason: str


@dataclass(frozen=True)
class PaymentRefunded(DomainEvent):
    """Event raised when the full captured amount has been refunded."""
    payment_id: UUID
    order_id: UUID
    refund_amount_cents: int
    reference_transaction_id: Optional[str]
    reason: str


@dataclass(frozen=True)
class PaymentFailed(DomainEvent):
    payment_id: UUID
    order_id: UUID
    error_message: str
    gateway_error_code: Optional[str]
