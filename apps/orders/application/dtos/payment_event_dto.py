"""
Payment gateway callback DTO.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from uuid import UUID


class PaymentAction(str, Enum):
    AUTHORIZE = 'authorize'
    CAPTURE = 'capture'
    VOID = 'void'
    REFUND = 'refund'
    FAIL = 'fail'


@dataclass
class PaymentEventDTO:
    """
    One gateway callback for a payment.

    Which optional fields matter depends on ``action``: ``refund`` needs
    ``amount_cents``, ``fail`` reads ``error_message`` and
    ``gateway_error_code``.
    """
    order_id: UUID
    payment_id: UUID
    action: PaymentAction
    reference_transaction_id: Optional[str] = None
    gateway_auth_code: Optional[str] = None
    amount_cents: Optional[int] = None
    reason: str = ""
    error_message: str = ""
    gateway_error_code: Optional[str] = None
    idempotency_key: Optional[str] = None
