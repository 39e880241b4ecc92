"""
Payment state value object.
"""
from enum import Enum


class PaymentState(str, Enum):
    """States of a single funding attempt."""
    PENDING = 'pending'
    AUTHORIZING = 'authorizing'
    AUTHORIZED = 'authorized'
    CAPTURING = 'capturing'
    COMPLETED = 'completed'
    PARTIALLY_REFUNDED = 'partially_refunded'
    REFUNDED = 'refunded'
    FAILED = 'failed'
    VOID = 'void'

    @property
    def is_captured(self) -> bool:
        """Funds have been captured (possibly refunded since)."""
        return self in (
            PaymentState.COMPLETED,
            PaymentState.PARTIALLY_REFUNDED,
            PaymentState.REFUNDED,
        )

    @property
    def counts_toward_total(self) -> bool:
        """Whether a payment in this state still funds the order."""
        return self not in (PaymentState.VOID, PaymentState.FAILED)
