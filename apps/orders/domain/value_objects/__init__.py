# Value objects
from .order_state import OrderState, CHECKOUT_DETAILS_WINDOW, ADJUSTMENT_WINDOW
from .payment_state import PaymentState
from .order_number import OrderNumber
from .address import Address
from .metadata import Metadata, MetadataValue, is_metadata_key, is_metadata_value
from .promotion_adjustment import PromotionAdjustment

__all__ = [
    'OrderState',
    'CHECKOUT_DETAILS_WINDOW',
    'ADJUSTMENT_WINDOW',
    'PaymentState',
    'OrderNumber',
    'Address',
    'Metadata',
    'MetadataValue',
    'is_metadata_key',
    'is_metadata_value',
    'PromotionAdjustment',
]
