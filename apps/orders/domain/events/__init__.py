# Domain events
from .order_lifecycle import OrderCreated, OrderStateChanged, OrderCompleted, OrderCanceled
from .line_items import LineItemAdded, LineItemRemoved, LineItemQuantityChanged
from .checkout import (
    ShippingAddressSet,
    BillingAddressSet,
    ShippingMethodSelected,
    FulfillmentLocationSelected,
)
from .promotions import PromotionApplied, PromotionRemoved, PromotionUsed
from .inventory import (
    InventoryLine,
    InventoryRequest,
    ReserveInventory,
    FinalizeInventory,
    ReleaseInventory,
)
from .payments import (
    PaymentCreated,
    PaymentAuthorizing,
    PaymentAuthorized,
    PaymentCapturing,
    PaymentCaptured,
    PaymentVoided,
    PaymentPartiallyRefunded,
    PaymentRefunded,
    PaymentFailed,
)

__all__ = [
    'OrderCreated',
    'OrderStateChanged',
    'OrderCompleted',
    'OrderCanceled',
    'LineItemAdded',
    'LineItemRemoved',
    'LineItemQuantityChanged',
    'ShippingAddressSet',
    'BillingAddressSet',
    'ShippingMethodSelected',
    'FulfillmentLocationSelected',
    'PromotionApplied',
    'PromotionRemoved',
    'PromotionUsed',
    'InventoryLine',
    'InventoryRequest',
    'ReserveInventory',
    'FinalizeInventory',
    'ReleaseInventory',
    'PaymentCreated',
    'PaymentAuthorizing',
    'PaymentAuthorized',
    'PaymentCapturing',
    'PaymentCaptured',
    'PaymentVoided',
    'PaymentPartiallyRefunded',
    'PaymentRefunded',
    'PaymentFailed',
]
