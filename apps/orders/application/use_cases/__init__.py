from .base import OrderUseCase
from .create_order import CreateOrderUseCase
from .line_items import AddLineItemUseCase, RemoveLineItemUseCase, UpdateLineItemQuantityUseCase
from .lifecycle import AdvanceOrderUseCase, CancelOrderUseCase
from .promotions import ApplyPromotionUseCase, RemovePromotionUseCase
from .checkout import SetAddressesUseCase, SetShippingMethodUseCase
from .payments import AddPaymentUseCase, ProcessPaymentEventUseCase
from .validate_order import ValidateOrderUseCase

__all__ = [
    'OrderUseCase',
    'CreateOrderUseCase',
    'AddLineItemUseCase',
    'RemoveLineItemUseCase',
    'UpdateLineItemQuantityUseCase',
    'AdvanceOrderUseCase',
    'CancelOrderUseCase',
    'ApplyPromotionUseCase',
    'RemovePromotionUseCase',
    'SetAddressesUseCase',
    'SetShippingMethodUseCase',
    'AddPaymentUseCase',
    'ProcessPaymentEventUseCase',
    'ValidateOrderUseCase',
]
