# Django models
from .order_model import (
    LineItemAdjustmentModel,
    LineItemModel,
    OrderAdjustmentModel,
    OrderModel,
    PaymentModel,
    ShipmentModel,
)

__all__ = [
    'OrderModel',
    'LineItemModel',
    'OrderAdjustmentModel',
    'LineItemAdjustmentModel',
    'PaymentModel',
    'ShipmentModel',
]
