# Domain entities
from .adjustment import Adjustment, AdjustmentScope, LineItemAdjustment, OrderAdjustment
from .line_item import LineItem
from .payment import Payment
from .shipment import Shipment, ShipmentState
from .order import Order

__all__ = [
    'Adjustment',
    'AdjustmentScope',
    'LineItemAdjustment',
    'OrderAdjustment',
    'LineItem',
    'Payment',
    'Shipment',
    'ShipmentState',
    'Order',
]
