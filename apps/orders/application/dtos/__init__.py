from .order_dto import (
    AddLineItemDTO,
    AddPaymentDTO,
    AddressDTO,
    AdjustmentDTO,
    ApplyPromotionDTO,
    CreateOrderDTO,
    InvariantReportDTO,
    LineItemDTO,
    OrderDTO,
    OrderIdDTO,
    PaymentDTO,
    RemoveLineItemDTO,
    SetAddressesDTO,
    SetShippingMethodDTO,
    UpdateLineItemQuantityDTO,
)
from .payment_event_dto import PaymentAction, PaymentEventDTO

__all__ = [
    'AddLineItemDTO',
    'AddPaymentDTO',
    'AddressDTO',
    'AdjustmentDTO',
    'ApplyPromotionDTO',
    'CreateOrderDTO',
    'InvariantReportDTO',
    'LineItemDTO',
    'OrderDTO',
    'OrderIdDTO',
    'PaymentDTO',
    'RemoveLineItemDTO',
    'SetAddressesDTO',
    'SetShippingMethodDTO',
    'UpdateLineItemQuantityDTO',
    'PaymentAction',
    'PaymentEventDTO',
]
