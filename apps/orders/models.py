# Django discovers models through this module.
from .infrastructure.models import (  # noqa: F401
    LineItemAdjustmentModel,
    LineItemModel,
    OrderAdjustmentModel,
    OrderModel,
    PaymentModel,
    ShipmentModel,
)
