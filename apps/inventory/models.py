# Django discovers models through this module.
from .infrastructure.models import (  # noqa: F401
    StockItemModel,
    StockLocationModel,
    StockMovementModel,
    StockReservationModel,
)
