# Django models
from .stock_model import (
    StockItemModel,
    StockLocationModel,
    StockMovementModel,
    StockReservationModel,
)

__all__ = ['StockLocationModel', 'StockItemModel', 'StockReservationModel', 'StockMovementModel']
