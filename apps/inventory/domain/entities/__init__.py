# Domain entities
from .stock_movement import StockMovement
from .stock_item import StockItem
from .stock_location import StockLocation

__all__ = ['StockMovement', 'StockItem', 'StockLocation']
