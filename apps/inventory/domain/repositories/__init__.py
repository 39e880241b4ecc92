# Repository interfaces
from .stock_location_repository import StockLocationRepository

__all__ = ['StockLocationRepository']
