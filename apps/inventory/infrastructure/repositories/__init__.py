from .django_stock_location_repository import DjangoStockLocationRepository
from .in_memory_stock_location_repository import InMemoryStockLocationRepository

__all__ = ['DjangoStockLocationRepository', 'InMemoryStockLocationRepository']
