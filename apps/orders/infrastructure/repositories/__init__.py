from .django_order_repository import DjangoOrderRepository
from .in_memory_order_repository import InMemoryOrderRepository

__all__ = ['DjangoOrderRepository', 'InMemoryOrderRepository']
