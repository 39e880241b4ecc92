# Repository interfaces
from .order_repository import OrderRepository
from .catalog_repository import PromotionCatalog, ShippingMethodCatalog, VariantCatalog

__all__ = ['OrderRepository', 'VariantCatalog', 'ShippingMethodCatalog', 'PromotionCatalog']
