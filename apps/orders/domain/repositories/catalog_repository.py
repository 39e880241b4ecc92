"""
Read-only lookups for the collaborators an order consumes.
"""
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from ..collaborators import Promotion, ShippingMethod, Variant


class VariantCatalog(ABC):
    """Abstract lookup for purchasable variants."""

    @abstractmethod
    def find_by_id(self, variant_id: UUID) -> Optional[Variant]:
        """Find a variant by ID."""
        pass


class ShippingMethodCatalog(ABC):
    """Abstract lookup for shipping methods."""

    @abstractmethod
    def find_by_id(self, shipping_method_id: UUID) -> Optional[ShippingMethod]:
        """Find a shipping method by ID."""
        pass


class PromotionCatalog(ABC):
    """Abstract lookup for already-evaluated promotions."""

    @abstractmethod
    def find_by_id(self, promotion_id: UUID) -> Optional[Promotion]:
        """Find a promotion by ID."""
        pass

    @abstractmethod
    def find_by_code(self, code: str) -> Optional[Promotion]:
        """Find a promotion by coupon code (case-insensitive)."""
        pass
