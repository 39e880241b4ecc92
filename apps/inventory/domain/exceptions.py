"""
Inventory domain exceptions.
"""
from shared.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)


class InvalidStockQuantityError(ValidationError):
    """Raised when a stock quantity is not positive."""

    def __init__(self, prefix: str = "StockItem"):
        super().__init__(
            message="Quantity must be positive.",
            field="quantity",
            code=f"{prefix}.InvalidQuantity",
        )


class StockItemInsufficientStockError(InsufficientStockError):
    """Raised when a stock item cannot cover a reservation or decrement."""

    def __init__(self, variant_id: str, requested: int, available: int):
        super().__init__(
            variant_id=variant_id,
            requested=requested,
            available=available,
            code="StockItem.InsufficientStock",
        )


class StockLocationInsufficientStockError(InsufficientStockError):
    """Raised when a location does not stock the requested variant at all."""

    def __init__(self, variant_id: str, requested: int):
        super().__init__(
            variant_id=variant_id,
            requested=requested,
            available=0,
            code="StockLocation.InsufficientStock",
        )


class StockLocationNotFoundError(EntityNotFoundError):
    """Raised when a stock location is not found."""

    def __init__(self, identifier: str):
        super().__init__(entity_name="StockLocation", entity_id=identifier, code="StockLocation.NotFound")
        self.identifier = identifier
