"""
Inventory Django ORM models.
"""
import uuid

from django.db import models


class StockLocationModel(models.Model):
    """Stock location model."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    is_default = models.BooleanField(default=False, db_index=True)

    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = 'stock_locations'
        ordering = ['name']

    def __str__(self):
        return self.name


class StockItemModel(models.Model):
    """Stock of one variant at one location."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    stock_location = models.ForeignKey(
        StockLocationModel,
        on_delete=models.CASCADE,
        related_name='stock_items',
    )
    variant_id = models.UUIDField(db_index=True)
    sku = models.CharField(max_length=255, blank=True)
    quantity_on_hand = models.IntegerField(default=0)
    backorderable = models.BooleanField(default=False)

    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = 'stock_items'
        constraints = [
            models.UniqueConstraint(
                fields=['stock_location', 'variant_id'],
                name='unique_stock_item_per_location',
            ),
        ]

    def __str__(self):
        return f"{self.variant_id} @ {self.stock_location_id}"


class StockReservationModel(models.Model):
    """Quantity held on a stock item for one origin."""

    stock_item = models.ForeignKey(StockItemModel, on_delete=models.CASCADE, related_name='reservations')
    origin_kind = models.CharField(max_length=30)
    origin_id = models.UUIDField()
    quantity = models.PositiveIntegerField()

    class Meta:
        db_table = 'stock_reservations'
        constraints = [
            models.UniqueConstraint(
                fields=['stock_item', 'origin_kind', 'origin_id'],
                name='unique_reservation_per_origin',
            ),
        ]


class StockMovementModel(models.Model):
    """Append-only record of a stock quantity change."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    stock_item = models.ForeignKey(StockItemModel, on_delete=models.CASCADE, related_name='movements')
    quantity = models.IntegerField()
    action = models.CharField(max_length=20)
    origin_kind = models.CharField(max_length=30)
    origin_id = models.UUIDField(db_index=True)
    reason = models.CharField(max_length=255, blank=True, null=True)

    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = 'stock_movements'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['origin_kind', 'origin_id']),
        ]

    def __str__(self):
        return f"{self.action} {self.quantity} ({self.origin_kind}:{self.origin_id})"
