"""
Order Django ORM models.
"""
import uuid

from django.db import models


class OrderModel(models.Model):
    """Order model."""

    STATE_CHOICES = [
        ('cart', 'Cart'),
        ('address', 'Address'),
        ('delivery', 'Delivery'),
        ('payment', 'Payment'),
        ('confirm', 'Confirm'),
        ('complete', 'Complete'),
        ('canceled', 'Canceled'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    number = models.CharField(max_length=32, unique=True, db_index=True)
    store_id = models.UUIDField(db_index=True)
    user_id = models.UUIDField(null=True, blank=True, db_index=True)
    email = models.EmailField(max_length=254, null=True, blank=True)
    currency = models.CharField(max_length=3)
    state = models.CharField(max_length=20, choices=STATE_CHOICES, default='cart', db_index=True)

    item_total_cents = models.BigIntegerField(default=0)
    shipment_total_cents = models.BigIntegerField(default=0)
    adjustment_total_cents = models.BigIntegerField(default=0)
    total_cents = models.BigIntegerField(default=0)

    promotion_id = models.UUIDField(null=True, blank=True)
    promo_code = models.CharField(max_length=50, null=True, blank=True)

    # Addresses are value objects stored inline.
    ship_address = models.JSONField(null=True, blank=True)
    bill_address = models.JSONField(null=True, blank=True)
    shipping_method_id = models.UUIDField(null=True, blank=True)
    fulfillment_location_id = models.UUIDField(null=True, blank=True)
    special_instructions = models.CharField(max_length=500, null=True, blank=True)

    public_metadata = models.JSONField(default=dict, blank=True)
    private_metadata = models.JSONField(default=dict, blank=True)

    completed_at = models.DateTimeField(null=True, blank=True)
    canceled_at = models.DateTimeField(null=True, blank=True)
    version = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']

    def __str__(self):
        return self.number


class LineItemModel(models.Model):
    """Line item model."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(OrderModel, on_delete=models.CASCADE, related_name='line_items')
    variant_id = models.UUIDField()
    variant_name = models.CharField(max_length=255, blank=True)
    variant_sku = models.CharField(max_length=255, blank=True)
    is_digital = models.BooleanField(default=False)
    quantity = models.PositiveIntegerField(default=1)
    unit_price_cents = models.BigIntegerField()
    currency = models.CharField(max_length=3)
    position = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = 'order_line_items'
        ordering = ['position']

    def __str__(self):
        return f"{self.variant_name or self.variant_id} x {self.quantity}"


class OrderAdjustmentModel(models.Model):
    """Order-level adjustment model."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(OrderModel, on_delete=models.CASCADE, related_name='adjustments')
    scope = models.CharField(max_length=20, default='order')
    amount_cents = models.BigIntegerField()
    description = models.CharField(max_length=255)
    promotion_id = models.UUIDField(null=True, blank=True)
    eligible = models.BooleanField(default=True)
    mandatory = models.BooleanField(default=False)
    position = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = 'order_adjustments'
        ordering = ['position']


class LineItemAdjustmentModel(models.Model):
    """Line-item-level adjustment model."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    line_item = models.ForeignKey(LineItemModel, on_delete=models.CASCADE, related_name='adjustments')
    amount_cents = models.BigIntegerField()
    description = models.CharField(max_length=255)
    promotion_id = models.UUIDField(null=True, blank=True)
    eligible = models.BooleanField(default=True)
    position = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = 'order_line_item_adjustments'
        ordering = ['position']


class PaymentModel(models.Model):
    """Payment model."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(OrderModel, on_delete=models.CASCADE, related_name='payments')
    amount_cents = models.BigIntegerField()
    currency = models.CharField(max_length=3)
    payment_method_id = models.UUIDField(null=True, blank=True)
    payment_method_type = models.CharField(max_length=100)
    state = models.CharField(max_length=20, default='pending', db_index=True)
    reference_transaction_id = models.CharField(max_length=100, null=True, blank=True)
    gateway_auth_code = models.CharField(max_length=50, null=True, blank=True)
    gateway_error_code = models.CharField(max_length=100, null=True, blank=True)
    failure_reason = models.CharField(max_length=1000, null=True, blank=True)
    idempotency_key = models.CharField(max_length=255, null=True, blank=True, db_index=True)
    refunded_amount_cents = models.BigIntegerField(default=0)
    refund_keys = models.JSONField(default=list, blank=True)
    position = models.PositiveIntegerField(default=0)

    authorized_at = models.DateTimeField(null=True, blank=True)
    captured_at = models.DateTimeField(null=True, blank=True)
    voided_at = models.DateTimeField(null=True, blank=True)
    refunded_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = 'order_payments'
        ordering = ['position']


class ShipmentModel(models.Model):
    """Shipment model."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(OrderModel, on_delete=models.CASCADE, related_name='shipments')
    number = models.CharField(max_length=32, unique=True)
    shipping_method_id = models.UUIDField(null=True, blank=True)
    stock_location_id = models.UUIDField(null=True, blank=True)
    state = models.CharField(max_length=20, default='pending')

    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = 'order_shipments'
        ordering = ['created_at']

    def __str__(self):
        return self.number
