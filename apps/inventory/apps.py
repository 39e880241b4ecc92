"""
Inventory app configuration.
Receiving side of the order's stock reservation, finalization and release requests.
"""
from django.apps import AppConfig


class InventoryConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.inventory'
    label = 'inventory'
    verbose_name = 'Inventory'
