# inventory/apps.py

"""
INVENTORY APP CONFIG

Stock ledger + costing engine:
- Stock balances per (location, variant)
- Immutable StockMovement / StockMovementLine ledger
- Opening balance + stock-out services
"""

from django.apps import AppConfig


class InventoryConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "inventory"
    verbose_name = "Inventory Ledger"
