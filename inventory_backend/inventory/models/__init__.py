"""
PATH: inventory/models/__init__.py

Inventory ledger models export surface.
"""

from .stock import Stock
from .stock_movement import StockMovement
from .stock_movement_line import StockMovementLine

__all__ = [
    "Stock",
    "StockMovement",
    "StockMovementLine",
]
