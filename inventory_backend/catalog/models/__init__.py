"""
PATH: catalog/models/__init__.py

Catalog models export surface.
"""

from .item import Item, ItemVariant
from .unit_of_measure import UnitOfMeasure, UomConversion

__all__ = [
    "Item",
    "ItemVariant",
    "UnitOfMeasure",
    "UomConversion",
]
