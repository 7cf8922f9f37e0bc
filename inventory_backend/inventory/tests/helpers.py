# inventory/tests/helpers.py

"""
Fixture builders shared by the inventory test modules.

Every builder creates the minimum valid graph:
Branch -> OperatingUnit -> InventoryLocation and Item -> ItemVariant (base unit).
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from catalog.models import Item, ItemVariant, UnitOfMeasure, UomConversion
from locations.models import Branch, InventoryLocation, OperatingUnit


def _suffix() -> str:
    return uuid.uuid4().hex[:6].upper()


def make_location(name="Main Store", *, location_type=InventoryLocation.LocationType.MAIN) -> InventoryLocation:
    branch = Branch.objects.create(code=f"BR-{_suffix()}", name="Downtown")
    unit = OperatingUnit.objects.create(
        branch=branch,
        name="Downtown Kitchen",
        type=OperatingUnit.UnitType.BRANCH_MAIN,
    )
    return InventoryLocation.objects.create(
        operating_unit=unit,
        name=name,
        type=location_type,
        is_primary=True,
    )


def make_unit(code, name=None) -> UnitOfMeasure:
    return UnitOfMeasure.objects.create(code=code, name=name or code.title(), symbol=code.lower())


def make_variant(uom, *, code=None, name="Flour") -> ItemVariant:
    code = code or f"VAR-{_suffix()}"
    item = Item.objects.create(
        sku=f"SKU-{code}",
        name=name,
        type=Item.ItemType.SUPPLY,
    )
    return ItemVariant.objects.create(item=item, uom=uom, code=code, name=f"{name} {code}")


def make_conversion(from_uom, to_uom, factor, *, is_active=True) -> UomConversion:
    return UomConversion.objects.create(
        from_uom=from_uom,
        to_uom=to_uom,
        factor=Decimal(str(factor)),
        is_active=is_active,
    )
