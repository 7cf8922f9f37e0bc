# inventory/services/stock_queries.py

"""
STOCK BALANCE QUERIES (READ ONLY)

- stock_queryset(): balance rows with their location / variant loaded
- location_summary(): every balance at one location + totals
- variant_summary(): every location holding one variant + totals

Valuation uses the variant weighted-average cost (ItemVariant.avg_unit_cost),
the only cost the ledger maintains.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from inventory.models import Stock
from inventory.services import ledger
from inventory.services.quantities import FOURPLACES, ZERO


def stock_queryset():
    return Stock.objects.select_related(
        "inventory_location",
        "inventory_location__operating_unit",
        "item_variant",
        "item_variant__item",
        "item_variant__uom",
    )


def _value(stock: Stock) -> Decimal:
    return Decimal(stock.on_hand) * Decimal(stock.item_variant.avg_unit_cost or 0)


# Reported only, never stored: no column bound applies
def _money(value) -> Decimal:
    return Decimal(value).quantize(FOURPLACES, rounding=ROUND_HALF_UP)


def _totals(rows) -> dict:
    return {
        "total_on_hand": sum((Decimal(s.on_hand) for s in rows), ZERO),
        "total_reserved": sum((Decimal(s.reserved) for s in rows), ZERO),
        "total_available": sum((s.available for s in rows), ZERO),
        "total_inventory_value": _money(sum((_value(s) for s in rows), ZERO)),
    }


def location_summary(location_id) -> dict:
    location = ledger.load_location(location_id)
    rows = list(stock_queryset().filter(inventory_location=location).order_by("item_variant__code"))

    return {
        "inventory_location": {
            "id": location.pk,
            "name": location.name,
            "type": location.type,
            "operating_unit": location.operating_unit.name,
        },
        "summary": {"total_variants": len(rows), **_totals(rows)},
        "items": [
            {
                "item_variant_id": s.item_variant_id,
                "item_variant_code": s.item_variant.code,
                "item_variant_name": s.item_variant.name,
                "item_name": s.item_variant.item.name,
                "item_sku": s.item_variant.item.sku,
                "uom": s.item_variant.uom.code,
                "on_hand": s.on_hand,
                "reserved": s.reserved,
                "available": s.available,
                "avg_unit_cost": s.item_variant.avg_unit_cost,
                "total_value": _money(_value(s)),
            }
            for s in rows
        ],
    }


def variant_summary(variant_id) -> dict:
    variant = ledger.load_variant(variant_id)
    rows = list(stock_queryset().filter(item_variant=variant).order_by("inventory_location__name"))

    return {
        "item_variant": {
            "id": variant.pk,
            "code": variant.code,
            "name": variant.name,
            "item_name": variant.item.name,
            "item_sku": variant.item.sku,
            "uom": variant.uom.code,
        },
        "summary": {
            "total_locations": len(rows),
            "avg_unit_cost": variant.avg_unit_cost,
            "last_unit_cost": variant.last_unit_cost,
            **_totals(rows),
        },
        "locations": [
            {
                "inventory_location_id": s.inventory_location_id,
                "location_name": s.inventory_location.name,
                "location_type": s.inventory_location.type,
                "operating_unit": s.inventory_location.operating_unit.name,
                "on_hand": s.on_hand,
                "reserved": s.reserved,
                "available": s.available,
                "total_value": _money(_value(s)),
            }
            for s in rows
        ],
    }
