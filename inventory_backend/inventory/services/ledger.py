# inventory/services/ledger.py

"""
======================================================
PATH: inventory/services/ledger.py
======================================================
STOCK LEDGER PRIMITIVES

Shared building blocks for the opening-balance and stock-out services:
- reference loading (location / variant / unit) with NotFoundError
- transaction-unit -> base-unit factor resolution
- atomic balance upsert (increment) and conditional decrement
- movement materialization for the caller

Every function here expects to run INSIDE the caller's transaction.atomic().
Balance rows are only ever changed with F() expressions, never with
read-modify-write in Python.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from catalog.models import ItemVariant, UnitOfMeasure
from inventory.models import Stock, StockMovement
from inventory.services.exceptions import (
    ConversionUnavailableError,
    InsufficientStockError,
    InvalidQuantityError,
    NoStockRecordError,
    NotFoundError,
)
from inventory.services.quantities import MAX_STORABLE, ZERO, qty as quantize_qty
from inventory.services.uom import ConversionNotFound, resolve_factor
from locations.models import InventoryLocation


def _get_or_not_found(queryset, pk, *, entity: str):
    try:
        return queryset.get(pk=pk)
    except (queryset.model.DoesNotExist, ValidationError, ValueError, TypeError) as exc:
        raise NotFoundError(entity, pk) from exc


def load_location(location_id) -> InventoryLocation:
    return _get_or_not_found(InventoryLocation.objects.all(), location_id, entity="Inventory location")


def load_variant(variant_id) -> ItemVariant:
    return _get_or_not_found(
        ItemVariant.objects.select_related("item", "uom"),
        variant_id,
        entity="Item variant",
    )


def load_uom(uom_id) -> UnitOfMeasure:
    return _get_or_not_found(UnitOfMeasure.objects.all(), uom_id, entity="Unit of measure")


def base_factor(*, uom: UnitOfMeasure, variant: ItemVariant) -> Decimal:
    """Factor that turns a quantity in `uom` into the variant base unit."""
    resolution = resolve_factor(uom.pk, variant.uom_id)
    if isinstance(resolution, ConversionNotFound):
        raise ConversionUnavailableError(uom.code, variant.uom.code)
    return resolution.value


def to_base_qty(quantity: Decimal, conversion_factor: Decimal) -> Decimal:
    base_qty = quantize_qty(quantity * conversion_factor, field_name="base quantity")
    if base_qty <= ZERO:
        raise InvalidQuantityError("quantity is too small to be represented in the base unit")
    return base_qty


def increment_balance(*, location: InventoryLocation, variant: ItemVariant, base_qty: Decimal) -> None:
    """
    Idempotent upsert: increment on_hand if the row exists, else create it.

    A concurrent first receipt for the same pair can win the insert; the
    unique constraint then fires inside a savepoint and we fall back to the
    increment.
    """
    if _increment_existing(location=location, variant=variant, base_qty=base_qty):
        return

    try:
        with transaction.atomic():
            Stock.objects.create(
                inventory_location=location,
                item_variant=variant,
                on_hand=quantize_qty(base_qty),
                reserved=ZERO,
            )
    except IntegrityError:
        if not _increment_existing(location=location, variant=variant, base_qty=base_qty):
            raise


def _increment_existing(*, location, variant, base_qty) -> bool:
    base_qty = quantize_qty(base_qty)
    rows = Stock.objects.filter(inventory_location=location, item_variant=variant)
    updated = rows.filter(on_hand__lte=MAX_STORABLE - base_qty).update(
        on_hand=F("on_hand") + base_qty,
        updated_at=timezone.now(),
    )
    if updated == 0 and rows.exists():
        raise InvalidQuantityError("on_hand would exceed the largest storable value")
    return updated > 0


def lock_balance(*, location: InventoryLocation, variant: ItemVariant) -> Stock:
    """Read the balance row with SELECT ... FOR UPDATE (held until commit)."""
    try:
        return Stock.objects.select_for_update().get(
            inventory_location=location,
            item_variant=variant,
        )
    except Stock.DoesNotExist as exc:
        raise NoStockRecordError(variant.code, location.name) from exc


def require_available(stock: Stock, base_qty: Decimal) -> Decimal:
    available = stock.available
    if base_qty > available:
        raise InsufficientStockError(available=available, requested=base_qty)
    return available


def decrement_balance(*, stock: Stock, base_qty: Decimal) -> None:
    """
    Conditional decrement: only succeeds while on_hand - reserved >= base_qty.
    Zero affected rows means another posting drained the row first.
    """
    base_qty = quantize_qty(base_qty)
    updated = Stock.objects.filter(
        pk=stock.pk,
        on_hand__gte=F("reserved") + base_qty,
    ).update(
        on_hand=F("on_hand") - base_qty,
        updated_at=timezone.now(),
    )
    if updated == 0:
        stock.refresh_from_db(fields=["on_hand", "reserved"])
        raise InsufficientStockError(available=stock.available, requested=base_qty)


def materialize(movement: StockMovement) -> StockMovement:
    return (
        StockMovement.objects.select_related(
            "from_location",
            "to_location",
            "item_variant__item",
            "item_variant__uom",
            "user",
        )
        .prefetch_related("lines", "lines__uom")
        .get(pk=movement.pk)
    )


def meta_value(value):
    """JSON-safe representation for movement meta (Decimals and UUIDs as strings)."""
    if value is None:
        return None
    return str(value)
