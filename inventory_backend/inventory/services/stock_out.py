# inventory/services/stock_out.py

"""
======================================================
PATH: inventory/services/stock_out.py
======================================================
REGISTER STOCK OUT (OUTBOUND)

Removes stock of one variant from one location for a SALE or a
CONSUMPTION.

Canonical flow (single transaction):
1) Validate reason (before touching the database)
2) Resolve location, variant (+ base unit) and transaction unit
3) Resolve transaction -> base factor, base_qty = quantity * factor
4) Lock the balance row (SELECT ... FOR UPDATE)
5) Reject if base_qty > on_hand - reserved
6) Cost the exit at the variant weighted average (read only)
7) SALE with a price: sale_total, profit_margin (per base unit), profit_total
8) Create POSTED movement + one line
9) Conditional decrement of on_hand
10) Return the materialized movement

Exits never change avg_unit_cost.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from inventory.models import StockMovement, StockMovementLine
from inventory.services import ledger
from inventory.services.exceptions import InsufficientStockError, InvalidReasonError
from inventory.services.quantities import (
    ZERO,
    amount,
    factor as quantize_factor,
    optional_non_negative,
    qty as quantize_qty,
    require_positive,
)

logger = logging.getLogger(__name__)


def register_stock_out(
    *,
    location_id,
    variant_id,
    quantity,
    transaction_uom_id,
    reason,
    sale_price=None,
    user=None,
    reference=None,
    notes=None,
) -> StockMovement:
    """
    Register a stock exit (SALE / CONSUMPTION) for a variant at a location.

    sale_price is per TRANSACTION unit; it is ignored for CONSUMPTION.
    """
    if not isinstance(reason, str) or reason not in StockMovement.EXIT_REASONS:
        raise InvalidReasonError(reason)

    quantity = require_positive(quantity, field_name="quantity")
    sale_price = optional_non_negative(sale_price, field_name="sale_price")
    if reason != StockMovement.Reason.SALE:
        sale_price = None

    with transaction.atomic():
        location = ledger.load_location(location_id)
        variant = ledger.load_variant(variant_id)
        transaction_uom = ledger.load_uom(transaction_uom_id)

        conversion_factor = ledger.base_factor(uom=transaction_uom, variant=variant)
        base_qty = ledger.to_base_qty(quantity, conversion_factor)

        stock = ledger.lock_balance(location=location, variant=variant)
        try:
            ledger.require_available(stock, base_qty)
        except InsufficientStockError as exc:
            _log_rejected(location, variant, exc)
            raise

        unit_cost = amount(variant.avg_unit_cost)
        line_total = amount(base_qty * unit_cost, field_name="line_total")

        sale_total = None
        profit_margin = None
        profit_total = None
        if sale_price is not None:
            sale_total = amount(quantity * sale_price, field_name="sale_total")
            sale_price_base = sale_price / conversion_factor if conversion_factor != ZERO else ZERO
            profit_margin = amount(sale_price_base - unit_cost, field_name="profit_margin")
            profit_total = amount(base_qty * profit_margin, field_name="profit_total")

        movement = StockMovement.objects.create(
            from_location=location,
            to_location=None,
            item_variant=variant,
            user=user,
            qty=base_qty,
            reason=reason,
            status=StockMovement.Status.POSTED,
            reference=reference or "",
            notes=notes or "",
            meta={
                "original_qty": ledger.meta_value(quantity),
                "original_uom": transaction_uom.code,
                "original_uom_id": ledger.meta_value(transaction_uom.pk),
                "conversion_factor": ledger.meta_value(quantize_factor(conversion_factor)),
                "unit_cost": ledger.meta_value(unit_cost),
                "sale_price": ledger.meta_value(sale_price),
                "profit_margin": ledger.meta_value(profit_margin),
            },
            posted_at=timezone.now(),
        )

        StockMovementLine.objects.create(
            stock_movement=movement,
            item_variant=variant,
            uom=transaction_uom,
            qty=quantize_qty(quantity),
            base_qty=base_qty,
            conversion_factor=quantize_factor(conversion_factor),
            unit_cost=unit_cost,
            line_total=line_total,
            sale_price=amount(sale_price, field_name="sale_price"),
            sale_total=sale_total,
            profit_margin=profit_margin,
            profit_total=profit_total,
        )

        try:
            ledger.decrement_balance(stock=stock, base_qty=base_qty)
        except InsufficientStockError as exc:
            _log_rejected(location, variant, exc)
            raise

        logger.info(
            "Stock out posted",
            extra={
                "movement_id": str(movement.pk),
                "reason": reason,
                "location_id": str(location.pk),
                "variant_id": str(variant.pk),
                "base_qty": str(base_qty),
                "unit_cost": str(unit_cost),
            },
        )

        return ledger.materialize(movement)


def _log_rejected(location, variant, exc: InsufficientStockError) -> None:
    logger.warning(
        "Stock out rejected: insufficient stock",
        extra={
            "location_id": str(location.pk),
            "variant_id": str(variant.pk),
            "available": str(exc.available),
            "requested": str(exc.requested),
        },
    )
