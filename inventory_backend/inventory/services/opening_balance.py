# inventory/services/opening_balance.py

"""
======================================================
PATH: inventory/services/opening_balance.py
======================================================
REGISTER OPENING BALANCE (INBOUND)

Seeds or tops up stock of one variant at one location.

Canonical flow (single transaction):
1) Resolve location, variant (+ base unit) and entry unit
2) Resolve entry -> base conversion factor
3) base_qty = quantity * factor ; base_cost = unit_cost / factor
4) Create POSTED OPENING_BALANCE movement + one line
5) Upsert the (location, variant) balance with an atomic increment
6) If base_cost > 0: weighted-average costing on the variant
7) Return the materialized movement

Ordering rule:
- Step 5 MUST run before step 6 (see inventory.services.costing).
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from inventory.models import StockMovement, StockMovementLine
from inventory.services import ledger
from inventory.services.costing import apply_receipt_cost
from inventory.services.quantities import (
    ZERO,
    amount,
    factor as quantize_factor,
    optional_non_negative,
    qty as quantize_qty,
    require_positive,
)

logger = logging.getLogger(__name__)


def register_opening_balance(
    *,
    location_id,
    variant_id,
    quantity,
    entry_uom_id,
    unit_cost=None,
    user=None,
    reference=None,
    notes=None,
) -> StockMovement:
    """
    Register an opening balance for a variant at a location.

    quantity / unit_cost are expressed in the ENTRY unit; the ledger stores
    base-unit values and keeps the originals in movement.meta.
    """
    quantity = require_positive(quantity, field_name="quantity")
    unit_cost = optional_non_negative(unit_cost, field_name="unit_cost")

    with transaction.atomic():
        location = ledger.load_location(location_id)
        variant = ledger.load_variant(variant_id)
        entry_uom = ledger.load_uom(entry_uom_id)

        conversion_factor = ledger.base_factor(uom=entry_uom, variant=variant)

        base_qty = ledger.to_base_qty(quantity, conversion_factor)

        base_cost = None
        line_total = None
        if unit_cost is not None:
            base_cost = ZERO
            if conversion_factor != ZERO:
                base_cost = amount(unit_cost / conversion_factor, field_name="unit_cost")
            line_total = amount(base_qty * base_cost, field_name="line_total")

        movement = StockMovement.objects.create(
            from_location=None,
            to_location=location,
            item_variant=variant,
            user=user,
            qty=base_qty,
            reason=StockMovement.Reason.OPENING_BALANCE,
            status=StockMovement.Status.POSTED,
            reference=reference or "",
            notes=notes or "",
            meta={
                "original_qty": ledger.meta_value(quantity),
                "original_uom": entry_uom.code,
                "original_uom_id": ledger.meta_value(entry_uom.pk),
                "conversion_factor": ledger.meta_value(quantize_factor(conversion_factor)),
                "unit_cost": ledger.meta_value(unit_cost),
                "base_cost": ledger.meta_value(base_cost),
            },
            posted_at=timezone.now(),
        )

        StockMovementLine.objects.create(
            stock_movement=movement,
            item_variant=variant,
            uom=entry_uom,
            qty=quantize_qty(quantity),
            base_qty=base_qty,
            conversion_factor=quantize_factor(conversion_factor),
            unit_cost=base_cost,
            line_total=line_total,
        )

        ledger.increment_balance(location=location, variant=variant, base_qty=base_qty)

        if base_cost is not None and base_cost > ZERO:
            apply_receipt_cost(variant=variant, incoming_qty=base_qty, incoming_cost=base_cost)

        logger.info(
            "Opening balance posted",
            extra={
                "movement_id": str(movement.pk),
                "location_id": str(location.pk),
                "variant_id": str(variant.pk),
                "base_qty": str(base_qty),
                "base_cost": ledger.meta_value(base_cost),
            },
        )

        return ledger.materialize(movement)
