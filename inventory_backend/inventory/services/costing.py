# inventory/services/costing.py

"""
WEIGHTED-AVERAGE COSTING ENGINE

Maintains ItemVariant.avg_unit_cost / last_unit_cost (per BASE unit).

ORDERING CONTRACT (IMPORTANT):
- The balance increment for the receipt happens FIRST.
- weighted_average() receives on_hand_after_receipt, i.e. the variant on-hand
  quantity that ALREADY includes incoming_qty, and subtracts it back out to
  get the pre-receipt quantity.
- Calling it with a pre-receipt on-hand value under-weights the prior
  average and silently corrupts cost.

Rules:
- last_unit_cost = incoming cost, unconditionally
- only priced receipts (cost > 0) reach this engine
- exits read avg_unit_cost and never write it
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db.models import Sum
from django.utils import timezone

from inventory.services.quantities import ZERO, amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CostUpdate:
    avg_unit_cost: Decimal
    last_unit_cost: Decimal


def weighted_average(
    *,
    on_hand_after_receipt,
    current_avg_cost,
    incoming_qty,
    incoming_cost,
) -> CostUpdate:
    on_hand_after_receipt = Decimal(on_hand_after_receipt or 0)
    current_avg_cost = Decimal(current_avg_cost or 0)
    incoming_qty = Decimal(incoming_qty)
    incoming_cost = Decimal(incoming_cost)

    prior_qty = max(ZERO, on_hand_after_receipt - incoming_qty)
    total_qty = prior_qty + incoming_qty

    if total_qty > ZERO:
        new_avg = ((prior_qty * current_avg_cost) + (incoming_qty * incoming_cost)) / total_qty
    else:
        new_avg = incoming_cost

    return CostUpdate(avg_unit_cost=amount(new_avg), last_unit_cost=amount(incoming_cost))


def apply_receipt_cost(*, variant, incoming_qty, incoming_cost) -> CostUpdate:
    """
    Recompute and persist the variant costs for a priced receipt.

    Must run inside the receipt transaction, AFTER the stock balance has been
    incremented. The variant row is locked so concurrent receipts of the same
    variant average one after the other.
    """
    from catalog.models import ItemVariant

    locked = ItemVariant.objects.select_for_update().get(pk=variant.pk)

    on_hand = locked.stock_balances.aggregate(total=Sum("on_hand")).get("total") or ZERO

    update = weighted_average(
        on_hand_after_receipt=on_hand,
        current_avg_cost=locked.avg_unit_cost,
        incoming_qty=incoming_qty,
        incoming_cost=incoming_cost,
    )

    ItemVariant.objects.filter(pk=locked.pk).update(
        avg_unit_cost=update.avg_unit_cost,
        last_unit_cost=update.last_unit_cost,
        updated_at=timezone.now(),
    )

    logger.info(
        "Variant cost updated",
        extra={
            "variant_id": str(locked.pk),
            "previous_avg_unit_cost": str(locked.avg_unit_cost),
            "avg_unit_cost": str(update.avg_unit_cost),
            "last_unit_cost": str(update.last_unit_cost),
        },
    )

    variant.avg_unit_cost = update.avg_unit_cost
    variant.last_unit_cost = update.last_unit_cost
    return update
