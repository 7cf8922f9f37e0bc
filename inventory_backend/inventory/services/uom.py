# inventory/services/uom.py

"""
UNIT-OF-MEASURE CONVERSION RESOLVER

Treats the stored UomConversion rows as a directed weighted graph:

    from_uom --factor--> to_uom      (qty_in_from * factor = qty_in_to)

Resolution order for (A, B):
1) A == B                  -> Factor(1), no lookup
2) active edge A -> B      -> Factor(edge.factor)
3) active edge B -> A      -> Factor(1 / edge.factor)   (derived, never persisted)
4) otherwise               -> ConversionNotFound

Inactive edges are invisible in both directions.

resolve_factor() is pure: the edge lookup is injected, so the graph can be a
dict in tests and the ORM in production (active_edge_lookup).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional, Union

from inventory.services.exceptions import ZeroConversionFactorError
from inventory.services.quantities import ONE, ZERO, factor as quantize_factor


@dataclass(frozen=True)
class ConversionEdge:
    factor: Decimal
    tolerance: Decimal = ZERO


@dataclass(frozen=True)
class Factor:
    value: Decimal
    tolerance: Decimal = ZERO
    derived: bool = False


@dataclass(frozen=True)
class ConversionNotFound:
    from_uom_id: object
    to_uom_id: object


Resolution = Union[Factor, ConversionNotFound]
EdgeLookup = Callable[[object, object], Optional[ConversionEdge]]


def active_edge_lookup(from_uom_id, to_uom_id) -> Optional[ConversionEdge]:
    from catalog.models import UomConversion

    row = (
        UomConversion.objects.filter(
            from_uom_id=from_uom_id,
            to_uom_id=to_uom_id,
            is_active=True,
        )
        .values("factor", "tolerance")
        .first()
    )
    if row is None:
        return None
    return ConversionEdge(factor=Decimal(row["factor"]), tolerance=Decimal(row["tolerance"] or 0))


def resolve_factor(from_uom_id, to_uom_id, *, lookup: EdgeLookup = active_edge_lookup) -> Resolution:
    if from_uom_id == to_uom_id:
        return Factor(value=ONE)

    direct = lookup(from_uom_id, to_uom_id)
    if direct is not None:
        return Factor(value=Decimal(direct.factor), tolerance=direct.tolerance)

    reverse = lookup(to_uom_id, from_uom_id)
    if reverse is not None:
        if Decimal(reverse.factor) == ZERO:
            raise ZeroConversionFactorError(
                f"Conversion {to_uom_id} -> {from_uom_id} has a zero factor and cannot be inverted"
            )
        return Factor(
            value=quantize_factor(ONE / Decimal(reverse.factor)),
            tolerance=reverse.tolerance,
            derived=True,
        )

    return ConversionNotFound(from_uom_id=from_uom_id, to_uom_id=to_uom_id)
