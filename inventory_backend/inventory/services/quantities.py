# inventory/services/quantities.py

"""
Fixed-point helpers shared by the ledger services.

Quantities and costs carry 4 fractional digits, conversion factors 6.
Binary floats never enter the ledger: every input goes through Decimal(str(v)).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from inventory.services.exceptions import InvalidQuantityError

FOURPLACES = Decimal("0.0001")
SIXPLACES = Decimal("0.000001")
ZERO = Decimal("0")
ONE = Decimal("1")

# Largest magnitude a DecimalField(max_digits=15, decimal_places=4) column holds
MAX_STORABLE = Decimal("99999999999.9999")


def to_decimal(value, *, field_name="value") -> Decimal:
    if value is None or value == "" or isinstance(value, bool):
        raise InvalidQuantityError(f"{field_name} is required")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidQuantityError(f"{field_name} must be a valid decimal") from exc
    if not result.is_finite():
        raise InvalidQuantityError(f"{field_name} must be a finite decimal")
    return result


def _storable(value, *, field_name) -> Decimal:
    value = Decimal(value)
    # checked before quantize too: quantize itself fails past the context precision
    if abs(value) <= MAX_STORABLE:
        value = value.quantize(FOURPLACES, rounding=ROUND_HALF_UP)
        if abs(value) <= MAX_STORABLE:
            return value
    raise InvalidQuantityError(f"{field_name} exceeds the largest storable value ({MAX_STORABLE})")


def qty(value, *, field_name="quantity") -> Decimal:
    return _storable(value, field_name=field_name)


def amount(value, *, field_name="amount"):
    if value is None:
        return None
    return _storable(value, field_name=field_name)


def factor(value) -> Decimal:
    return Decimal(value).quantize(SIXPLACES, rounding=ROUND_HALF_UP)


def require_positive(value, *, field_name) -> Decimal:
    v = to_decimal(value, field_name=field_name)
    if v <= ZERO:
        raise InvalidQuantityError(f"{field_name} must be greater than zero")
    return v


def optional_non_negative(value, *, field_name):
    if value is None or value == "":
        return None
    v = to_decimal(value, field_name=field_name)
    if v < ZERO:
        raise InvalidQuantityError(f"{field_name} cannot be negative")
    return v
