from .costing import apply_receipt_cost, weighted_average
from .opening_balance import register_opening_balance
from .stock_out import register_stock_out
from .uom import resolve_factor

__all__ = [
    "apply_receipt_cost",
    "weighted_average",
    "register_opening_balance",
    "register_stock_out",
    "resolve_factor",
]
