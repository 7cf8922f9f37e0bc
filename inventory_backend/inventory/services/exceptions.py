# inventory/services/exceptions.py

"""
INVENTORY SERVICE ERRORS

Centralized domain errors for the stock ledger.

None of these are transient: retrying with the same inputs reproduces
the same failure. Every one of them aborts the enclosing transaction.
"""

from __future__ import annotations


class InventoryServiceError(Exception):
    """Base exception for all inventory service failures."""


class NotFoundError(InventoryServiceError):
    """Raised when a location, variant or unit reference does not exist."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class ConversionUnavailableError(InventoryServiceError):
    """Raised when no active conversion links two units of measure."""

    def __init__(self, from_code: str, to_code: str):
        self.from_code = from_code
        self.to_code = to_code
        super().__init__(f"No conversion found from {from_code} to {to_code}")


class ZeroConversionFactorError(InventoryServiceError, ZeroDivisionError):
    """Raised when a stored conversion factor of zero would have to be inverted."""


class InvalidReasonError(InventoryServiceError):
    """Raised when a stock-out is requested with a reason other than SALE / CONSUMPTION."""

    def __init__(self, reason):
        self.reason = reason
        super().__init__(f"Invalid reason for stock out: {reason}. Must be SALE or CONSUMPTION.")


class InvalidQuantityError(InventoryServiceError):
    """Raised when a quantity or amount is missing, malformed or out of range."""


class NoStockRecordError(InventoryServiceError):
    """Raised when a stock-out targets a (location, variant) pair with no balance row."""

    def __init__(self, variant_code: str, location_name: str):
        self.variant_code = variant_code
        self.location_name = location_name
        super().__init__(f"No stock found for variant {variant_code} at location {location_name}")


class InsufficientStockError(InventoryServiceError):
    """Raised when the requested base quantity exceeds on_hand - reserved."""

    def __init__(self, available, requested):
        self.available = available
        self.requested = requested
        super().__init__(f"Insufficient stock. Available: {available}, Requested: {requested}")
