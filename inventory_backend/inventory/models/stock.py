# inventory/models/stock.py

"""
STOCK BALANCE (per location, per variant)

GUARANTEES:
- One row per (inventory_location, item_variant) (DB unique constraint)
- on_hand >= 0 and reserved >= 0 (DB check constraints)
- available = on_hand - reserved (derived, never stored)
- Created lazily by the ledger on the first movement into a location
- Quantities are ALWAYS in the variant base unit
- on_hand is mutated ONLY by inventory services, through atomic F() updates
"""

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class Stock(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    inventory_location = models.ForeignKey(
        "locations.InventoryLocation",
        on_delete=models.CASCADE,
        related_name="stock_balances",
    )
    item_variant = models.ForeignKey(
        "catalog.ItemVariant",
        on_delete=models.CASCADE,
        related_name="stock_balances",
    )

    on_hand = models.DecimalField(
        max_digits=15,
        decimal_places=4,
        default=Decimal("0"),
        help_text="Quantity on hand in base unit (service-managed only)",
    )
    reserved = models.DecimalField(
        max_digits=15,
        decimal_places=4,
        default=Decimal("0"),
        help_text="Reserved quantity in base unit",
    )

    meta = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "stock"
        ordering = ["inventory_location", "item_variant"]
        indexes = [
            models.Index(fields=["item_variant"], name="stock_variant_idx"),
            models.Index(fields=["on_hand"], name="stock_on_hand_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["inventory_location", "item_variant"],
                name="unique_stock_per_location",
            ),
            models.CheckConstraint(
                condition=Q(on_hand__gte=0),
                name="chk_stock_on_hand_gte_zero",
            ),
            models.CheckConstraint(
                condition=Q(reserved__gte=0),
                name="chk_stock_reserved_gte_zero",
            ),
        ]

    @property
    def available(self) -> Decimal:
        return Decimal(self.on_hand or 0) - Decimal(self.reserved or 0)

    def has_available(self, quantity) -> bool:
        return self.available >= Decimal(str(quantity))

    def delete(self, *args, **kwargs):
        if Decimal(self.on_hand or 0) > 0:
            raise ValidationError("Cannot delete a stock balance while on_hand > 0.")
        return super().delete(*args, **kwargs)

    def __str__(self):
        return f"{self.inventory_location_id} | {self.item_variant_id} | {self.on_hand}"
