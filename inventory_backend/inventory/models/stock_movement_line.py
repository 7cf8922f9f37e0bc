# inventory/models/stock_movement_line.py

"""
LEDGER DETAIL LINE

One priced row per movement in the common case.

- qty is in the TRANSACTION unit (uom), base_qty in the variant base unit
- conversion_factor is the factor actually applied (transaction -> base)
- unit_cost / line_total are per BASE unit
- sale_* / profit_* are only populated for SALE movements with a price
- Immutable like its header
"""

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


def _nullable_amount(**kwargs):
    return models.DecimalField(max_digits=15, decimal_places=4, null=True, blank=True, **kwargs)


class StockMovementLine(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    stock_movement = models.ForeignKey(
        "inventory.StockMovement",
        on_delete=models.CASCADE,
        related_name="lines",
    )
    item_variant = models.ForeignKey(
        "catalog.ItemVariant",
        on_delete=models.PROTECT,
        related_name="stock_movement_lines",
    )
    uom = models.ForeignKey(
        "catalog.UnitOfMeasure",
        on_delete=models.PROTECT,
        related_name="stock_movement_lines",
        help_text="Unit of measure used in the transaction",
    )

    qty = models.DecimalField(max_digits=15, decimal_places=4, help_text="Quantity in transaction unit")
    base_qty = models.DecimalField(max_digits=15, decimal_places=4, help_text="Quantity in base unit")
    conversion_factor = models.DecimalField(max_digits=15, decimal_places=6, default=Decimal("1"))

    unit_cost = _nullable_amount(help_text="Cost per base unit")
    line_total = _nullable_amount(help_text="base_qty * unit_cost")

    sale_price = _nullable_amount(help_text="Sale price per transaction unit")
    sale_total = _nullable_amount(help_text="qty * sale_price")
    profit_margin = _nullable_amount(help_text="Sale price per base unit - unit_cost")
    profit_total = _nullable_amount(help_text="base_qty * profit_margin")

    meta = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["stock_movement"], name="movline_movement_idx"),
            models.Index(fields=["item_variant"], name="movline_variant_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("StockMovementLine records are immutable")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("StockMovementLine records are immutable and cannot be deleted")

    def __str__(self):
        return f"{self.stock_movement_id} | {self.qty} {self.uom_id}"
