# catalog/models/item.py

"""
ITEMS + VARIANTS

Item is the catalog entry; ItemVariant is the stockable unit.

COSTING FIELDS (IMPORTANT):
- last_unit_cost / avg_unit_cost are per BASE unit (variant.uom)
- they are written ONLY by inventory.services.costing on priced receipts
- sales / consumption read avg_unit_cost as a snapshot, never write it
"""

import uuid
from decimal import Decimal

from django.db import models
from django.db.models import F, Q, Sum


class Item(models.Model):
    class ItemType(models.TextChoices):
        SUPPLY = "SUPPLY", "Supply"
        PRODUCT = "PRODUCT", "Product"
        ASSET = "ASSET", "Asset"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    sku = models.CharField(max_length=100, unique=True)
    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, default="")
    type = models.CharField(max_length=16, choices=ItemType.choices)

    is_stocked = models.BooleanField(default=True)
    is_perishable = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    meta = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["type", "is_active"], name="item_type_active_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.sku})"


class ItemVariant(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    item = models.ForeignKey(
        Item,
        on_delete=models.CASCADE,
        related_name="variants",
    )

    # Base unit: every stock quantity and cost for this variant is stored in it
    uom = models.ForeignKey(
        "catalog.UnitOfMeasure",
        on_delete=models.PROTECT,
        related_name="item_variants",
    )

    code = models.CharField(max_length=100, unique=True)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    barcode = models.CharField(max_length=64, blank=True, default="", db_index=True)

    track_lot = models.BooleanField(default=False)
    track_serial = models.BooleanField(default=False)

    last_unit_cost = models.DecimalField(
        max_digits=15,
        decimal_places=4,
        default=Decimal("0"),
        help_text="Last acquisition cost per base unit",
    )
    avg_unit_cost = models.DecimalField(
        max_digits=15,
        decimal_places=4,
        default=Decimal("0"),
        help_text="Weighted average cost per base unit",
    )
    sale_price = models.DecimalField(max_digits=15, decimal_places=4, null=True, blank=True)

    min_stock = models.DecimalField(max_digits=15, decimal_places=4, default=Decimal("0"))
    max_stock = models.DecimalField(max_digits=15, decimal_places=4, default=Decimal("0"))

    is_active = models.BooleanField(default=True)
    meta = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["item", "name"]
        indexes = [
            models.Index(fields=["item", "is_active"], name="variant_item_active_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(last_unit_cost__gte=0),
                name="chk_variant_last_cost_gte_zero",
            ),
            models.CheckConstraint(
                condition=Q(avg_unit_cost__gte=0),
                name="chk_variant_avg_cost_gte_zero",
            ),
        ]

    @property
    def total_on_hand(self) -> Decimal:
        return self.stock_balances.aggregate(total=Sum("on_hand")).get("total") or Decimal("0")

    @property
    def total_available(self) -> Decimal:
        return (
            self.stock_balances.aggregate(total=Sum(F("on_hand") - F("reserved"))).get("total")
            or Decimal("0")
        )

    def __str__(self):
        return f"{self.name} ({self.code})"
