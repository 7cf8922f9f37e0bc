# inventory/api/serializers.py

"""
======================================================
PATH: inventory/api/serializers.py
======================================================
INVENTORY API SERIALIZERS

Command serializers validate request shape only (types, ranges, choices).
Business rules (conversion availability, stock sufficiency, costing) live in
inventory.services and surface as domain errors.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from catalog.models import ItemVariant, UnitOfMeasure
from inventory.models import Stock, StockMovement, StockMovementLine
from locations.models import InventoryLocation


# ======================================================
# COMMANDS
# ======================================================

class RegisterOpeningBalanceSerializer(serializers.Serializer):
    inventory_location_id = serializers.UUIDField()
    item_variant_id = serializers.UUIDField()
    quantity = serializers.DecimalField(
        max_digits=15,
        decimal_places=4,
        min_value=Decimal("0.0001"),
        help_text="Quantity in the entry unit (uom_id)",
    )
    uom_id = serializers.UUIDField(help_text="Unit the quantity and cost are expressed in")
    unit_cost = serializers.DecimalField(
        max_digits=15,
        decimal_places=4,
        min_value=Decimal("0"),
        required=False,
        allow_null=True,
        help_text="Cost per entry unit (optional)",
    )
    reference = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RegisterStockOutSerializer(serializers.Serializer):
    inventory_location_id = serializers.UUIDField()
    item_variant_id = serializers.UUIDField()
    qty = serializers.DecimalField(
        max_digits=15,
        decimal_places=4,
        min_value=Decimal("0.0001"),
        help_text="Quantity in the transaction unit (uom_id)",
    )
    uom_id = serializers.UUIDField()
    reason = serializers.ChoiceField(
        choices=[
            StockMovement.Reason.SALE,
            StockMovement.Reason.CONSUMPTION,
        ]
    )
    sale_price = serializers.DecimalField(
        max_digits=15,
        decimal_places=4,
        min_value=Decimal("0"),
        required=False,
        allow_null=True,
        help_text="Sale price per transaction unit (SALE only)",
    )
    reference = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


# ======================================================
# READ MODELS
# ======================================================

class InventoryLocationSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = InventoryLocation
        fields = ["id", "name", "type", "is_primary"]


class UnitOfMeasureSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = UnitOfMeasure
        fields = ["id", "code", "name", "symbol"]


class ItemVariantSummarySerializer(serializers.ModelSerializer):
    item_sku = serializers.CharField(source="item.sku", read_only=True)
    item_name = serializers.CharField(source="item.name", read_only=True)
    uom = UnitOfMeasureSummarySerializer(read_only=True)

    class Meta:
        model = ItemVariant
        fields = [
            "id",
            "code",
            "name",
            "item_sku",
            "item_name",
            "uom",
            "avg_unit_cost",
            "last_unit_cost",
        ]


class StockMovementLineSerializer(serializers.ModelSerializer):
    uom = UnitOfMeasureSummarySerializer(read_only=True)

    class Meta:
        model = StockMovementLine
        fields = [
            "id",
            "uom",
            "qty",
            "base_qty",
            "conversion_factor",
            "unit_cost",
            "line_total",
            "sale_price",
            "sale_total",
            "profit_margin",
            "profit_total",
            "created_at",
        ]


class StockMovementSerializer(serializers.ModelSerializer):
    from_location = InventoryLocationSummarySerializer(read_only=True)
    to_location = InventoryLocationSummarySerializer(read_only=True)
    item_variant = ItemVariantSummarySerializer(read_only=True)
    user = serializers.SerializerMethodField()
    lines = StockMovementLineSerializer(many=True, read_only=True)

    class Meta:
        model = StockMovement
        fields = [
            "id",
            "reason",
            "status",
            "qty",
            "from_location",
            "to_location",
            "item_variant",
            "user",
            "reference",
            "related_kind",
            "related_id",
            "notes",
            "meta",
            "lines",
            "posted_at",
            "created_at",
        ]

    def get_user(self, obj):
        user = getattr(obj, "user", None)
        if user is None:
            return None
        return {"id": user.pk, "username": user.get_username()}


class StockSerializer(serializers.ModelSerializer):
    inventory_location = InventoryLocationSummarySerializer(read_only=True)
    item_variant = ItemVariantSummarySerializer(read_only=True)
    available = serializers.DecimalField(max_digits=15, decimal_places=4, read_only=True)
    inventory_value = serializers.SerializerMethodField()

    class Meta:
        model = Stock
        fields = [
            "id",
            "inventory_location",
            "item_variant",
            "on_hand",
            "reserved",
            "available",
            "inventory_value",
            "updated_at",
        ]

    def get_inventory_value(self, obj) -> str:
        value = Decimal(obj.on_hand or 0) * Decimal(obj.item_variant.avg_unit_cost or 0)
        return str(value.quantize(Decimal("0.0001")))
