"""
======================================================
PATH: inventory/migrations/0001_initial.py
======================================================
MIGRATION: STOCK LEDGER TABLES

Creates:
- stock (balance per location + variant)
- StockMovement (immutable ledger header)
- StockMovementLine (immutable priced detail)
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


def _nullable_amount(help_text):
    return models.DecimalField(blank=True, decimal_places=4, help_text=help_text, max_digits=15, null=True)


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        ("locations", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Stock",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "on_hand",
                    models.DecimalField(
                        decimal_places=4,
                        default=Decimal("0"),
                        help_text="Quantity on hand in base unit (service-managed only)",
                        max_digits=15,
                    ),
                ),
                (
                    "reserved",
                    models.DecimalField(
                        decimal_places=4,
                        default=Decimal("0"),
                        help_text="Reserved quantity in base unit",
                        max_digits=15,
                    ),
                ),
                ("meta", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "inventory_location",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="stock_balances",
                        to="locations.inventorylocation",
                    ),
                ),
                (
                    "item_variant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="stock_balances",
                        to="catalog.itemvariant",
                    ),
                ),
            ],
            options={
                "db_table": "stock",
                "ordering": ["inventory_location", "item_variant"],
                "indexes": [
                    models.Index(fields=["item_variant"], name="stock_variant_idx"),
                    models.Index(fields=["on_hand"], name="stock_on_hand_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=["inventory_location", "item_variant"],
                        name="unique_stock_per_location",
                    ),
                    models.CheckConstraint(condition=models.Q(on_hand__gte=0), name="chk_stock_on_hand_gte_zero"),
                    models.CheckConstraint(condition=models.Q(reserved__gte=0), name="chk_stock_reserved_gte_zero"),
                ],
            },
        ),
        migrations.CreateModel(
            name="StockMovement",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("qty", models.DecimalField(decimal_places=4, help_text="Quantity in base unit", max_digits=15)),
                (
                    "reason",
                    models.CharField(
                        choices=[
                            ("TRANSFER", "Transfer"),
                            ("RETURN", "Return"),
                            ("SALE", "Sale"),
                            ("ADJUSTMENT", "Adjustment"),
                            ("CONSUMPTION", "Consumption"),
                            ("OPENING_BALANCE", "Opening Balance"),
                            ("COUNT_VARIANCE", "Count Variance"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("DRAFT", "Draft"), ("POSTED", "Posted"), ("REVERSED", "Reversed")],
                        default="POSTED",
                        max_length=10,
                    ),
                ),
                ("reference", models.CharField(blank=True, db_index=True, default="", max_length=255)),
                ("related_kind", models.CharField(blank=True, default="", max_length=100)),
                ("related_id", models.CharField(blank=True, default="", max_length=64)),
                ("notes", models.TextField(blank=True, default="")),
                ("meta", models.JSONField(blank=True, default=dict)),
                ("posted_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "from_location",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="outgoing_movements",
                        to="locations.inventorylocation",
                    ),
                ),
                (
                    "to_location",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="incoming_movements",
                        to="locations.inventorylocation",
                    ),
                ),
                (
                    "item_variant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="stock_movements",
                        to="catalog.itemvariant",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="stock_movements",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["from_location", "created_at"], name="mov_from_created_idx"),
                    models.Index(fields=["to_location", "created_at"], name="mov_to_created_idx"),
                    models.Index(fields=["item_variant", "created_at"], name="mov_variant_created_idx"),
                    models.Index(fields=["reason", "status"], name="mov_reason_status_idx"),
                    models.Index(fields=["related_kind", "related_id"], name="mov_related_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(qty__gt=0), name="chk_movement_qty_gt_zero"),
                    models.CheckConstraint(
                        condition=models.Q(from_location__isnull=False) | models.Q(to_location__isnull=False),
                        name="chk_movement_has_location",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="StockMovementLine",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("qty", models.DecimalField(decimal_places=4, help_text="Quantity in transaction unit", max_digits=15)),
                ("base_qty", models.DecimalField(decimal_places=4, help_text="Quantity in base unit", max_digits=15)),
                ("conversion_factor", models.DecimalField(decimal_places=6, default=Decimal("1"), max_digits=15)),
                ("unit_cost", _nullable_amount("Cost per base unit")),
                ("line_total", _nullable_amount("base_qty * unit_cost")),
                ("sale_price", _nullable_amount("Sale price per transaction unit")),
                ("sale_total", _nullable_amount("qty * sale_price")),
                ("profit_margin", _nullable_amount("Sale price per base unit - unit_cost")),
                ("profit_total", _nullable_amount("base_qty * profit_margin")),
                ("meta", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "stock_movement",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lines",
                        to="inventory.stockmovement",
                    ),
                ),
                (
                    "item_variant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="stock_movement_lines",
                        to="catalog.itemvariant",
                    ),
                ),
                (
                    "uom",
                    models.ForeignKey(
                        help_text="Unit of measure used in the transaction",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="stock_movement_lines",
                        to="catalog.unitofmeasure",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["stock_movement"], name="movline_movement_idx"),
                    models.Index(fields=["item_variant"], name="movline_variant_idx"),
                ],
            },
        ),
    ]
