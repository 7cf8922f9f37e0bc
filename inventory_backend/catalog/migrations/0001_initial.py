from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="UnitOfMeasure",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("code", models.CharField(help_text="Unique unit code (e.g. KG, L, UN)", max_length=20, unique=True)),
                ("name", models.CharField(max_length=100)),
                ("symbol", models.CharField(max_length=10)),
                ("precision", models.PositiveSmallIntegerField(default=2, help_text="Decimal places used for display")),
                ("is_decimal", models.BooleanField(default=True, help_text="Whether fractional quantities are allowed")),
                ("is_active", models.BooleanField(default=True)),
                ("meta", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["code"],
                "verbose_name": "unit of measure",
                "verbose_name_plural": "units of measure",
            },
        ),
        migrations.CreateModel(
            name="UomConversion",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "factor",
                    models.DecimalField(
                        decimal_places=6,
                        help_text="quantity_in_from * factor = quantity_in_to",
                        max_digits=15,
                    ),
                ),
                (
                    "tolerance",
                    models.DecimalField(
                        decimal_places=4,
                        default=Decimal("0"),
                        help_text="Acceptable variance percentage",
                        max_digits=8,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("meta", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "from_uom",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="conversions_from",
                        to="catalog.unitofmeasure",
                    ),
                ),
                (
                    "to_uom",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="conversions_to",
                        to="catalog.unitofmeasure",
                    ),
                ),
            ],
            options={
                "ordering": ["from_uom__code", "to_uom__code"],
                "indexes": [
                    models.Index(fields=["is_active"], name="uomconv_active_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=["from_uom", "to_uom"], name="unique_conversion_pair"),
                    models.CheckConstraint(
                        condition=models.Q(factor__gt=0),
                        name="chk_uomconversion_factor_gt_zero",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(from_uom=models.F("to_uom"), _negated=True),
                        name="chk_uomconversion_distinct_units",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Item",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("sku", models.CharField(max_length=100, unique=True)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "type",
                    models.CharField(
                        choices=[("SUPPLY", "Supply"), ("PRODUCT", "Product"), ("ASSET", "Asset")],
                        max_length=16,
                    ),
                ),
                ("is_stocked", models.BooleanField(default=True)),
                ("is_perishable", models.BooleanField(default=False)),
                ("is_active", models.BooleanField(default=True)),
                ("meta", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["type", "is_active"], name="item_type_active_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ItemVariant",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("code", models.CharField(max_length=100, unique=True)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("barcode", models.CharField(blank=True, db_index=True, default="", max_length=64)),
                ("track_lot", models.BooleanField(default=False)),
                ("track_serial", models.BooleanField(default=False)),
                (
                    "last_unit_cost",
                    models.DecimalField(
                        decimal_places=4,
                        default=Decimal("0"),
                        help_text="Last acquisition cost per base unit",
                        max_digits=15,
                    ),
                ),
                (
                    "avg_unit_cost",
                    models.DecimalField(
                        decimal_places=4,
                        default=Decimal("0"),
                        help_text="Weighted average cost per base unit",
                        max_digits=15,
                    ),
                ),
                ("sale_price", models.DecimalField(blank=True, decimal_places=4, max_digits=15, null=True)),
                ("min_stock", models.DecimalField(decimal_places=4, default=Decimal("0"), max_digits=15)),
                ("max_stock", models.DecimalField(decimal_places=4, default=Decimal("0"), max_digits=15)),
                ("is_active", models.BooleanField(default=True)),
                ("meta", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="variants",
                        to="catalog.item",
                    ),
                ),
                (
                    "uom",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="item_variants",
                        to="catalog.unitofmeasure",
                    ),
                ),
            ],
            options={
                "ordering": ["item", "name"],
                "indexes": [
                    models.Index(fields=["item", "is_active"], name="variant_item_active_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(last_unit_cost__gte=0),
                        name="chk_variant_last_cost_gte_zero",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(avg_unit_cost__gte=0),
                        name="chk_variant_avg_cost_gte_zero",
                    ),
                ],
            },
        ),
    ]
