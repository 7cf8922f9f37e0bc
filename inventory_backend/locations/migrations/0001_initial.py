from __future__ import annotations

import uuid

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Branch",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("code", models.CharField(help_text="Unique branch identifier code", max_length=50, unique=True)),
                ("name", models.CharField(max_length=255)),
                ("region", models.CharField(blank=True, default="", max_length=100)),
                ("timezone", models.CharField(default="UTC", max_length=50)),
                ("is_active", models.BooleanField(default=True)),
                ("meta", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
                "verbose_name_plural": "branches",
                "indexes": [
                    models.Index(fields=["is_active", "region"], name="branch_active_region_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OperatingUnit",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("BRANCH_MAIN", "Branch Main"),
                            ("BRANCH_BUFFER", "Branch Buffer"),
                            ("BRANCH_RETURN", "Branch Return"),
                            ("EVENT_TEMP", "Temporary Event"),
                        ],
                        max_length=20,
                    ),
                ),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("meta", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "branch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="operating_units",
                        to="locations.branch",
                    ),
                ),
            ],
            options={
                "ordering": ["branch", "name"],
                "indexes": [
                    models.Index(fields=["branch", "is_active"], name="opunit_branch_active_idx"),
                    models.Index(fields=["type", "is_active"], name="opunit_type_active_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="InventoryLocation",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("MAIN", "Main"),
                            ("TEMP", "Temporary"),
                            ("KITCHEN", "Kitchen"),
                            ("BAR", "Bar"),
                            ("RETURN", "Returns"),
                            ("WASTE", "Waste"),
                        ],
                        max_length=20,
                    ),
                ),
                ("is_primary", models.BooleanField(default=False)),
                ("priority", models.IntegerField(default=0, help_text="Sort priority for display")),
                ("is_active", models.BooleanField(default=True)),
                ("notes", models.TextField(blank=True, default="")),
                ("meta", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "operating_unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="inventory_locations",
                        to="locations.operatingunit",
                    ),
                ),
            ],
            options={
                "ordering": ["operating_unit", "-is_primary", "priority", "name"],
                "indexes": [
                    models.Index(fields=["operating_unit", "is_primary"], name="invloc_unit_primary_idx"),
                    models.Index(fields=["is_active"], name="invloc_active_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=["operating_unit", "name"], name="unique_location_per_unit"),
                ],
            },
        ),
    ]
