# locations/models.py

"""
LOCATION HIERARCHY

Branch -> OperatingUnit -> InventoryLocation

Stock balances and movements always point at an InventoryLocation.
Branches and operating units are master-data only; the ledger never
reads them directly.
"""

import uuid

from django.db import models


class Branch(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    code = models.CharField(max_length=50, unique=True, help_text="Unique branch identifier code")
    name = models.CharField(max_length=255)
    region = models.CharField(max_length=100, blank=True, default="")
    timezone = models.CharField(max_length=50, default="UTC")

    is_active = models.BooleanField(default=True)
    meta = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "branches"
        indexes = [
            models.Index(fields=["is_active", "region"], name="branch_active_region_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.code})"


class OperatingUnit(models.Model):
    class UnitType(models.TextChoices):
        BRANCH_MAIN = "BRANCH_MAIN", "Branch Main"
        BRANCH_BUFFER = "BRANCH_BUFFER", "Branch Buffer"
        BRANCH_RETURN = "BRANCH_RETURN", "Branch Return"
        EVENT_TEMP = "EVENT_TEMP", "Temporary Event"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    branch = models.ForeignKey(
        Branch,
        on_delete=models.CASCADE,
        related_name="operating_units",
    )

    name = models.CharField(max_length=255)
    type = models.CharField(max_length=20, choices=UnitType.choices)

    # Only meaningful for EVENT_TEMP units
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)

    is_active = models.BooleanField(default=True)
    meta = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["branch", "name"]
        indexes = [
            models.Index(fields=["branch", "is_active"], name="opunit_branch_active_idx"),
            models.Index(fields=["type", "is_active"], name="opunit_type_active_idx"),
        ]

    def __str__(self):
        return f"{self.branch.code} / {self.name}"


class InventoryLocation(models.Model):
    class LocationType(models.TextChoices):
        MAIN = "MAIN", "Main"
        TEMP = "TEMP", "Temporary"
        KITCHEN = "KITCHEN", "Kitchen"
        BAR = "BAR", "Bar"
        RETURN = "RETURN", "Returns"
        WASTE = "WASTE", "Waste"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    operating_unit = models.ForeignKey(
        OperatingUnit,
        on_delete=models.CASCADE,
        related_name="inventory_locations",
    )

    name = models.CharField(max_length=255)
    type = models.CharField(max_length=20, choices=LocationType.choices)

    is_primary = models.BooleanField(default=False)
    priority = models.IntegerField(default=0, help_text="Sort priority for display")
    is_active = models.BooleanField(default=True)
    notes = models.TextField(blank=True, default="")
    meta = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["operating_unit", "-is_primary", "priority", "name"]
        indexes = [
            models.Index(fields=["operating_unit", "is_primary"], name="invloc_unit_primary_idx"),
            models.Index(fields=["is_active"], name="invloc_active_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["operating_unit", "name"],
                name="unique_location_per_unit",
            ),
        ]

    def __str__(self):
        return self.name
