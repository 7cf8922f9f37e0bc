# catalog/models/unit_of_measure.py

"""
UNITS OF MEASURE + CONVERSION EDGES

UnitOfMeasure:
- code is the stable identifier (KG, GR, L, UN ...)
- precision / is_decimal describe how quantities in this unit are displayed
- rows referenced by a conversion or a variant base unit cannot be deleted (PROTECT)

UomConversion:
- ONE directed edge: quantity_in_from * factor = quantity_in_to
- at most one edge per ordered pair (DB unique constraint)
- the reverse direction is NEVER stored twice; the ledger derives it on demand
  (see inventory.services.uom)
- tolerance is a percentage used by count-variance checks
"""

import uuid
from decimal import Decimal

from django.db import models
from django.db.models import F, Q


class UnitOfMeasure(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    code = models.CharField(max_length=20, unique=True, help_text="Unique unit code (e.g. KG, L, UN)")
    name = models.CharField(max_length=100)
    symbol = models.CharField(max_length=10)

    precision = models.PositiveSmallIntegerField(default=2, help_text="Decimal places used for display")
    is_decimal = models.BooleanField(default=True, help_text="Whether fractional quantities are allowed")

    is_active = models.BooleanField(default=True)
    meta = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]
        verbose_name = "unit of measure"
        verbose_name_plural = "units of measure"

    def __str__(self):
        return self.code


class UomConversion(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    from_uom = models.ForeignKey(
        UnitOfMeasure,
        on_delete=models.PROTECT,
        related_name="conversions_from",
    )
    to_uom = models.ForeignKey(
        UnitOfMeasure,
        on_delete=models.PROTECT,
        related_name="conversions_to",
    )

    factor = models.DecimalField(
        max_digits=15,
        decimal_places=6,
        help_text="quantity_in_from * factor = quantity_in_to",
    )
    tolerance = models.DecimalField(
        max_digits=8,
        decimal_places=4,
        default=Decimal("0"),
        help_text="Acceptable variance percentage",
    )

    is_active = models.BooleanField(default=True)
    meta = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["from_uom__code", "to_uom__code"]
        indexes = [
            models.Index(fields=["is_active"], name="uomconv_active_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["from_uom", "to_uom"],
                name="unique_conversion_pair",
            ),
            models.CheckConstraint(
                condition=Q(factor__gt=0),
                name="chk_uomconversion_factor_gt_zero",
            ),
            models.CheckConstraint(
                condition=~Q(from_uom=F("to_uom")),
                name="chk_uomconversion_distinct_units",
            ),
        ]

    def convert(self, quantity) -> Decimal:
        return Decimal(str(quantity)) * self.factor

    def is_within_tolerance(self, expected, actual) -> bool:
        """
        True when |actual - expected| / expected, as a percentage, is within tolerance.
        An expected value of zero only accepts an actual value of zero.
        """
        expected = Decimal(str(expected))
        actual = Decimal(str(actual))

        if expected == 0:
            return actual == 0

        variance = abs((actual - expected) / expected) * Decimal("100")
        return variance <= Decimal(str(self.tolerance or 0))

    def __str__(self):
        return f"{self.from_uom_id} -> {self.to_uom_id} x {self.factor}"
