# inventory/models/stock_movement.py

"""
CANONICAL INVENTORY LEDGER (HEADER)

Immutable ledger entry for one business operation.

GUARANTEES:
- Append-only (no updates, no deletes)
- qty is ALWAYS expressed in the variant base unit
- meta preserves the pre-conversion quantity / unit / cost for audit
- Direction is encoded by locations:
    entry  -> to_location only
    exit   -> from_location only
    TRANSFER is the only reason allowed to carry both
- Movements produced by inventory services are always POSTED.
  DRAFT / REVERSED exist for workflows outside the ledger core.
- related_kind / related_id is an opaque tag linking the movement to another
  document (sale, purchase ...). The ledger never dereferences it.
"""

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class StockMovement(models.Model):
    class Reason(models.TextChoices):
        TRANSFER = "TRANSFER", "Transfer"
        RETURN = "RETURN", "Return"
        SALE = "SALE", "Sale"
        ADJUSTMENT = "ADJUSTMENT", "Adjustment"
        CONSUMPTION = "CONSUMPTION", "Consumption"
        OPENING_BALANCE = "OPENING_BALANCE", "Opening Balance"
        COUNT_VARIANCE = "COUNT_VARIANCE", "Count Variance"

    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        POSTED = "POSTED", "Posted"
        REVERSED = "REVERSED", "Reversed"

    ENTRY_REASONS = frozenset({Reason.OPENING_BALANCE})
    EXIT_REASONS = frozenset({Reason.SALE, Reason.CONSUMPTION})

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    from_location = models.ForeignKey(
        "locations.InventoryLocation",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="outgoing_movements",
    )
    to_location = models.ForeignKey(
        "locations.InventoryLocation",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="incoming_movements",
    )

    item_variant = models.ForeignKey(
        "catalog.ItemVariant",
        on_delete=models.PROTECT,
        related_name="stock_movements",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="stock_movements",
    )

    qty = models.DecimalField(max_digits=15, decimal_places=4, help_text="Quantity in base unit")

    reason = models.CharField(max_length=20, choices=Reason.choices)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.POSTED)

    reference = models.CharField(max_length=255, blank=True, default="", db_index=True)

    related_kind = models.CharField(max_length=100, blank=True, default="")
    related_id = models.CharField(max_length=64, blank=True, default="")

    notes = models.TextField(blank=True, default="")
    meta = models.JSONField(default=dict, blank=True)

    posted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["from_location", "created_at"], name="mov_from_created_idx"),
            models.Index(fields=["to_location", "created_at"], name="mov_to_created_idx"),
            models.Index(fields=["item_variant", "created_at"], name="mov_variant_created_idx"),
            models.Index(fields=["reason", "status"], name="mov_reason_status_idx"),
            models.Index(fields=["related_kind", "related_id"], name="mov_related_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(qty__gt=0),
                name="chk_movement_qty_gt_zero",
            ),
            models.CheckConstraint(
                condition=Q(from_location__isnull=False) | Q(to_location__isnull=False),
                name="chk_movement_has_location",
            ),
        ]

    def clean(self):
        if self.from_location_id is None and self.to_location_id is None:
            raise ValidationError("A stock movement needs a source or a destination location")

        if (
            self.from_location_id is not None
            and self.to_location_id is not None
            and self.reason != self.Reason.TRANSFER
        ):
            raise ValidationError(f"{self.reason} cannot carry both source and destination locations")

        if self.reason in self.ENTRY_REASONS and self.from_location_id is not None:
            raise ValidationError(f"{self.reason} is an entry and must not have a source location")

        if self.reason in self.EXIT_REASONS and self.to_location_id is not None:
            raise ValidationError(f"{self.reason} is an exit and must not have a destination location")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("StockMovement records are immutable")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("StockMovement records are immutable and cannot be deleted")

    @property
    def is_posted(self) -> bool:
        return self.status == self.Status.POSTED

    @property
    def is_entry(self) -> bool:
        return self.to_location_id is not None and self.from_location_id is None

    @property
    def is_exit(self) -> bool:
        return self.from_location_id is not None and self.to_location_id is None

    @property
    def related(self):
        """Opaque (kind, id) tag, or None when the movement is not linked."""
        if not self.related_kind:
            return None
        return (self.related_kind, self.related_id)

    def __str__(self):
        return f"{self.reason} | {self.item_variant_id} | {self.qty}"
