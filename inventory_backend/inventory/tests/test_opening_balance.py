# inventory/tests/test_opening_balance.py

from __future__ import annotations

import uuid
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase

from catalog.models import ItemVariant
from inventory.models import Stock, StockMovement, StockMovementLine
from inventory.services import register_opening_balance
from inventory.services.exceptions import (
    ConversionUnavailableError,
    InvalidQuantityError,
    NotFoundError,
)
from inventory.tests.helpers import make_conversion, make_location, make_unit, make_variant

User = get_user_model()


class RegisterOpeningBalanceTests(TestCase):
    """
    Opening balance (entry) tests.

    GUARANTEES:
    - Ledger qty is always in the variant base unit
    - One POSTED OPENING_BALANCE movement + one line per call
    - Balance row is created on first entry and incremented afterwards
    - Weighted-average cost only moves for priced entries
    - Any failure leaves no movement and no balance change
    """

    def setUp(self):
        self.user = User.objects.create_user(username="storekeeper", password="password123")

        self.kg = make_unit("KG", "Kilogram")
        self.gr = make_unit("GR", "Gram")
        self.lt = make_unit("LT", "Liter")
        make_conversion(self.gr, self.kg, "0.001")

        self.location = make_location("Main Store")
        self.variant = make_variant(self.kg, code="FLOUR-KG")

    def _post(self, quantity, uom=None, unit_cost=None, **extra):
        return register_opening_balance(
            location_id=self.location.pk,
            variant_id=self.variant.pk,
            quantity=quantity,
            entry_uom_id=(uom or self.kg).pk,
            unit_cost=unit_cost,
            user=self.user,
            **extra,
        )

    def _on_hand(self):
        return Stock.objects.get(inventory_location=self.location, item_variant=self.variant).on_hand

    def _variant(self):
        return ItemVariant.objects.get(pk=self.variant.pk)

    # =====================================================
    # SCENARIOS
    # =====================================================

    def test_first_entry_in_base_unit(self):
        movement = self._post(Decimal("50"), unit_cost=Decimal("125.50"))

        self.assertEqual(self._on_hand(), Decimal("50"))
        variant = self._variant()
        self.assertEqual(variant.avg_unit_cost, Decimal("125.50"))
        self.assertEqual(variant.last_unit_cost, Decimal("125.50"))

        self.assertEqual(movement.reason, StockMovement.Reason.OPENING_BALANCE)
        self.assertEqual(movement.status, StockMovement.Status.POSTED)
        self.assertEqual(movement.to_location_id, self.location.pk)
        self.assertIsNone(movement.from_location_id)
        self.assertEqual(movement.qty, Decimal("50"))
        self.assertIsNotNone(movement.posted_at)

    def test_entry_in_alternate_unit_is_converted(self):
        movement = self._post(Decimal("25000"), uom=self.gr, unit_cost=Decimal("0.15"))

        self.assertEqual(movement.qty, Decimal("25"))
        self.assertEqual(self._on_hand(), Decimal("25"))

        line = movement.lines.get()
        self.assertEqual(line.uom_id, self.gr.pk)
        self.assertEqual(line.qty, Decimal("25000"))
        self.assertEqual(line.base_qty, Decimal("25"))
        self.assertEqual(line.conversion_factor, Decimal("0.001"))
        self.assertEqual(line.unit_cost, Decimal("150"))
        self.assertEqual(line.line_total, Decimal("3750"))

        self.assertEqual(movement.meta["original_qty"], "25000")
        self.assertEqual(movement.meta["original_uom"], "GR")
        self.assertEqual(Decimal(movement.meta["base_cost"]), Decimal("150"))
        self.assertEqual(self._variant().avg_unit_cost, Decimal("150"))

    def test_two_entries_average_the_cost(self):
        self._post(Decimal("10"), unit_cost=Decimal("100"))
        self._post(Decimal("20"), unit_cost=Decimal("150"))

        self.assertEqual(self._on_hand(), Decimal("30"))
        variant = self._variant()
        self.assertEqual(variant.avg_unit_cost.quantize(Decimal("0.01")), Decimal("133.33"))
        self.assertEqual(variant.last_unit_cost, Decimal("150"))

        self.assertEqual(Stock.objects.filter(item_variant=self.variant).count(), 1)
        self.assertEqual(StockMovement.objects.filter(item_variant=self.variant).count(), 2)

    def test_reverse_conversion_is_used_when_only_inverse_exists(self):
        box = make_unit("BOX", "Box")
        un = make_unit("UN", "Unit")
        make_conversion(box, un, "12")
        eggs = make_variant(box, code="EGGS-BOX", name="Eggs")

        movement = register_opening_balance(
            location_id=self.location.pk,
            variant_id=eggs.pk,
            quantity=Decimal("24"),
            entry_uom_id=un.pk,
        )

        self.assertEqual(movement.qty, Decimal("2"))
        self.assertEqual(movement.lines.get().conversion_factor, Decimal("0.083333"))

    # =====================================================
    # COST RULES
    # =====================================================

    def test_entry_without_cost_keeps_average(self):
        ItemVariant.objects.filter(pk=self.variant.pk).update(avg_unit_cost=Decimal("80"), last_unit_cost=Decimal("80"))

        movement = self._post(Decimal("5"))

        line = movement.lines.get()
        self.assertIsNone(line.unit_cost)
        self.assertIsNone(line.line_total)
        self.assertEqual(self._variant().avg_unit_cost, Decimal("80"))

    def test_zero_cost_entry_keeps_average(self):
        ItemVariant.objects.filter(pk=self.variant.pk).update(avg_unit_cost=Decimal("80"), last_unit_cost=Decimal("80"))

        self._post(Decimal("5"), unit_cost=Decimal("0"))

        variant = self._variant()
        self.assertEqual(variant.avg_unit_cost, Decimal("80"))
        self.assertEqual(variant.last_unit_cost, Decimal("80"))

    # =====================================================
    # AUDIT FIELDS
    # =====================================================

    def test_reference_notes_and_user_are_recorded(self):
        movement = self._post(Decimal("1"), unit_cost=Decimal("1"), reference="INIT-2024", notes="Initial count")

        self.assertEqual(movement.reference, "INIT-2024")
        self.assertEqual(movement.notes, "Initial count")
        self.assertEqual(movement.user_id, self.user.pk)

    def test_returned_movement_has_relations_loaded(self):
        movement = self._post(Decimal("1"))

        with self.assertNumQueries(0):
            self.assertEqual(movement.to_location.name, "Main Store")
            self.assertEqual(movement.item_variant.item.name, "Flour")
            self.assertEqual(movement.item_variant.uom.code, "KG")
            self.assertEqual(len(movement.lines.all()), 1)

    # =====================================================
    # FAILURES (NO SIDE EFFECTS)
    # =====================================================

    def test_missing_conversion_is_rejected(self):
        with self.assertRaises(ConversionUnavailableError) as ctx:
            self._post(Decimal("3"), uom=self.lt)

        self.assertIn("LT", str(ctx.exception))
        self.assertIn("KG", str(ctx.exception))
        self.assertFalse(StockMovement.objects.exists())
        self.assertFalse(Stock.objects.exists())

    def test_unknown_location_is_not_found(self):
        with self.assertRaises(NotFoundError):
            register_opening_balance(
                location_id=uuid.uuid4(),
                variant_id=self.variant.pk,
                quantity=Decimal("1"),
                entry_uom_id=self.kg.pk,
            )

    def test_unknown_variant_is_not_found(self):
        with self.assertRaises(NotFoundError):
            register_opening_balance(
                location_id=self.location.pk,
                variant_id=uuid.uuid4(),
                quantity=Decimal("1"),
                entry_uom_id=self.kg.pk,
            )

    def test_unknown_unit_is_not_found(self):
        with self.assertRaises(NotFoundError):
            register_opening_balance(
                location_id=self.location.pk,
                variant_id=self.variant.pk,
                quantity=Decimal("1"),
                entry_uom_id=uuid.uuid4(),
            )

    def test_non_positive_quantity_is_rejected(self):
        for bad in (Decimal("0"), Decimal("-1"), "abc", None):
            with self.subTest(quantity=bad):
                with self.assertRaises(InvalidQuantityError):
                    self._post(bad)

        self.assertFalse(StockMovementLine.objects.exists())

    def test_negative_cost_is_rejected(self):
        with self.assertRaises(InvalidQuantityError):
            self._post(Decimal("1"), unit_cost=Decimal("-0.01"))

    def test_quantity_vanishing_in_base_unit_is_rejected(self):
        with self.assertRaises(InvalidQuantityError):
            self._post(Decimal("0.01"), uom=self.gr)

        self.assertFalse(Stock.objects.exists())
