# inventory/tests/test_costing.py

from decimal import Decimal

from django.test import SimpleTestCase, TestCase

from catalog.models import ItemVariant
from inventory.models import Stock
from inventory.services.costing import CostUpdate, apply_receipt_cost, weighted_average
from inventory.services.exceptions import InvalidQuantityError
from inventory.services.quantities import MAX_STORABLE, amount, qty
from inventory.tests.helpers import make_location, make_unit, make_variant


class WeightedAverageTests(SimpleTestCase):
    """
    Pure weighted-average math.

    Contract: on_hand_after_receipt ALREADY includes incoming_qty.
    """

    def test_first_receipt_takes_incoming_cost(self):
        update = weighted_average(
            on_hand_after_receipt=Decimal("50"),
            current_avg_cost=Decimal("0"),
            incoming_qty=Decimal("50"),
            incoming_cost=Decimal("125.50"),
        )

        self.assertEqual(update, CostUpdate(avg_unit_cost=Decimal("125.5000"), last_unit_cost=Decimal("125.5000")))

    def test_second_receipt_is_quantity_weighted(self):
        update = weighted_average(
            on_hand_after_receipt=Decimal("30"),
            current_avg_cost=Decimal("100"),
            incoming_qty=Decimal("20"),
            incoming_cost=Decimal("150"),
        )

        self.assertEqual(update.avg_unit_cost, Decimal("133.3333"))
        self.assertEqual(update.last_unit_cost, Decimal("150"))

    def test_prior_quantity_never_negative(self):
        """A balance smaller than the receipt is treated as an empty prior."""
        update = weighted_average(
            on_hand_after_receipt=Decimal("5"),
            current_avg_cost=Decimal("999"),
            incoming_qty=Decimal("10"),
            incoming_cost=Decimal("40"),
        )

        self.assertEqual(update.avg_unit_cost, Decimal("40"))

    def test_result_lies_between_old_and_new_cost(self):
        cases = [
            (Decimal("110"), Decimal("12.5"), Decimal("10"), Decimal("8.75")),
            (Decimal("3"), Decimal("2"), Decimal("1"), Decimal("9")),
            (Decimal("1000.5"), Decimal("0.3333"), Decimal("0.5"), Decimal("0.3334")),
        ]
        for on_hand, avg, incoming_qty, incoming_cost in cases:
            with self.subTest(on_hand=on_hand, avg=avg):
                update = weighted_average(
                    on_hand_after_receipt=on_hand,
                    current_avg_cost=avg,
                    incoming_qty=incoming_qty,
                    incoming_cost=incoming_cost,
                )
                low, high = min(avg, incoming_cost), max(avg, incoming_cost)
                self.assertGreaterEqual(update.avg_unit_cost, low)
                self.assertLessEqual(update.avg_unit_cost, high)

    def test_rounds_half_up_to_four_places(self):
        update = weighted_average(
            on_hand_after_receipt=Decimal("2"),
            current_avg_cost=Decimal("0.00005"),
            incoming_qty=Decimal("1"),
            incoming_cost=Decimal("0.00005"),
        )

        self.assertEqual(update.avg_unit_cost, Decimal("0.0001"))


class StorableBoundsTests(SimpleTestCase):
    """Quantities and amounts must fit a DecimalField(15, 4) column."""

    def test_largest_value_is_accepted(self):
        self.assertEqual(qty(MAX_STORABLE), MAX_STORABLE)
        self.assertEqual(amount(-MAX_STORABLE), -MAX_STORABLE)

    def test_value_rounding_past_the_limit_is_rejected(self):
        with self.assertRaises(InvalidQuantityError):
            qty(Decimal("99999999999.99995"))

    def test_oversized_amount_names_the_field(self):
        with self.assertRaises(InvalidQuantityError) as ctx:
            amount(Decimal("1E+20"), field_name="sale_total")

        self.assertIn("sale_total", str(ctx.exception))


class ApplyReceiptCostTests(TestCase):
    """Persisted costing: reads post-receipt on-hand across every location."""

    def setUp(self):
        self.kg = make_unit("KG", "Kilogram")
        self.variant = make_variant(self.kg, code="FLOUR-25")
        self.main = make_location("Main Store")
        self.bar = make_location("Bar", location_type="BAR")

    def test_persists_both_cost_columns(self):
        Stock.objects.create(inventory_location=self.main, item_variant=self.variant, on_hand=Decimal("10"))

        update = apply_receipt_cost(variant=self.variant, incoming_qty=Decimal("10"), incoming_cost=Decimal("100"))

        stored = ItemVariant.objects.get(pk=self.variant.pk)
        self.assertEqual(stored.avg_unit_cost, Decimal("100"))
        self.assertEqual(stored.last_unit_cost, Decimal("100"))
        self.assertEqual(self.variant.avg_unit_cost, update.avg_unit_cost)

    def test_sums_on_hand_across_locations(self):
        ItemVariant.objects.filter(pk=self.variant.pk).update(avg_unit_cost=Decimal("10"))
        Stock.objects.create(inventory_location=self.bar, item_variant=self.variant, on_hand=Decimal("30"))
        # receipt of 10 already applied at main
        Stock.objects.create(inventory_location=self.main, item_variant=self.variant, on_hand=Decimal("10"))

        update = apply_receipt_cost(variant=self.variant, incoming_qty=Decimal("10"), incoming_cost=Decimal("20"))

        # (30 * 10 + 10 * 20) / 40
        self.assertEqual(update.avg_unit_cost, Decimal("12.5"))
