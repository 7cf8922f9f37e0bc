# inventory/tests/test_uom_resolver.py

from decimal import Decimal

from django.test import SimpleTestCase, TestCase

from inventory.services.exceptions import ZeroConversionFactorError
from inventory.services.uom import (
    ConversionEdge,
    ConversionNotFound,
    Factor,
    active_edge_lookup,
    resolve_factor,
)
from inventory.tests.helpers import make_conversion, make_unit


def dict_lookup(edges):
    def lookup(from_id, to_id):
        return edges.get((from_id, to_id))

    return lookup


class ResolveFactorTests(SimpleTestCase):
    """
    Pure resolver tests (no database).

    GUARANTEES:
    - Identity never consults the graph
    - Direct edges win over reverse edges
    - Reverse edges are inverted and flagged as derived
    - Missing edges produce a tagged ConversionNotFound, never None
    """

    def test_same_unit_is_identity_without_lookup(self):
        def exploding_lookup(from_id, to_id):
            raise AssertionError("lookup must not be called for identity")

        result = resolve_factor("KG", "KG", lookup=exploding_lookup)

        self.assertEqual(result, Factor(value=Decimal("1")))

    def test_direct_edge(self):
        lookup = dict_lookup({("GR", "KG"): ConversionEdge(factor=Decimal("0.001"))})

        result = resolve_factor("GR", "KG", lookup=lookup)

        self.assertIsInstance(result, Factor)
        self.assertEqual(result.value, Decimal("0.001"))
        self.assertFalse(result.derived)

    def test_direct_edge_preferred_over_reverse(self):
        lookup = dict_lookup(
            {
                ("BOX", "UN"): ConversionEdge(factor=Decimal("12")),
                ("UN", "BOX"): ConversionEdge(factor=Decimal("0.5")),
            }
        )

        result = resolve_factor("BOX", "UN", lookup=lookup)

        self.assertEqual(result.value, Decimal("12"))

    def test_reverse_edge_is_inverted_to_six_places(self):
        lookup = dict_lookup({("BOX", "UN"): ConversionEdge(factor=Decimal("12"))})

        result = resolve_factor("UN", "BOX", lookup=lookup)

        self.assertTrue(result.derived)
        self.assertEqual(result.value, Decimal("0.083333"))

    def test_reverse_edge_keeps_tolerance(self):
        lookup = dict_lookup({("KG", "GR"): ConversionEdge(factor=Decimal("1000"), tolerance=Decimal("2.5"))})

        result = resolve_factor("GR", "KG", lookup=lookup)

        self.assertEqual(result.value, Decimal("0.001"))
        self.assertEqual(result.tolerance, Decimal("2.5"))

    def test_missing_edge_returns_not_found(self):
        result = resolve_factor("L", "KG", lookup=dict_lookup({}))

        self.assertEqual(result, ConversionNotFound(from_uom_id="L", to_uom_id="KG"))

    def test_zero_reverse_factor_raises(self):
        lookup = dict_lookup({("BOX", "UN"): ConversionEdge(factor=Decimal("0"))})

        with self.assertRaises(ZeroConversionFactorError):
            resolve_factor("UN", "BOX", lookup=lookup)

    def test_zero_factor_error_is_a_zero_division_error(self):
        self.assertTrue(issubclass(ZeroConversionFactorError, ZeroDivisionError))

    def test_round_trip_within_rounding(self):
        """A -> B -> A through a derived edge comes back to ~1."""
        lookup = dict_lookup({("KG", "LB"): ConversionEdge(factor=Decimal("2.204623"))})

        there = resolve_factor("KG", "LB", lookup=lookup).value
        back = resolve_factor("LB", "KG", lookup=lookup).value

        self.assertLess(abs(there * back - Decimal("1")), Decimal("0.000001") * there)


class ActiveEdgeLookupTests(TestCase):
    """ORM-backed lookup: only active conversion rows are visible."""

    def setUp(self):
        self.kg = make_unit("KG", "Kilogram")
        self.gr = make_unit("GR", "Gram")
        self.lt = make_unit("LT", "Liter")

    def test_active_direct_edge(self):
        make_conversion(self.gr, self.kg, "0.001")

        result = resolve_factor(self.gr.pk, self.kg.pk)

        self.assertEqual(result.value, Decimal("0.001"))

    def test_active_reverse_edge(self):
        make_conversion(self.kg, self.gr, "1000")

        result = resolve_factor(self.gr.pk, self.kg.pk)

        self.assertTrue(result.derived)
        self.assertEqual(result.value, Decimal("0.001"))

    def test_inactive_edges_are_invisible_both_ways(self):
        make_conversion(self.kg, self.gr, "1000", is_active=False)

        self.assertIsNone(active_edge_lookup(self.kg.pk, self.gr.pk))
        self.assertIsInstance(resolve_factor(self.gr.pk, self.kg.pk), ConversionNotFound)
        self.assertIsInstance(resolve_factor(self.kg.pk, self.gr.pk), ConversionNotFound)

    def test_unrelated_units_not_found(self):
        make_conversion(self.kg, self.gr, "1000")

        self.assertIsInstance(resolve_factor(self.lt.pk, self.kg.pk), ConversionNotFound)
