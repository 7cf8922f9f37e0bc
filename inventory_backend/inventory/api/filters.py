# inventory/api/filters.py

import django_filters
from django.db.models import Q

from inventory.models import Stock, StockMovement


class StockFilter(django_filters.FilterSet):
    inventory_location_id = django_filters.UUIDFilter(field_name="inventory_location_id")
    item_variant_id = django_filters.UUIDFilter(field_name="item_variant_id")
    min_on_hand = django_filters.NumberFilter(field_name="on_hand", lookup_expr="gte")

    class Meta:
        model = Stock
        fields = ["inventory_location_id", "item_variant_id", "min_on_hand"]


class StockMovementFilter(django_filters.FilterSet):
    item_variant_id = django_filters.UUIDFilter(field_name="item_variant_id")
    location_id = django_filters.UUIDFilter(method="filter_location")
    reason = django_filters.ChoiceFilter(choices=StockMovement.Reason.choices)
    reference = django_filters.CharFilter(field_name="reference")

    class Meta:
        model = StockMovement
        fields = ["item_variant_id", "location_id", "reason", "reference"]

    def filter_location(self, queryset, name, value):
        # either side of the movement
        return queryset.filter(Q(from_location_id=value) | Q(to_location_id=value))
