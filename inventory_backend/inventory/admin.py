# inventory/admin.py

from django.contrib import admin

from inventory.models import Stock, StockMovement, StockMovementLine


# ============================================================
# STOCK BALANCE (SERVICE-MANAGED, READ-ONLY)
# ============================================================


@admin.register(Stock)
class StockAdmin(admin.ModelAdmin):
    list_display = (
        "inventory_location",
        "item_variant",
        "on_hand",
        "reserved",
        "available",
        "updated_at",
    )
    list_filter = ("inventory_location",)
    search_fields = ("item_variant__code", "item_variant__name", "inventory_location__name")
    list_select_related = ("inventory_location", "item_variant")

    readonly_fields = ("inventory_location", "item_variant", "on_hand", "reserved", "updated_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# STOCK MOVEMENT (STRICTLY IMMUTABLE)
# ============================================================


class StockMovementLineInline(admin.TabularInline):
    model = StockMovementLine
    extra = 0
    can_delete = False
    fields = (
        "uom",
        "qty",
        "base_qty",
        "conversion_factor",
        "unit_cost",
        "line_total",
        "sale_price",
        "profit_total",
    )
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(StockMovement)
class StockMovementAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "reason",
        "status",
        "item_variant",
        "qty",
        "from_location",
        "to_location",
        "reference",
        "created_at",
    )
    list_filter = ("reason", "status")
    search_fields = ("reference", "item_variant__code", "related_id")
    ordering = ("-created_at",)
    inlines = [StockMovementLineInline]

    readonly_fields = (
        "reason",
        "status",
        "item_variant",
        "qty",
        "from_location",
        "to_location",
        "user",
        "reference",
        "related_kind",
        "related_id",
        "notes",
        "meta",
        "posted_at",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
