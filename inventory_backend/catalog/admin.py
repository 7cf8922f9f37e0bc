from django.contrib import admin

from catalog.models import Item, ItemVariant, UnitOfMeasure, UomConversion


@admin.register(UnitOfMeasure)
class UnitOfMeasureAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "symbol", "precision", "is_decimal", "is_active")
    list_filter = ("is_active", "is_decimal")
    search_fields = ("code", "name")


@admin.register(UomConversion)
class UomConversionAdmin(admin.ModelAdmin):
    list_display = ("from_uom", "to_uom", "factor", "tolerance", "is_active")
    list_filter = ("is_active",)


class ItemVariantInline(admin.TabularInline):
    model = ItemVariant
    extra = 0
    fields = ("code", "name", "uom", "sale_price", "min_stock", "max_stock", "is_active")


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ("sku", "name", "type", "is_stocked", "is_active")
    list_filter = ("type", "is_active")
    search_fields = ("sku", "name")
    inlines = [ItemVariantInline]


@admin.register(ItemVariant)
class ItemVariantAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "item", "uom", "avg_unit_cost", "last_unit_cost", "is_active")
    list_filter = ("is_active",)
    search_fields = ("code", "name", "barcode", "item__name")

    # Costs are maintained by the costing engine
    readonly_fields = ("avg_unit_cost", "last_unit_cost")
