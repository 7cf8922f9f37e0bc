from django.contrib import admin

from locations.models import Branch, InventoryLocation, OperatingUnit


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "region", "is_active")
    list_filter = ("is_active", "region")
    search_fields = ("code", "name")


@admin.register(OperatingUnit)
class OperatingUnitAdmin(admin.ModelAdmin):
    list_display = ("name", "branch", "type", "is_active")
    list_filter = ("type", "is_active")
    search_fields = ("name", "branch__code")


@admin.register(InventoryLocation)
class InventoryLocationAdmin(admin.ModelAdmin):
    list_display = ("name", "operating_unit", "type", "is_primary", "is_active")
    list_filter = ("type", "is_primary", "is_active")
    search_fields = ("name",)
