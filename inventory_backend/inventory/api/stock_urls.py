# inventory/api/stock_urls.py

"""
STOCK BALANCE URLS

Mounted at /api/stock/ via backend/urls.py.
"""

from django.urls import path

from inventory.api.views import StockByLocationView, StockByVariantView, StockListView

urlpatterns = [
    path("", StockListView.as_view(), name="stock-list"),
    path("by-location/<uuid:location_id>/", StockByLocationView.as_view(), name="stock-by-location"),
    path("by-variant/<uuid:variant_id>/", StockByVariantView.as_view(), name="stock-by-variant"),
]
