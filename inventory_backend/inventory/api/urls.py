# inventory/api/urls.py

"""
INVENTORY API URLS

Mounted at /api/inventory/ via backend/urls.py.

Explicit command routes are registered BEFORE router URLs.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from inventory.api.views import (
    RegisterOpeningBalanceView,
    RegisterStockOutView,
    StockMovementViewSet,
)

router = DefaultRouter()
router.register(r"movements", StockMovementViewSet, basename="stock-movements")

urlpatterns = [
    path("opening-balance/", RegisterOpeningBalanceView.as_view(), name="inventory-opening-balance"),
    path("stock-out/", RegisterStockOutView.as_view(), name="inventory-stock-out"),
    path("", include(router.urls)),
]
