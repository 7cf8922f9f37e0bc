# inventory/api/views.py

"""
======================================================
PATH: inventory/api/views.py
======================================================
INVENTORY API VIEWS

Commands:
- POST /api/inventory/opening-balance/
- POST /api/inventory/stock-out/

Ledger (read only):
- GET /api/inventory/movements/
- GET /api/inventory/movements/<uuid>/

Balances (read only):
- GET /api/stock/
- GET /api/stock/by-location/<uuid>/
- GET /api/stock/by-variant/<uuid>/

Error mapping:
- NotFoundError            -> 404
- other domain errors      -> 400
- DB lock / serialization  -> 409 (caller may retry)
======================================================
"""

from __future__ import annotations

import logging

from django.db import OperationalError
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import generics, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from inventory.api.filters import StockFilter, StockMovementFilter
from inventory.api.serializers import (
    RegisterOpeningBalanceSerializer,
    RegisterStockOutSerializer,
    StockMovementSerializer,
    StockSerializer,
)
from inventory.models import StockMovement
from inventory.services import register_opening_balance, register_stock_out
from inventory.services.exceptions import InventoryServiceError, NotFoundError
from inventory.services.stock_queries import (
    location_summary,
    stock_queryset,
    variant_summary,
)

logger = logging.getLogger(__name__)


def domain_error_response(exc: Exception) -> Response:
    if isinstance(exc, NotFoundError):
        return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, OperationalError):
        logger.warning("Inventory posting conflict", extra={"error": str(exc)})
        return Response(
            {"detail": "The stock record is busy, please retry."},
            status=status.HTTP_409_CONFLICT,
        )

    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


# ======================================================
# COMMANDS
# ======================================================

class RegisterOpeningBalanceView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["inventory"],
        request=RegisterOpeningBalanceSerializer,
        responses={201: StockMovementSerializer},
        description="Register an opening balance (entry) for a variant at a location",
    )
    def post(self, request):
        serializer = RegisterOpeningBalanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            movement = register_opening_balance(
                location_id=data["inventory_location_id"],
                variant_id=data["item_variant_id"],
                quantity=data["quantity"],
                entry_uom_id=data["uom_id"],
                unit_cost=data.get("unit_cost"),
                user=request.user,
                reference=data.get("reference"),
                notes=data.get("notes"),
            )
        except (InventoryServiceError, OperationalError) as exc:
            return domain_error_response(exc)

        return Response(StockMovementSerializer(movement).data, status=status.HTTP_201_CREATED)


class RegisterStockOutView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["inventory"],
        request=RegisterStockOutSerializer,
        responses={201: StockMovementSerializer},
        description="Register a stock exit (SALE or CONSUMPTION) for a variant at a location",
    )
    def post(self, request):
        serializer = RegisterStockOutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            movement = register_stock_out(
                location_id=data["inventory_location_id"],
                variant_id=data["item_variant_id"],
                quantity=data["qty"],
                transaction_uom_id=data["uom_id"],
                reason=data["reason"],
                sale_price=data.get("sale_price"),
                user=request.user,
                reference=data.get("reference"),
                notes=data.get("notes"),
            )
        except (InventoryServiceError, OperationalError) as exc:
            return domain_error_response(exc)

        return Response(StockMovementSerializer(movement).data, status=status.HTTP_201_CREATED)


# ======================================================
# LEDGER
# ======================================================

class StockMovementViewSet(viewsets.ReadOnlyModelViewSet):
    """Append-only ledger: list + retrieve, newest first."""

    serializer_class = StockMovementSerializer
    permission_classes = [IsAuthenticated]
    filterset_class = StockMovementFilter

    def get_queryset(self):
        return (
            StockMovement.objects.select_related(
                "from_location",
                "to_location",
                "item_variant__item",
                "item_variant__uom",
                "user",
            )
            .prefetch_related("lines", "lines__uom")
            .order_by("-created_at")
        )


# ======================================================
# BALANCES
# ======================================================

class StockListView(generics.ListAPIView):
    serializer_class = StockSerializer
    permission_classes = [IsAuthenticated]
    filterset_class = StockFilter

    def get_queryset(self):
        return stock_queryset().order_by("inventory_location__name", "item_variant__code")


class StockByLocationView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["stock"], responses={200: OpenApiTypes.OBJECT})
    def get(self, request, location_id):
        try:
            data = location_summary(location_id)
        except InventoryServiceError as exc:
            return domain_error_response(exc)
        return Response(data, status=status.HTTP_200_OK)


class StockByVariantView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["stock"], responses={200: OpenApiTypes.OBJECT})
    def get(self, request, variant_id):
        try:
            data = variant_summary(variant_id)
        except InventoryServiceError as exc:
            return domain_error_response(exc)
        return Response(data, status=status.HTTP_200_OK)
