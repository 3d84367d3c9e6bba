"""
Reports — Views

@file reports/views.py
"""

from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.constants import LOW_STOCK_PREVIEW_SIZE
from products.serializers import ProductReadSerializer

from .services import DashboardService


class DashboardView(APIView):
    """GET /v1/dashboard — inventory snapshot, recomputed per request."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        snapshot = DashboardService.get_snapshot()
        snapshot['low_stock_products'] = ProductReadSerializer(
            DashboardService.low_stock_products()[:LOW_STOCK_PREVIEW_SIZE], many=True,
        ).data
        return Response(snapshot)
