"""
Stock — Views

GET /v1/movements lists the ledger; POST applies one movement through
the stock engine and returns the recorded movement with the new stock.

@file stock/views.py
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.pagination import page_params_from_query

from .serializers import ApplyMovementSerializer, StockMovementReadSerializer
from .services import MovementLedger, StockService


class MovementListCreateView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        page, page_size = page_params_from_query(request.query_params)
        result = MovementLedger.list_all(
            product_id=request.query_params.get('product'),
            direction=request.query_params.get('direction'),
            page=page,
            page_size=page_size,
        )
        result['items'] = StockMovementReadSerializer(result['items'], many=True).data
        return Response(result)

    def post(self, request):
        ser = ApplyMovementSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        result = StockService.apply_movement(
            product_id=data['product'],
            direction=data['direction'],
            quantity=data['quantity'],
            unit_price=data.get('unit_price'),
            reason=data['reason'],
            observations=data['observations'],
            actor=request.user,
        )
        return Response(
            {
                'movement': StockMovementReadSerializer(result.movement).data,
                'new_stock': result.new_stock,
            },
            status=status.HTTP_201_CREATED,
        )
