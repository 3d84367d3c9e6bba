"""
Stock — Serializers

@file stock/serializers.py
"""

from rest_framework import serializers

from core.constants import MAX_STOCK_QUANTITY

from .models import StockMovement


class StockMovementReadSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)
    created_by_name = serializers.CharField(source='created_by.name', read_only=True, default=None)

    class Meta:
        model = StockMovement
        fields = [
            'id', 'product', 'product_name',
            'direction', 'quantity', 'unit_price',
            'reason', 'observations',
            'created_by', 'created_by_name', 'created_at',
        ]
        read_only_fields = fields


class ApplyMovementSerializer(serializers.Serializer):
    """Request shape only; the engine validates direction, quantity and stock."""

    product = serializers.UUIDField()
    direction = serializers.CharField(max_length=16)
    quantity = serializers.IntegerField(max_value=MAX_STOCK_QUANTITY)
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    reason = serializers.CharField(required=False, allow_blank=True, default='')
    observations = serializers.CharField(required=False, allow_blank=True, default='')
