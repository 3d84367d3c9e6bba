"""
Products — Serializers

Read representations for Category and Product, plus write serializers
that only check request shape. Ranges, uniqueness and category
existence are enforced by products.services.

@file products/serializers.py
"""

from rest_framework import serializers

from core.constants import MAX_STOCK_QUANTITY

from .models import Category, Product


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------

class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'description', 'created_at']
        read_only_fields = fields


class CategoryWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, default='')


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------

class ProductReadSerializer(serializers.ModelSerializer):
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'description',
            'category', 'category_name',
            'price', 'stock_quantity', 'minimum_stock', 'is_low_stock',
            'code', 'image_url',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    category = serializers.IntegerField(required=False, allow_null=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    minimum_stock = serializers.IntegerField(required=False, max_value=MAX_STOCK_QUANTITY)
    code = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)

    def validate(self, attrs):
        if 'stock_quantity' in self.initial_data:
            raise serializers.ValidationError({
                'stock_quantity': 'Stock can only change through stock movements.',
            })
        return attrs


class ProductCreateSerializer(ProductWriteSerializer):
    """Create payload; initial_quantity is booked as an incoming movement."""

    initial_quantity = serializers.IntegerField(required=False, default=0, max_value=MAX_STOCK_QUANTITY)
