"""
Products — Views

Thin DRF glue over the product store and the stock engine. Creation
goes through StockService so the initial quantity is booked in the
ledger together with the product.

@file products/views.py
"""

from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.pagination import page_params_from_query
from stock.services import StockService
from users.permissions import IsAdminRoleOrReadOnly

from .serializers import (
    CategorySerializer,
    CategoryWriteSerializer,
    ProductCreateSerializer,
    ProductReadSerializer,
    ProductWriteSerializer,
)
from .services import CategoryService, ProductService


class CategoryListCreateView(APIView):
    """GET/POST /v1/categories — list active categories; ADMIN creates."""
    permission_classes = [IsAuthenticated, IsAdminRoleOrReadOnly]

    def get(self, request):
        categories = CategoryService.list_categories()
        return Response(CategorySerializer(categories, many=True).data)

    def post(self, request):
        ser = CategoryWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        category = CategoryService.create_category(**ser.validated_data)
        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)


class ProductViewSet(viewsets.ViewSet):
    """
    Product catalogue.

    list     GET    /v1/products?category=&search=&page=&page_size=
    create   POST   /v1/products            (initial_quantity optional)
    retrieve GET    /v1/products/{id}
    update   PUT    /v1/products/{id}       (stock_quantity is not writable)
    partial  PATCH  /v1/products/{id}
    destroy  DELETE /v1/products/{id}       (soft delete)
    """

    permission_classes = [IsAuthenticated]

    def list(self, request):
        page, page_size = page_params_from_query(request.query_params)
        result = ProductService.list_products(
            category_id=request.query_params.get('category'),
            search=request.query_params.get('search'),
            page=page,
            page_size=page_size,
        )
        result['items'] = ProductReadSerializer(result['items'], many=True).data
        return Response(result)

    def create(self, request):
        ser = ProductCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        product = StockService.create_product_with_initial_stock(
            actor=request.user, **ser.validated_data,
        )
        return Response(ProductReadSerializer(product).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        product = ProductService.get_by_id(pk)
        return Response(ProductReadSerializer(product).data)

    def update(self, request, pk=None):
        return self._update(request, pk, partial=False)

    def partial_update(self, request, pk=None):
        return self._update(request, pk, partial=True)

    def destroy(self, request, pk=None):
        ProductService.soft_delete(product_id=pk, actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _update(self, request, pk, *, partial):
        ser = ProductWriteSerializer(data=request.data, partial=partial)
        ser.is_valid(raise_exception=True)
        product = ProductService.update_mutable_fields(
            product_id=pk, actor=request.user, **ser.validated_data,
        )
        return Response(ProductReadSerializer(product).data)
