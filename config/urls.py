"""
StockLedger — Root URL Configuration

All API endpoints are namespaced under /api/v1/.
The DRF browsable API is available for route inspection in development.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse

admin.site.site_header = 'StockLedger Administration'
admin.site.site_title = 'StockLedger'
admin.site.index_title = 'Inventory Stock Ledger'


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """StockLedger API v1 — endpoint directory."""
    return Response({
        'auth': {
            'register': reverse('api-v1:auth:register', request=request, format=format),
            'login': reverse('api-v1:auth:login', request=request, format=format),
            'refresh': reverse('api-v1:auth:token-refresh', request=request, format=format),
            'me': reverse('api-v1:auth:me', request=request, format=format),
        },
        'categories': reverse('api-v1:categories:category-list', request=request, format=format),
        'products': reverse('api-v1:products:product-list', request=request, format=format),
        'movements': reverse('api-v1:movements:movement-list', request=request, format=format),
        'dashboard': reverse('api-v1:dashboard:dashboard', request=request, format=format),
    })


api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('auth/', include('users.urls', namespace='auth')),
    path('categories/', include('products.urls_categories', namespace='categories')),
    path('products/', include('products.urls', namespace='products')),
    path('movements/', include('stock.urls', namespace='movements')),
    path('dashboard/', include('reports.urls', namespace='dashboard')),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    # DRF session auth (powers the "Log in" button on the browsable API)
    path('api/auth/', include('rest_framework.urls', namespace='rest_framework')),

    # Versioned API
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]
