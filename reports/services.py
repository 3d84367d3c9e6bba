"""
Reports — Service Layer

Read-only projections over products and the movement ledger, computed
on every call. Nothing here writes.

@file reports/services.py
"""

from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.db.models import Count, DecimalField, ExpressionWrapper, F, Sum
from django.utils import timezone

from products.models import Product
from stock.models import StockMovement


def _start_of_month(now):
    local = timezone.localtime(now)
    return local.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


class DashboardService:
    """Aggregates behind GET /v1/dashboard."""

    @staticmethod
    def _active_products():
        return Product.objects.filter(is_active=True)

    @staticmethod
    def total_products() -> int:
        return DashboardService._active_products().count()

    @staticmethod
    def low_stock_products():
        """Active products at or below their minimum stock, lowest first."""
        return (
            DashboardService._active_products()
            .filter(stock_quantity__lte=F('minimum_stock'))
            .order_by('stock_quantity', 'name')
        )

    @staticmethod
    def low_stock_count() -> int:
        return DashboardService.low_stock_products().count()

    @staticmethod
    def inventory_value() -> Decimal:
        value = ExpressionWrapper(
            F('price') * F('stock_quantity'),
            output_field=DecimalField(max_digits=20, decimal_places=2),
        )
        total = DashboardService._active_products().aggregate(total=Sum(value))['total']
        return Decimal(total or 0).quantize(Decimal('0.01'))

    @staticmethod
    def monthly_movement_totals(now=None) -> list[dict]:
        """Movements of the current calendar month, grouped by direction."""
        now = now or timezone.now()
        start = _start_of_month(now)
        rows = (
            StockMovement.objects
            .filter(created_at__gte=start, created_at__lte=now)
            .order_by()
            .values('direction')
            .annotate(count=Count('id'), quantity=Sum('quantity'))
            .order_by('direction')
        )
        return [
            {'direction': row['direction'], 'count': row['count'], 'quantity': row['quantity'] or 0}
            for row in rows
        ]

    @staticmethod
    def top_moved_products(now=None) -> list[dict]:
        """Products with the largest total quantity moved over the trailing window."""
        now = now or timezone.now()
        since = now - timedelta(days=settings.DASHBOARD_TOP_MOVED_WINDOW_DAYS)
        rows = (
            StockMovement.objects
            .filter(created_at__gte=since, created_at__lte=now)
            .order_by()
            .values('product_id', 'product__name', 'product__code')
            .annotate(total_moved=Sum('quantity'))
            .order_by('-total_moved', 'product__name')[:settings.DASHBOARD_TOP_MOVED_LIMIT]
        )
        return [
            {
                'product_id': row['product_id'],
                'name': row['product__name'],
                'code': row['product__code'],
                'total_moved': row['total_moved'],
            }
            for row in rows
        ]

    @staticmethod
    def get_snapshot(now=None) -> dict:
        now = now or timezone.now()
        return {
            'total_products': DashboardService.total_products(),
            'low_stock_count': DashboardService.low_stock_count(),
            'inventory_value': DashboardService.inventory_value(),
            'monthly_movement_totals': DashboardService.monthly_movement_totals(now),
            'top_moved_products': DashboardService.top_moved_products(now),
        }
