"""
Stock — Django Admin Configuration

Read-only list of StockMovement. No add, no edit, no delete: movements
are only recorded through StockService.
INSERT ONLY — model save() blocks updates; delete() raises.

@file stock/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import StockMovement


@admin.register(StockMovement)
class StockMovementAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'product', 'direction', 'quantity',
        'unit_price', 'reason', 'created_by', 'created_at',
    )
    list_filter = ('direction', 'created_at')
    search_fields = ('product__name', 'product__code', 'reason')
    readonly_fields = (
        'id', 'product', 'direction', 'quantity', 'unit_price',
        'reason', 'observations', 'created_by', 'created_at',
    )
    list_select_related = ('product', 'created_by')
    show_full_result_count = False
    list_per_page = 50
    date_hierarchy = 'created_at'
    ordering = ('-created_at', '-id')

    fieldsets = (
        (_('Movement'), {
            'fields': ('id', 'product', 'direction', 'quantity', 'unit_price'),
        }),
        (_('Context'), {
            'fields': ('reason', 'observations'),
        }),
        (_('Audit'), {
            'fields': ('created_by', 'created_at'),
        }),
    )

    def has_add_permission(self, request):
        return False  # recorded by the stock engine only

    def has_change_permission(self, request, obj=None):
        return False  # INSERT ONLY — no updates

    def has_delete_permission(self, request, obj=None):
        return False  # INSERT ONLY — no deletes
