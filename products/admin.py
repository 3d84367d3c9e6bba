"""
Products — Django Admin Configuration

Category and Product admin. stock_quantity is read-only here: stock
only changes through recorded movements.

@file products/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import Category, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'is_active', 'products_count', 'created_at')
    list_filter = ('is_active',)
    search_fields = ('name',)
    readonly_fields = ('created_at', 'updated_at')
    ordering = ('name',)

    @admin.display(description=_('Products'))
    def products_count(self, obj):
        return obj.products.filter(is_active=True).count()


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        'name', 'code', 'category', 'formatted_price',
        'stock_quantity', 'minimum_stock', 'stock_badge',
        'is_active', 'created_at',
    )
    list_filter = ('is_active', 'category')
    search_fields = ('name', 'code')
    readonly_fields = (
        'id', 'stock_quantity',
        'created_at', 'updated_at', 'created_by', 'updated_by',
        'deactivated_at', 'deactivated_by',
    )
    date_hierarchy = 'created_at'
    list_select_related = ('category',)
    show_full_result_count = False
    list_per_page = 30
    ordering = ('-created_at',)

    fieldsets = (
        (_('Identification'), {
            'fields': ('id', 'name', 'code', 'category', 'description', 'image_url'),
        }),
        (_('Stock'), {
            'fields': ('price', 'stock_quantity', 'minimum_stock'),
        }),
        (_('Status'), {
            'fields': ('is_active', 'deactivated_at', 'deactivated_by'),
        }),
        (_('Audit'), {
            'fields': ('created_at', 'updated_at', 'created_by', 'updated_by'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(description=_('Price'), ordering='price')
    def formatted_price(self, obj):
        return f'{obj.price:,.2f}'

    @admin.display(description=_('Level'))
    def stock_badge(self, obj):
        if obj.stock_quantity == 0:
            color, label = '#dc3545', _('Out of stock')
        elif obj.is_low_stock:
            color, label = '#fd7e14', _('Low')
        else:
            color, label = '#28a745', _('OK')
        return format_html(
            '<span style="background:{}; color:white; padding:2px 8px; border-radius:4px;">{}</span>',
            color, label,
        )

    def has_delete_permission(self, request, obj=None):
        return False  # soft delete only
