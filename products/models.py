"""
Products — Models

Product catalogue with the current stock figure for each product.
stock_quantity is owned by the stock engine: it is only ever written
inside the engine's unit of work, together with a ledger row.

@file products/models.py
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel, SoftDeleteMixin, TimestampMixin


def default_minimum_stock():
    return settings.STOCK_DEFAULT_MINIMUM


class Category(TimestampMixin):
    """Optional grouping for products."""

    name = models.CharField(_('name'), max_length=100, unique=True)
    description = models.TextField(_('description'), blank=True)
    is_active = models.BooleanField(_('active'), default=True, db_index=True)

    class Meta:
        verbose_name = _('category')
        verbose_name_plural = _('categories')
        ordering = ['name']

    def __str__(self):
        return self.name


class Product(BaseModel, SoftDeleteMixin):
    """
    A stocked product.

    stock_quantity always equals SUM(incoming) - SUM(outgoing) over the
    product's StockMovement rows and is never negative.
    """

    name = models.CharField(_('name'), max_length=200)
    description = models.TextField(_('description'), blank=True)
    category = models.ForeignKey(
        Category,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='products',
        verbose_name=_('category'),
    )
    price = models.DecimalField(
        _('unit price'), max_digits=12, decimal_places=2,
    )
    stock_quantity = models.PositiveIntegerField(
        _('stock quantity'), default=0, editable=False,
    )
    minimum_stock = models.PositiveIntegerField(
        _('minimum stock'), default=default_minimum_stock,
        help_text=_('Products at or below this level are reported as low stock'),
    )
    code = models.CharField(
        _('product code'), max_length=50, null=True, blank=True, db_index=True,
    )
    image_url = models.URLField(_('image URL'), max_length=500, blank=True)

    class Meta:
        verbose_name = _('product')
        verbose_name_plural = _('products')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_active', 'created_at'], name='product_active_created_idx'),
            models.Index(fields=['category', 'is_active'], name='product_category_active_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['code'],
                condition=models.Q(is_active=True, code__isnull=False),
                name='unique_active_product_code',
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name='product_price_non_negative',
            ),
            models.CheckConstraint(
                condition=models.Q(stock_quantity__gte=0),
                name='product_stock_non_negative',
            ),
        ]

    def __str__(self):
        return f'{self.name} ({self.code})' if self.code else self.name

    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity <= self.minimum_stock
