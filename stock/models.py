"""
Stock — Models

Append-only ledger of stock movements. Each row moves a positive
quantity of one product in one direction; the product's
stock_quantity is the running net of its rows.
Records are INSERT ONLY — never update or delete.

@file stock/models.py
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class StockMovementQuerySet(models.QuerySet):
    """Bulk writes are closed so the ledger cannot be rewritten in place."""

    def update(self, **kwargs):
        raise NotImplementedError('StockMovement is insert-only; updates are not allowed.')

    def bulk_update(self, objs, fields, batch_size=None):
        raise NotImplementedError('StockMovement is insert-only; updates are not allowed.')

    def delete(self):
        raise NotImplementedError('StockMovement records cannot be deleted.')


class StockMovement(models.Model):
    """
    A single immutable stock movement (insert only).

    The id is assigned by the database in insert order, so within one
    product it follows the order in which the engine applied movements.
    """

    class Direction(models.TextChoices):
        INCOMING = 'incoming', _('Incoming')
        OUTGOING = 'outgoing', _('Outgoing')

    id = models.BigAutoField(primary_key=True)
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.PROTECT,
        related_name='movements',
        verbose_name=_('product'),
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='stock_movements',
        verbose_name=_('created by'),
    )
    direction = models.CharField(
        _('direction'), max_length=8,
        choices=Direction.choices, db_index=True,
    )
    quantity = models.PositiveIntegerField(_('quantity'))
    unit_price = models.DecimalField(
        _('unit price'), max_digits=12, decimal_places=2,
        null=True, blank=True,
        help_text=_('Unit price at the time of the movement'),
    )
    reason = models.CharField(_('reason'), max_length=255, blank=True)
    observations = models.TextField(_('observations'), blank=True)
    created_at = models.DateTimeField(
        _('created at'), default=timezone.now, db_index=True, editable=False,
    )
    # No updated_at — immutable record.

    objects = StockMovementQuerySet.as_manager()

    class Meta:
        verbose_name = _('stock movement')
        verbose_name_plural = _('stock movements')
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['product', 'created_at'], name='movement_product_created_idx'),
            models.Index(fields=['direction', 'created_at'], name='movement_dir_created_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name='movement_quantity_positive',
            ),
            models.CheckConstraint(
                condition=models.Q(direction__in=['incoming', 'outgoing']),
                name='movement_direction_valid',
            ),
        ]

    def __str__(self):
        return f'{self.direction} {self.quantity} product={self.product_id}'

    @property
    def signed_quantity(self) -> int:
        return self.quantity if self.direction == self.Direction.INCOMING else -self.quantity

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise NotImplementedError('StockMovement is insert-only; updates are not allowed.')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise NotImplementedError('StockMovement records cannot be deleted.')
