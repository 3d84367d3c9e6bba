"""
Stock — Filters

@file stock/filters.py
"""

import django_filters

from .models import StockMovement


class StockMovementFilter(django_filters.FilterSet):
    product = django_filters.UUIDFilter(field_name='product_id')
    direction = django_filters.ChoiceFilter(choices=StockMovement.Direction.choices)
