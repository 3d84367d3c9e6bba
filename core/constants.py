"""
Core — Constants

Shared literals used across apps.

@file core/constants.py
"""

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200

INITIAL_STOCK_REASON = 'initial stock'

LOW_STOCK_PREVIEW_SIZE = 20

# PositiveIntegerField upper bound on PostgreSQL; SQLite does not enforce it.
MAX_STOCK_QUANTITY = 2147483647
