"""
Core — Pagination

Offset pagination shared by the product and movement listings:
page N of size S skips (N - 1) * S rows. Page size is capped.

@file core/pagination.py
"""

from core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from core.exceptions import InvalidInputError


def normalize_page_params(page=1, page_size=DEFAULT_PAGE_SIZE) -> tuple[int, int]:
    """Coerce page / page_size to positive ints, capping page_size."""
    try:
        page = int(page)
        page_size = int(page_size)
    except (TypeError, ValueError):
        raise InvalidInputError(detail='page and page_size must be integers.')
    if page < 1 or page_size < 1:
        raise InvalidInputError(detail='page and page_size must be positive.')
    return page, min(page_size, MAX_PAGE_SIZE)


def paginate(queryset, *, page=1, page_size=DEFAULT_PAGE_SIZE) -> dict:
    page, page_size = normalize_page_params(page, page_size)
    offset = (page - 1) * page_size
    return {
        'items': list(queryset[offset:offset + page_size]),
        'page': page,
        'page_size': page_size,
    }


def page_params_from_query(query_params) -> tuple[int, int]:
    return normalize_page_params(
        query_params.get('page', 1),
        query_params.get('page_size', DEFAULT_PAGE_SIZE),
    )
