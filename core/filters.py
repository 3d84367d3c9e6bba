"""
Core — FilterSet helpers

Services filter querysets with django-filter FilterSets fed from plain
dicts. Invalid filter values surface as InvalidInputError.

@file core/filters.py
"""

from core.exceptions import InvalidInputError


def apply_filterset(filterset_class, data: dict, queryset):
    """Return ``queryset`` narrowed by ``filterset_class`` over the non-empty values of ``data``."""
    data = {key: value for key, value in data.items() if value not in (None, '')}
    filterset = filterset_class(data=data, queryset=queryset)
    if not filterset.is_valid():
        raise InvalidInputError(detail={
            field: [error['message'] for error in errors]
            for field, errors in filterset.errors.get_json_data().items()
        })
    return filterset.qs
