"""
Core — Pagination tests

@file core/tests/test_pagination.py
"""

import pytest

from core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from core.exceptions import InvalidInputError
from core.pagination import normalize_page_params, page_params_from_query, paginate


class TestNormalizePageParams:
    def test_defaults(self):
        assert normalize_page_params() == (1, DEFAULT_PAGE_SIZE)

    def test_strings_coerced(self):
        assert normalize_page_params('3', '20') == (3, 20)

    def test_page_size_capped(self):
        assert normalize_page_params(1, MAX_PAGE_SIZE + 1) == (1, MAX_PAGE_SIZE)

    @pytest.mark.parametrize('page, page_size', [(0, 10), (1, 0), (-1, 10), ('x', 10), (1, None)])
    def test_invalid_values_rejected(self, page, page_size):
        with pytest.raises(InvalidInputError):
            normalize_page_params(page, page_size)

    def test_from_query_params(self):
        assert page_params_from_query({'page': '2'}) == (2, DEFAULT_PAGE_SIZE)


class TestPaginate:
    def test_offset_slice(self):
        page = paginate(list(range(10)), page=2, page_size=3)
        assert page == {'items': [3, 4, 5], 'page': 2, 'page_size': 3}

    def test_past_the_end_is_empty(self):
        assert paginate(list(range(3)), page=5, page_size=3)['items'] == []
