"""
Tests — ProductService and CategoryService.

@file products/tests/test_services.py
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from core.constants import MAX_STOCK_QUANTITY
from core.exceptions import DuplicateResourceError, InvalidInputError, ResourceNotFoundError
from products.models import Product
from products.services import CategoryService, ProductService
from stock.services import StockService
from tests.factories import CategoryFactory, ProductFactory


pytestmark = pytest.mark.django_db


def _products_in_creation_order(count, **kwargs):
    """Create products with strictly increasing created_at."""
    base = timezone.now() - timedelta(hours=1)
    products = []
    for i in range(count):
        product = ProductFactory(**kwargs)
        Product.objects.filter(pk=product.pk).update(created_at=base + timedelta(seconds=i))
        products.append(product)
    return products


class TestGetById:

    def test_returns_active_product(self, product):
        assert ProductService.get_by_id(product.pk) == product

    @pytest.mark.parametrize('product_id', [uuid.uuid4(), 'garbage', None, 42])
    def test_unknown_or_malformed_id_not_found(self, product_id):
        with pytest.raises(ResourceNotFoundError):
            ProductService.get_by_id(product_id)

    def test_soft_deleted_not_found(self, product):
        product.soft_delete()
        with pytest.raises(ResourceNotFoundError):
            ProductService.get_by_id(product.pk)


class TestCreateProduct:

    def test_create_with_zero_stock(self, user):
        category = CategoryFactory()
        product = ProductService.create_product(
            actor=user, name='  Hammer ', price='12.5', category=category.pk,
            code='HM-1', minimum_stock=3,
        )
        assert product.name == 'Hammer'
        assert product.price == Decimal('12.5')
        assert product.category == category
        assert product.stock_quantity == 0
        assert product.created_by == user

    def test_name_and_price_required(self):
        with pytest.raises(InvalidInputError):
            ProductService.create_product(price='1.00')
        with pytest.raises(InvalidInputError):
            ProductService.create_product(name='Hammer')

    @pytest.mark.parametrize('price', ['-0.01', 'free'])
    def test_invalid_price_rejected(self, price):
        with pytest.raises(InvalidInputError):
            ProductService.create_product(name='Hammer', price=price)

    @pytest.mark.parametrize('minimum_stock', [-1, '3', True, MAX_STOCK_QUANTITY + 1])
    def test_invalid_minimum_stock_rejected(self, minimum_stock):
        with pytest.raises(InvalidInputError):
            ProductService.create_product(name='Hammer', price='1', minimum_stock=minimum_stock)

    def test_unknown_category_rejected(self):
        with pytest.raises(InvalidInputError):
            ProductService.create_product(name='Hammer', price='1', category=999999)

    def test_inactive_category_rejected(self):
        category = CategoryFactory(is_active=False)
        with pytest.raises(InvalidInputError):
            ProductService.create_product(name='Hammer', price='1', category=category.pk)

    def test_duplicate_active_code_conflicts(self):
        ProductFactory(code='DUP')
        with pytest.raises(DuplicateResourceError):
            ProductService.create_product(name='Hammer', price='1', code='DUP')

    def test_code_match_is_case_sensitive(self):
        ProductFactory(code='abc')
        product = ProductService.create_product(name='Hammer', price='1', code='ABC')
        assert product.code == 'ABC'

    def test_blank_code_stored_as_null(self):
        first = ProductService.create_product(name='A', price='1', code='')
        second = ProductService.create_product(name='B', price='1', code='  ')
        assert first.code is None and second.code is None

    def test_stock_quantity_rejected(self):
        with pytest.raises(InvalidInputError):
            ProductService.create_product(name='Hammer', price='1', stock_quantity=10)

    def test_unknown_field_rejected(self):
        with pytest.raises(InvalidInputError):
            ProductService.create_product(name='Hammer', price='1', colour='red')

    def test_invalid_image_url_rejected(self):
        with pytest.raises(InvalidInputError):
            ProductService.create_product(name='Hammer', price='1', image_url='not a url')


class TestUpdateMutableFields:

    def test_updates_mutable_fields(self, product, user):
        category = CategoryFactory()
        updated = ProductService.update_mutable_fields(
            product_id=product.pk, actor=user,
            name='Renamed', price='99.99', category=category.pk, minimum_stock=0,
        )
        updated.refresh_from_db()
        assert updated.name == 'Renamed'
        assert updated.price == Decimal('99.99')
        assert updated.category == category
        assert updated.minimum_stock == 0
        assert updated.updated_by == user

    def test_stock_quantity_never_editable(self, stocked_product):
        with pytest.raises(InvalidInputError):
            ProductService.update_mutable_fields(
                product_id=stocked_product.pk, stock_quantity=5,
            )
        stocked_product.refresh_from_db()
        assert stocked_product.stock_quantity == 100

    def test_update_does_not_touch_stock(self, stocked_product):
        ProductService.update_mutable_fields(product_id=stocked_product.pk, name='Still stocked')
        stocked_product.refresh_from_db()
        assert stocked_product.stock_quantity == 100

    def test_keeping_own_code_allowed(self):
        product = ProductFactory(code='KEEP')
        ProductService.update_mutable_fields(product_id=product.pk, code='KEEP')
        product.refresh_from_db()
        assert product.code == 'KEEP'

    def test_taking_another_products_code_conflicts(self):
        ProductFactory(code='TAKEN')
        product = ProductFactory(code='MINE')
        with pytest.raises(DuplicateResourceError):
            ProductService.update_mutable_fields(product_id=product.pk, code='TAKEN')

    def test_category_can_be_cleared(self, product):
        ProductService.update_mutable_fields(product_id=product.pk, category=None)
        product.refresh_from_db()
        assert product.category is None

    def test_missing_product_not_found(self):
        with pytest.raises(ResourceNotFoundError):
            ProductService.update_mutable_fields(product_id=uuid.uuid4(), name='x')


class TestSoftDelete:

    def test_soft_delete_hides_product(self, stocked_product, user):
        ProductService.soft_delete(product_id=stocked_product.pk, actor=user)
        stocked_product.refresh_from_db()
        assert stocked_product.is_active is False
        assert stocked_product.deactivated_by == user
        assert stocked_product.movements.count() == 1

    def test_soft_delete_twice_not_found(self, product):
        ProductService.soft_delete(product_id=product.pk)
        with pytest.raises(ResourceNotFoundError):
            ProductService.soft_delete(product_id=product.pk)


class TestListProducts:

    def test_newest_first_active_only(self):
        first, second, removed = _products_in_creation_order(3)
        removed.soft_delete()
        items = ProductService.list_products()['items']
        assert items == [second, first]

    def test_search_matches_name_or_code_case_insensitive(self):
        ProductFactory(name='Copper wire', code='CW-1')
        ProductFactory(name='Steel bolt', code='COP-9')
        ProductFactory(name='Nylon rope', code='NR-1')
        names = {p.name for p in ProductService.list_products(search='cop')['items']}
        assert names == {'Copper wire', 'Steel bolt'}

    def test_filter_by_category(self):
        category = CategoryFactory()
        in_category = ProductFactory(category=category)
        ProductFactory()
        items = ProductService.list_products(category_id=category.pk)['items']
        assert items == [in_category]

    def test_malformed_category_filter_rejected(self):
        with pytest.raises(InvalidInputError):
            ProductService.list_products(category_id='abc')

    def test_offset_pagination(self):
        products = _products_in_creation_order(5)
        page = ProductService.list_products(page_size=2, page=2)
        assert page['items'] == [products[2], products[1]]
        assert (page['page'], page['page_size']) == (2, 2)

    def test_page_size_capped(self):
        page = ProductService.list_products(page_size=10_000)
        assert page['page_size'] == 200

    def test_listing_created_through_engine(self):
        StockService.create_product_with_initial_stock(name='Listed', price='1', initial_quantity=3)
        [item] = ProductService.list_products(search='Listed')['items']
        assert item.stock_quantity == 3


class TestCategoryService:

    def test_create_and_list(self):
        CategoryService.create_category(name='Tools')
        CategoryService.create_category(name='Adhesives', description='glues')
        CategoryFactory(name='Retired', is_active=False)
        assert [c.name for c in CategoryService.list_categories()] == ['Adhesives', 'Tools']

    def test_duplicate_name_conflicts(self):
        CategoryService.create_category(name='Tools')
        with pytest.raises(DuplicateResourceError):
            CategoryService.create_category(name='Tools')

    def test_blank_name_rejected(self):
        with pytest.raises(InvalidInputError):
            CategoryService.create_category(name='   ')

    def test_resolve(self):
        category = CategoryFactory()
        assert CategoryService.resolve(category.pk) == category
        assert CategoryService.resolve(category) == category
        assert CategoryService.resolve(None) is None
        with pytest.raises(InvalidInputError):
            CategoryService.resolve('x')
