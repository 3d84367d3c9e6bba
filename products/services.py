"""
Products — Service Layer

Product store: lookup, creation, edits of mutable fields, soft delete
and listing. Stock is never written here; see stock.services.

@file products/services.py
"""

import logging
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from core.constants import DEFAULT_PAGE_SIZE, MAX_STOCK_QUANTITY
from core.exceptions import DuplicateResourceError, InvalidInputError, ResourceNotFoundError
from core.filters import apply_filterset
from core.pagination import paginate

from .filters import ProductFilter
from .models import Category, Product

logger = logging.getLogger('stockledger')

MUTABLE_FIELDS = {
    'name', 'description', 'category', 'price',
    'minimum_stock', 'code', 'image_url',
}


class CategoryService:
    """Categories referenced by products."""

    @staticmethod
    def list_categories():
        return Category.objects.filter(is_active=True).order_by('name')

    @staticmethod
    @transaction.atomic
    def create_category(*, name: str, description: str = '') -> Category:
        name = (name or '').strip()
        if not name:
            raise InvalidInputError(detail='Category name is required.')
        if Category.objects.filter(name=name).exists():
            raise DuplicateResourceError(detail='A category with this name already exists.')
        try:
            with transaction.atomic():
                category = Category.objects.create(name=name, description=description or '')
        except IntegrityError:
            raise DuplicateResourceError(detail='A category with this name already exists.')
        logger.info('Category %s created: %s', category.pk, name)
        return category

    @staticmethod
    def resolve(value) -> Category | None:
        """Accept a Category, a category id or None; inactive or unknown ids are invalid."""
        if value is None or value == '':
            return None
        category_id = value.pk if isinstance(value, Category) else value
        try:
            return Category.objects.get(pk=category_id, is_active=True)
        except (Category.DoesNotExist, ValueError, TypeError, ValidationError):
            raise InvalidInputError(detail={'category': f'Unknown category: {category_id}.'})


class ProductService:
    """Product store. All reads exclude soft-deleted products."""

    @staticmethod
    def get_by_id(product_id, *, for_update: bool = False) -> Product:
        qs = Product.objects.filter(is_active=True)
        if for_update:
            qs = qs.select_for_update()
        try:
            return qs.get(pk=product_id)
        except (Product.DoesNotExist, ValueError, TypeError, ValidationError):
            raise ResourceNotFoundError(detail='Product not found.')

    @staticmethod
    def _clean_fields(fields: dict, *, partial: bool) -> dict:
        if 'stock_quantity' in fields:
            raise InvalidInputError(
                detail={'stock_quantity': 'Stock can only change through stock movements.'},
            )
        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            raise InvalidInputError(detail=f'Unknown product fields: {", ".join(sorted(unknown))}.')

        cleaned = dict(fields)
        if not partial:
            for required in ('name', 'price'):
                if cleaned.get(required) in (None, ''):
                    raise InvalidInputError(detail={required: 'This field is required.'})

        if 'name' in cleaned:
            cleaned['name'] = (cleaned['name'] or '').strip()
            if not cleaned['name']:
                raise InvalidInputError(detail={'name': 'Name cannot be blank.'})
        if 'price' in cleaned:
            try:
                cleaned['price'] = Decimal(str(cleaned['price']))
            except (InvalidOperation, TypeError, ValueError):
                raise InvalidInputError(detail={'price': 'Price must be a number.'})
            if cleaned['price'] < 0:
                raise InvalidInputError(detail={'price': 'Price cannot be negative.'})
        if 'minimum_stock' in cleaned:
            value = cleaned['minimum_stock']
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_STOCK_QUANTITY:
                raise InvalidInputError(
                    detail={'minimum_stock': f'Minimum stock must be an integer between 0 and {MAX_STOCK_QUANTITY}.'},
                )
        if 'category' in cleaned:
            cleaned['category'] = CategoryService.resolve(cleaned['category'])
        if 'code' in cleaned:
            cleaned['code'] = (cleaned['code'] or '').strip() or None
        for text_field in ('description', 'image_url'):
            if text_field in cleaned and cleaned[text_field] is None:
                cleaned[text_field] = ''
        return cleaned

    @staticmethod
    def _assert_code_available(code: str | None, *, exclude_pk=None) -> None:
        if not code:
            return
        qs = Product.objects.filter(code=code, is_active=True)
        if exclude_pk is not None:
            qs = qs.exclude(pk=exclude_pk)
        if qs.exists():
            raise DuplicateResourceError(detail=f'Product code {code} already exists.')

    @staticmethod
    def _save(product: Product, **save_kwargs) -> None:
        try:
            product.full_clean(exclude=['stock_quantity'], validate_unique=False, validate_constraints=False)
        except ValidationError as exc:
            raise InvalidInputError(detail=exc.message_dict)
        try:
            with transaction.atomic():
                product.save(**save_kwargs)
        except IntegrityError:
            raise DuplicateResourceError(detail=f'Product code {product.code} already exists.')

    @staticmethod
    @transaction.atomic
    def create_product(*, actor=None, **fields) -> Product:
        """
        Create a product with zero stock. Initial stock is booked by
        StockService.create_product_with_initial_stock.
        """
        cleaned = ProductService._clean_fields(fields, partial=False)
        ProductService._assert_code_available(cleaned.get('code'))

        product = Product(**cleaned)
        product.created_by = actor
        product.updated_by = actor
        ProductService._save(product)
        logger.info('Product %s created by %s', product.pk, actor)
        return product

    @staticmethod
    @transaction.atomic
    def update_mutable_fields(*, product_id, actor=None, **fields) -> Product:
        product = ProductService.get_by_id(product_id, for_update=True)
        cleaned = ProductService._clean_fields(fields, partial=True)
        if 'code' in cleaned:
            ProductService._assert_code_available(cleaned['code'], exclude_pk=product.pk)

        for field, value in cleaned.items():
            setattr(product, field, value)
        product.updated_by = actor
        ProductService._save(
            product,
            update_fields=[*cleaned.keys(), 'updated_by', 'updated_at'],
        )
        return product

    @staticmethod
    @transaction.atomic
    def soft_delete(*, product_id, actor=None) -> Product:
        product = ProductService.get_by_id(product_id, for_update=True)
        product.soft_delete(user=actor)
        logger.info('Product %s deactivated by %s', product.pk, actor)
        return product

    @staticmethod
    def list_products(
        *,
        category_id=None,
        search: str | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        page: int = 1,
    ) -> dict:
        """Active products, newest first, offset-paginated."""
        qs = Product.objects.filter(is_active=True).select_related('category')
        qs = apply_filterset(ProductFilter, {'category': category_id, 'search': search}, qs)
        return paginate(qs.order_by('-created_at'), page=page, page_size=page_size)
