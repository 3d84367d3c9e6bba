"""
StockLedger — Test Factories

Factory Boy factories for generating test data. Used across all test
modules. Stock is never set directly: use StockService (or the
``stocked_product`` fixture) so the ledger stays consistent.

@file tests/factories.py
"""

from decimal import Decimal

import factory

from products.models import Category, Product
from users.models import User


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f'user-{n}@test.local')
    name = factory.Faker('name')
    role = User.RoleChoices.USER
    is_active = True

    @factory.post_generation
    def password(self, create, extracted, **kwargs):
        password = extracted or 'TestPass2026!'
        self.set_password(password)
        if create:
            self.save(update_fields=['password'])


class AdminUserFactory(UserFactory):
    role = User.RoleChoices.ADMIN


class SuperuserFactory(UserFactory):
    role = User.RoleChoices.ADMIN
    is_staff = True
    is_superuser = True


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f'Category-{n}')
    description = factory.Faker('sentence')


class ProductFactory(factory.django.DjangoModelFactory):
    """Product with zero stock and no movements."""

    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f'Product-{n}')
    description = factory.Faker('sentence')
    category = factory.SubFactory(CategoryFactory)
    price = factory.LazyFunction(lambda: Decimal('10.00'))
    minimum_stock = 5
    code = factory.Sequence(lambda n: f'SKU-{n:05d}')
