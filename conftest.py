"""
StockLedger — Root conftest for pytest

Shared fixtures available to all test modules.

@file conftest.py
"""

import pytest
from rest_framework.test import APIClient

from stock.services import StockService
from tests.factories import AdminUserFactory, ProductFactory, UserFactory


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Active USER-role account with default password TestPass2026!"""
    return UserFactory()


@pytest.fixture
def admin_user(db):
    """Active ADMIN-role account with default password TestPass2026!"""
    return AdminUserFactory()


@pytest.fixture
def authenticated_client(api_client, user):
    """API client authenticated as a regular user."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    """API client authenticated as an ADMIN user."""
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def product(db):
    """Active product with zero stock."""
    return ProductFactory()


@pytest.fixture
def stocked_product(db, user):
    """Active product holding 100 units, booked as one incoming movement."""
    product = ProductFactory()
    StockService.apply_movement(
        product_id=product.pk, direction='incoming', quantity=100, actor=user,
    )
    product.refresh_from_db()
    return product
