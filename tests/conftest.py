# ===============================================================================
# PYTEST CONFIGURATION FOR THE MARKETPLACE API
# ===============================================================================
"""
Global test configuration.

Test Structure:
- tests/ mirrors apps/ structure for app-specific tests
- tests/api/ exercises the HTTP surface end to end

Run all tests: pytest tests/
"""

import os

import django


def pytest_configure():
    """Configure Django settings for pytest"""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.test')

    django.setup()

# ===============================================================================
# PYTEST FIXTURES
# ===============================================================================

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402

from tests.factories.core_factories import (  # noqa: E402
    ProductCreationRequest,
    UserCreationRequest,
    create_product,
    create_user,
)


@pytest.fixture
def user():
    """Create test buyer"""
    return create_user(UserCreationRequest(email='buyer@marketplace.test'))


@pytest.fixture
def seller():
    """Create test seller"""
    return create_user(UserCreationRequest(email='seller@marketplace.test'))


@pytest.fixture
def product(seller):
    """Published product priced at 10.00"""
    return create_product(ProductCreationRequest(user=seller, title='Keyboard', price=Decimal('10.00')))


@pytest.fixture
def api_client():
    """Unauthenticated DRF client"""
    from rest_framework.test import APIClient  # noqa: PLC0415

    return APIClient()


@pytest.fixture
def authenticated_client(api_client, user):
    """DRF client authenticated as the test buyer"""
    api_client.force_authenticate(user=user)
    return api_client
