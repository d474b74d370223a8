import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from apps.accounts.models import User
from apps.catalog.models import Product, ProductPlan
from apps.cart.models import CartItem


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a customer."""
    return User.objects.create_user(
        email='shopper@example.com',
        password='testpass123',
        name='Shopper',
    )


@pytest.fixture
def other_user(db):
    """Create and return another customer."""
    return User.objects.create_user(
        email='other@example.com',
        password='otherpass123',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an API client authenticated as the shopper."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def product(db):
    """Create and return a product with stock."""
    return Product.objects.create(
        name='Wireless Mouse',
        vendor='Logitech',
        price=Decimal('40.00'),
        quantity=5,
    )


@pytest.fixture
def other_product(db):
    """Create and return a second product."""
    return Product.objects.create(
        name='USB-C Hub',
        vendor='Anker',
        price=Decimal('25.50'),
        quantity=2,
    )


@pytest.fixture
def plan(db, product):
    """Create and return a plan for the mouse."""
    return ProductPlan.objects.create(
        product=product,
        name='Accidental Damage',
        price=Decimal('5.00'),
        guarantee=1,
    )


@pytest.fixture
def cart_item(db, user, product):
    """Put two mice in the shopper's cart."""
    return CartItem.objects.create(user=user, product=product, quantity=2)
