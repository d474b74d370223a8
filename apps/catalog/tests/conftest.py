import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from apps.accounts.models import User, UserRole
from apps.catalog.models import Category, Product, ProductPlan


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a customer."""
    return User.objects.create_user(
        email='customer@example.com',
        password='testpass123',
        name='Test Customer',
    )


@pytest.fixture
def admin_user(db):
    """Create and return a store admin."""
    return User.objects.create_user(
        email='admin@example.com',
        password='adminpass123',
        name='Store Admin',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an API client authenticated as a customer."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return an API client authenticated as a store admin."""
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def category(db):
    """Create and return a category."""
    return Category.objects.create(name='Audio')


@pytest.fixture
def other_category(db):
    """Create and return a second category."""
    return Category.objects.create(name='Computers')


@pytest.fixture
def product(db, category):
    """Create and return an in-stock product."""
    product = Product.objects.create(
        name='Noise Cancelling Headphones',
        vendor='Sony',
        price=Decimal('299.99'),
        quantity=10,
        description='Over-ear wireless headphones.',
        serial_no='WH-1000XM5',
    )
    product.categories.add(category)
    return product


@pytest.fixture
def laptop(db, other_category):
    """Create and return a laptop."""
    product = Product.objects.create(
        name='Ultrabook 14',
        vendor='Lenovo',
        price=Decimal('1199.00'),
        quantity=3,
    )
    product.categories.add(other_category)
    return product


@pytest.fixture
def sold_out_product(db):
    """Create and return a product with no stock."""
    return Product.objects.create(
        name='Smart Speaker',
        vendor='Sonos',
        price=Decimal('199.00'),
        quantity=0,
    )


@pytest.fixture
def inactive_product(db):
    """Create and return a deactivated product."""
    return Product.objects.create(
        name='Old Phone',
        vendor='Nokia',
        price=Decimal('49.00'),
        quantity=5,
        is_active=False,
    )


@pytest.fixture
def plan(db, product):
    """Create and return a service plan for the headphones."""
    return ProductPlan.objects.create(
        product=product,
        name='Care Plus',
        price=Decimal('49.99'),
        guarantee=2,
        maintenance=1,
    )
