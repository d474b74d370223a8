import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.catalog.models import Product, ProductPlan
from apps.orders.models import OrderStatus, OrderType, PaymentMethod
from apps.orders.services import place_order, update_order_status


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


def advance(order, *statuses):
    """Walk an order through the given statuses and return it refreshed."""
    for status in statuses:
        update_order_status(order_id=order.id, status=status)
    order.refresh_from_db()
    return order


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def customer(db):
    """Create and return a customer with a default address."""
    return User.objects.create_user(
        email='customer@example.com',
        password='testpass123',
        name='Jane Customer',
        address='1 Main Street, Springfield',
    )


@pytest.fixture
def other_customer(db):
    """Create and return another customer."""
    return User.objects.create_user(
        email='other@example.com',
        password='otherpass123',
    )


@pytest.fixture
def admin_user(db):
    """Create and return a store admin."""
    return User.objects.create_user(
        email='admin@example.com',
        password='adminpass123',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def customer_client(customer):
    """Return an API client authenticated with the customer's JWT."""
    return _client_for(customer)


@pytest.fixture
def other_client(other_customer):
    """Return an API client authenticated as another customer."""
    return _client_for(other_customer)


@pytest.fixture
def admin_client(admin_user):
    """Return an API client authenticated as a store admin."""
    return _client_for(admin_user)


@pytest.fixture
def phone(db):
    """Create and return a phone with 10 units in stock."""
    return Product.objects.create(
        name='Pixel Phone',
        vendor='Google',
        price=Decimal('500.00'),
        quantity=10,
    )


@pytest.fixture
def charger(db):
    """Create and return a charger with 50 units in stock."""
    return Product.objects.create(
        name='65W Charger',
        vendor='Anker',
        price=Decimal('20.00'),
        quantity=50,
    )


@pytest.fixture
def phone_plan(db, phone):
    """Create and return a service plan for the phone."""
    return ProductPlan.objects.create(
        product=phone,
        name='Care 2Y',
        price=Decimal('100.00'),
        guarantee=2,
        maintenance=2,
    )


@pytest.fixture
def pickup_time():
    """A pickup slot tomorrow."""
    return timezone.now() + timedelta(days=1)


@pytest.fixture
def order_items(phone, charger, phone_plan):
    """
    Two phones with plan and three chargers.

    Line amounts: (500 + 100) * 2 = 1200 and 20 * 3 = 60.
    """
    return [
        {'product_id': phone.id, 'product_plan_id': phone_plan.id, 'quantity': 2},
        {'product_id': charger.id, 'quantity': 3},
    ]


@pytest.fixture
def pickup_order(customer, order_items, pickup_time):
    """A pending pickup order totalling 1260.00."""
    return place_order(
        customer=customer,
        items=order_items,
        order_type=OrderType.PICKUP,
        payment_method=PaymentMethod.CREDIT_CARD,
        pickup_datetime=pickup_time,
    )


@pytest.fixture
def delivery_order(customer, order_items):
    """A pending delivery order totalling 1260.00."""
    return place_order(
        customer=customer,
        items=order_items,
        order_type=OrderType.DELIVERY,
        payment_method=PaymentMethod.DEBIT_CARD,
        address='221B Baker Street',
    )


@pytest.fixture
def ready_order(pickup_order):
    """The pickup order, ready for pickup."""
    return advance(
        pickup_order,
        OrderStatus.ACCEPTED,
        OrderStatus.PREPARING,
        OrderStatus.READY,
    )


@pytest.fixture
def delivered_order(delivery_order):
    """The delivery order, delivered."""
    return advance(
        delivery_order,
        OrderStatus.ACCEPTED,
        OrderStatus.PREPARING,
        OrderStatus.DELIVERED,
    )


@pytest.fixture
def advance_order():
    """Return the helper that walks an order through statuses."""
    return advance
