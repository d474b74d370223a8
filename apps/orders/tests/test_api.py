import pytest
from datetime import timedelta
from decimal import Decimal
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from apps.cart.models import CartItem
from apps.catalog.models import Product
from apps.orders.models import Order, OrderStatus


def detail_url(name, order, **kwargs):
    return reverse(f'orders:order-{name}', kwargs={'pk': order.id, **kwargs})


# =============================================================================
# Order Placement API Tests
# =============================================================================

@pytest.mark.django_db
class TestOrderCreate:
    """Tests for POST /api/orders/"""

    def test_requires_authentication(self, api_client):
        url = reverse('orders:order-list')
        response = api_client.post(url, {}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_place_order_with_items(self, customer_client, phone, charger, phone_plan, pickup_time):
        url = reverse('orders:order-list')
        data = {
            'order_type': 'pickup',
            'payment_method': 'credit_card',
            'pickup_datetime': pickup_time.isoformat(),
            'items': [
                {'product_id': str(phone.id), 'product_plan_id': str(phone_plan.id), 'quantity': 1},
                {'product_id': str(charger.id), 'quantity': 2},
            ],
        }
        response = customer_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'pending'
        assert response.data['payment']['amount'] == '640.00'
        assert len(response.data['items']) == 2
        assert len(response.data['items'][0]['serial_no']) == 16

    def test_place_delivery_order_from_cart(self, customer_client, customer, charger):
        CartItem.objects.create(user=customer, product=charger, quantity=4)

        url = reverse('orders:order-list')
        data = {
            'order_type': 'delivery',
            'payment_method': 'debit_card',
            'address': '742 Evergreen Terrace',
        }
        response = customer_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['payment']['amount'] == '80.00'
        assert response.data['payment']['address'] == '742 Evergreen Terrace'
        assert not CartItem.objects.filter(user=customer).exists()

    def test_empty_cart(self, customer_client):
        url = reverse('orders:order-list')
        data = {'order_type': 'delivery', 'payment_method': 'debit_card'}
        response = customer_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'empty' in response.data['error']

    def test_empty_items_list_rejected(self, customer_client):
        url = reverse('orders:order-list')
        data = {'order_type': 'delivery', 'payment_method': 'debit_card', 'items': []}
        response = customer_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'items' in response.data

    def test_pickup_requires_time(self, customer_client, charger):
        url = reverse('orders:order-list')
        data = {
            'order_type': 'pickup',
            'payment_method': 'credit_card',
            'items': [{'product_id': str(charger.id), 'quantity': 1}],
        }
        response = customer_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'pickup_datetime' in response.data

    def test_pickup_time_in_past(self, customer_client, charger):
        url = reverse('orders:order-list')
        data = {
            'order_type': 'pickup',
            'payment_method': 'credit_card',
            'pickup_datetime': (timezone.now() - timedelta(hours=1)).isoformat(),
            'items': [{'product_id': str(charger.id), 'quantity': 1}],
        }
        response = customer_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'pickup_datetime' in response.data

    def test_insufficient_stock(self, customer_client, phone, charger):
        url = reverse('orders:order-list')
        data = {
            'order_type': 'delivery',
            'payment_method': 'credit_card',
            'items': [
                {'product_id': str(charger.id), 'quantity': 1},
                {'product_id': str(phone.id), 'quantity': 50},
            ],
        }
        response = customer_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['product_id'] == str(phone.id)
        assert response.data['available'] == 10
        assert Order.objects.count() == 0
        assert Product.objects.get(id=charger.id).quantity == 50

    def test_invalid_payment_method(self, customer_client, charger):
        url = reverse('orders:order-list')
        data = {
            'order_type': 'delivery',
            'payment_method': 'cash',
            'items': [{'product_id': str(charger.id), 'quantity': 1}],
        }
        response = customer_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'payment_method' in response.data


# =============================================================================
# Order Read API Tests
# =============================================================================

@pytest.mark.django_db
class TestOrderList:
    """Tests for GET /api/orders/"""

    def test_customer_sees_own_orders(self, customer_client, other_client, pickup_order):
        url = reverse('orders:order-list')

        response = customer_client.get(url)
        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['amount'] == '1260.00'
        assert response.data['results'][0]['item_count'] == 2

        response = other_client.get(url)
        assert response.data['count'] == 0

    def test_admin_sees_all_and_filters(self, admin_client, pickup_order, delivery_order):
        url = reverse('orders:order-list')

        response = admin_client.get(url)
        assert response.data['count'] == 2

        response = admin_client.get(url, {'type': 'delivery'})
        assert [o['id'] for o in response.data['results']] == [str(delivery_order.id)]

        response = admin_client.get(url, {'status': 'accepted'})
        assert response.data['count'] == 0

    def test_invalid_status_filter(self, admin_client):
        url = reverse('orders:order-list')
        response = admin_client.get(url, {'status': 'shipped'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestOrderDetail:
    """Tests for GET /api/orders/{id}/"""

    def test_retrieve_own_order(self, customer_client, pickup_order):
        response = customer_client.get(detail_url('detail', pickup_order))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['customer']['email'] == 'customer@example.com'
        assert response.data['payment']['payment_method'] == 'credit_card'

    def test_other_customer_gets_404(self, other_client, pickup_order):
        response = other_client.get(detail_url('detail', pickup_order))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_admin_can_retrieve(self, admin_client, pickup_order):
        response = admin_client.get(detail_url('detail', pickup_order))

        assert response.status_code == status.HTTP_200_OK

    def test_summary(self, customer_client, ready_order):
        response = customer_client.get(detail_url('summary', ready_order))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'ready'
        assert response.data['amount'] == '1260.00'
        assert response.data['can_request_return'] is True
        assert response.data['can_cancel'] is False


# =============================================================================
# Customer Action API Tests
# =============================================================================

@pytest.mark.django_db
class TestCustomerActions:
    """Tests for cancel, request-return and item return."""

    def test_cancel(self, customer_client, pickup_order, phone):
        response = customer_client.post(detail_url('cancel', pickup_order))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'cancelled'
        assert response.data['payment']['amount'] == '0.00'
        assert Product.objects.get(id=phone.id).quantity == 10

    def test_cancel_accepted_order(self, customer_client, pickup_order, advance_order):
        advance_order(pickup_order, OrderStatus.ACCEPTED)

        response = customer_client.post(detail_url('cancel', pickup_order))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_cancel_other_customers_order(self, other_client, pickup_order):
        response = other_client.post(detail_url('cancel', pickup_order))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_request_return(self, customer_client, delivered_order):
        response = customer_client.post(detail_url('request-return', delivered_order))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'return_requested'
        assert all(item['return_requested'] for item in response.data['items'])

    def test_request_return_pending_order(self, customer_client, pickup_order):
        response = customer_client.post(detail_url('request-return', pickup_order))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_return_item(self, customer_client, ready_order, charger):
        line = ready_order.items.get(product=charger)

        response = customer_client.post(detail_url('return-item', ready_order, item_id=line.id))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_returned'] is True
        ready_order.payment.refresh_from_db()
        assert ready_order.payment.amount == Decimal('1200.00')

    def test_return_item_twice(self, customer_client, ready_order, charger):
        line = ready_order.items.get(product=charger)
        url = detail_url('return-item', ready_order, item_id=line.id)

        customer_client.post(url)
        response = customer_client.post(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'already returned' in response.data['error']

    def test_return_unknown_item(self, customer_client, ready_order, delivery_order):
        foreign_line = delivery_order.items.first()

        response = customer_client.post(
            detail_url('return-item', ready_order, item_id=foreign_line.id)
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_return_item_malformed_id(self, customer_client, ready_order):
        response = customer_client.post(f'/api/orders/{ready_order.id}/items/abc/return/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_cancel_malformed_order_id(self, customer_client):
        response = customer_client.post(f"/api/orders/{'-' * 36}/cancel/")

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Admin Action API Tests
# =============================================================================

@pytest.mark.django_db
class TestAdminActions:
    """Tests for accept, reject, status, approve-return and reject-return."""

    def test_accept(self, admin_client, pickup_order):
        response = admin_client.post(detail_url('accept', pickup_order))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'accepted'

    def test_reject_restocks(self, admin_client, pickup_order, charger):
        response = admin_client.post(detail_url('reject', pickup_order))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'rejected'
        assert response.data['payment']['amount'] == '0.00'
        assert Product.objects.get(id=charger.id).quantity == 50

    def test_status_walk(self, admin_client, delivery_order):
        url = detail_url('set-status', delivery_order)

        for next_status in ['accepted', 'preparing', 'delivered', 'completed']:
            response = admin_client.post(url, {'status': next_status}, format='json')
            assert response.status_code == status.HTTP_200_OK
            assert response.data['status'] == next_status

    def test_status_invalid_transition(self, admin_client, pickup_order):
        url = detail_url('set-status', pickup_order)
        response = admin_client.post(url, {'status': 'completed'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        pickup_order.refresh_from_db()
        assert pickup_order.status == OrderStatus.PENDING

    def test_status_unknown_value(self, admin_client, pickup_order):
        url = detail_url('set-status', pickup_order)
        response = admin_client.post(url, {'status': 'shipped'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'status' in response.data

    def test_approve_return(self, admin_client, customer_client, ready_order, phone):
        customer_client.post(detail_url('request-return', ready_order))

        response = admin_client.post(detail_url('approve-return', ready_order))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'returned'
        assert response.data['payment']['amount'] == '0.00'
        assert Product.objects.get(id=phone.id).quantity == 10

    def test_reject_return(self, admin_client, customer_client, ready_order):
        customer_client.post(detail_url('request-return', ready_order))

        response = admin_client.post(detail_url('reject-return', ready_order))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'return_rejected'
        assert response.data['payment']['amount'] == '1260.00'

    def test_approve_return_without_request(self, admin_client, ready_order):
        response = admin_client.post(detail_url('approve-return', ready_order))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_admin_action_unknown_order(self, admin_client, pickup_order):
        url = reverse('orders:order-accept', kwargs={'pk': '00000000-0000-0000-0000-000000000000'})
        response = admin_client.post(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
