import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.catalog.models import Category, Product, ProductPlan


# =============================================================================
# Category API Tests
# =============================================================================

@pytest.mark.django_db
class TestCategoryAPI:
    """Tests for /api/catalog/categories/"""

    def test_list_categories_public(self, api_client, category, product):
        url = reverse('catalog:category-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['name'] == 'Audio'
        assert response.data[0]['product_count'] == 1

    def test_create_category_admin(self, admin_client):
        url = reverse('catalog:category-list')
        response = admin_client.post(url, {'name': 'Wearables'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert Category.objects.filter(name='Wearables').exists()

    def test_create_category_duplicate(self, admin_client, category):
        url = reverse('catalog:category-list')
        response = admin_client.post(url, {'name': 'AUDIO'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_create_category_customer_forbidden(self, authenticated_client):
        url = reverse('catalog:category-list')
        response = authenticated_client.post(url, {'name': 'Wearables'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_create_category_unauthenticated(self, api_client):
        url = reverse('catalog:category-list')
        response = api_client.post(url, {'name': 'Wearables'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_rename_category(self, admin_client, category):
        url = reverse('catalog:category-detail', kwargs={'pk': category.id})
        response = admin_client.patch(url, {'name': 'Hi-Fi'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Hi-Fi'

    def test_delete_category(self, admin_client, category):
        url = reverse('catalog:category-detail', kwargs={'pk': category.id})
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Category.objects.filter(id=category.id).exists()


# =============================================================================
# Product API Tests
# =============================================================================

@pytest.mark.django_db
class TestProductList:
    """Tests for GET /api/catalog/products/"""

    def test_list_products_unauthenticated(self, api_client, product):
        url = reverse('catalog:product-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['slug'] == product.slug
        assert response.data['results'][0]['in_stock'] is True

    def test_list_excludes_inactive(self, api_client, product, inactive_product):
        url = reverse('catalog:product-list')
        response = api_client.get(url)

        names = [p['name'] for p in response.data['results']]
        assert inactive_product.name not in names

    def test_list_pagination(self, api_client, db):
        for i in range(25):
            Product.objects.create(name=f'Cable {i}', vendor='Anker', price=Decimal('9.99'))

        url = reverse('catalog:product-list')
        response = api_client.get(url)

        assert len(response.data['results']) == 20
        assert response.data['count'] == 25
        assert response.data['next'] is not None

    def test_filter_by_search_and_category(self, api_client, product, laptop, other_category):
        url = reverse('catalog:product-list')

        response = api_client.get(url, {'search': 'headphones'})
        assert [p['name'] for p in response.data['results']] == [product.name]

        response = api_client.get(url, {'category': str(other_category.id)})
        assert [p['name'] for p in response.data['results']] == [laptop.name]

    def test_filter_in_stock(self, api_client, product, sold_out_product):
        url = reverse('catalog:product-list')
        response = api_client.get(url, {'in_stock': 'true'})

        assert [p['name'] for p in response.data['results']] == [product.name]

    def test_invalid_price_range(self, api_client, product):
        url = reverse('catalog:product-list')
        response = api_client.get(url, {'min_price': '500', 'max_price': '100'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'max_price' in response.data


@pytest.mark.django_db
class TestProductDetail:
    """Tests for product detail endpoints."""

    def test_retrieve_includes_plans(self, api_client, product, plan):
        url = reverse('catalog:product-detail', kwargs={'pk': product.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['plans'][0]['name'] == 'Care Plus'
        assert response.data['categories'][0]['name'] == 'Audio'

    def test_retrieve_by_slug(self, api_client, product):
        url = reverse('catalog:product-by-slug', kwargs={'slug': product.slug})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(product.id)

    def test_retrieve_by_unknown_slug(self, api_client, db):
        url = reverse('catalog:product-by-slug', kwargs={'slug': 'missing'})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_vendors(self, api_client, product, laptop):
        url = reverse('catalog:product-vendors')
        response = api_client.get(url)

        assert response.data == ['Lenovo', 'Sony']


@pytest.mark.django_db
class TestProductWrite:
    """Tests for admin product management."""

    def test_create_product(self, admin_client, category):
        url = reverse('catalog:product-list')
        data = {
            'name': 'Mechanical Keyboard',
            'vendor': 'Keychron',
            'price': '89.00',
            'quantity': 12,
            'category_ids': [str(category.id)],
        }
        response = admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['slug'] == 'mechanical-keyboard'
        assert response.data['categories'][0]['id'] == str(category.id)

    def test_create_product_customer_forbidden(self, authenticated_client):
        url = reverse('catalog:product-list')
        data = {'name': 'Keyboard', 'vendor': 'Keychron', 'price': '89.00'}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_create_product_negative_price(self, admin_client):
        url = reverse('catalog:product-list')
        data = {'name': 'Keyboard', 'vendor': 'Keychron', 'price': '-1.00'}
        response = admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'price' in response.data

    def test_create_duplicate_product(self, admin_client, product):
        url = reverse('catalog:product-list')
        data = {'name': product.name, 'vendor': product.vendor, 'price': '1.00'}
        response = admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'already exists' in response.data['error']

    def test_partial_update_keeps_categories(self, admin_client, product, category):
        url = reverse('catalog:product-detail', kwargs={'pk': product.id})
        response = admin_client.patch(url, {'quantity': 42}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['quantity'] == 42
        assert [c['id'] for c in response.data['categories']] == [str(category.id)]

    def test_delete_product_deactivates(self, admin_client, product):
        url = reverse('catalog:product-detail', kwargs={'pk': product.id})
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        product.refresh_from_db()
        assert product.is_active is False

    def test_duplicates_endpoint(self, admin_client, product):
        url = reverse('catalog:product-duplicates')
        response = admin_client.get(url, {'name': product.name, 'vendor': 'Sony'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['match_type'] == 'exact'
        assert response.data[0]['product']['id'] == str(product.id)

    def test_duplicates_endpoint_requires_admin(self, authenticated_client, product):
        url = reverse('catalog:product-duplicates')
        response = authenticated_client.get(url, {'name': product.name, 'vendor': 'Sony'})

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Plan API Tests
# =============================================================================

@pytest.mark.django_db
class TestProductPlanAPI:
    """Tests for /api/catalog/plans/"""

    def test_list_plans_for_product(self, api_client, plan, laptop):
        ProductPlan.objects.create(product=laptop, name='Basic', price=Decimal('9.00'))

        url = reverse('catalog:plan-list')
        response = api_client.get(url, {'product': str(plan.product_id)})

        assert response.status_code == status.HTTP_200_OK
        assert [p['name'] for p in response.data] == ['Care Plus']

    def test_create_plan(self, admin_client, product):
        url = reverse('catalog:plan-list')
        data = {
            'product': str(product.id),
            'name': 'Premium Care',
            'price': '99.00',
            'guarantee': 3,
            'maintenance': 3,
        }
        response = admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert product.plans.filter(name='Premium Care').exists()

    def test_update_plan(self, admin_client, plan):
        url = reverse('catalog:plan-detail', kwargs={'pk': plan.id})
        response = admin_client.patch(url, {'price': '39.99'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['price'] == '39.99'

    def test_delete_plan_customer_forbidden(self, authenticated_client, plan):
        url = reverse('catalog:plan-detail', kwargs={'pk': plan.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
