from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter()
router.register(r'categories', views.CategoryViewSet, basename='category')
router.register(r'plans', views.ProductPlanViewSet, basename='plan')
router.register(r'products', views.ProductViewSet, basename='product')

urlpatterns = [
    # Category routes
    # GET    /api/catalog/categories/           - List categories with product counts
    # POST   /api/catalog/categories/           - Create category (admin)
    # PATCH  /api/catalog/categories/{id}/      - Rename category (admin)
    # DELETE /api/catalog/categories/{id}/      - Delete category (admin)

    # Product routes
    # GET    /api/catalog/products/             - Browse products
    # POST   /api/catalog/products/             - Create product (admin)
    # GET    /api/catalog/products/{id}/        - Product details with plans
    # PATCH  /api/catalog/products/{id}/        - Update product (admin)
    # DELETE /api/catalog/products/{id}/        - Deactivate product (admin)
    # GET    /api/catalog/products/by-slug/{slug}/
    # GET    /api/catalog/products/vendors/
    # GET    /api/catalog/products/duplicates/  - Similar products (admin)

    # Plan routes
    # GET    /api/catalog/plans/?product={id}   - List plans
    # POST   /api/catalog/plans/                - Create plan (admin)
    # PATCH  /api/catalog/plans/{id}/           - Update plan (admin)
    # DELETE /api/catalog/plans/{id}/           - Delete plan (admin)

    path('', include(router.urls)),
]
