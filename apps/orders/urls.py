from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'orders'

router = DefaultRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # GET    /api/orders/                              - Own orders (admin: all)
    # POST   /api/orders/                              - Place order
    # GET    /api/orders/{id}/                         - Order details
    # GET    /api/orders/{id}/summary/                 - Payment and return overview

    # Customer actions
    # POST   /api/orders/{id}/cancel/
    # POST   /api/orders/{id}/request-return/
    # POST   /api/orders/{id}/items/{item_id}/return/

    # Admin actions
    # POST   /api/orders/{id}/accept/
    # POST   /api/orders/{id}/reject/
    # POST   /api/orders/{id}/status/                  - Body: {"status": ...}
    # POST   /api/orders/{id}/approve-return/
    # POST   /api/orders/{id}/reject-return/

    path('', include(router.urls)),
]
