from django.urls import path
from . import views

app_name = 'cart'

urlpatterns = [
    # GET    /api/cart/                 - Current cart with totals
    path('', views.cart_detail, name='cart-detail'),
    # POST   /api/cart/items/           - Add item
    path('items/', views.cart_add_item, name='cart-add-item'),
    # PATCH  /api/cart/items/{id}/      - Change quantity
    # DELETE /api/cart/items/{id}/      - Remove item
    path('items/<uuid:item_id>/', views.cart_item_detail, name='cart-item-detail'),
    # POST   /api/cart/clear/           - Empty cart
    path('clear/', views.cart_clear, name='cart-clear'),
]
