from django.contrib import admin
from apps.cart.models import CartItem


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ['user', 'product', 'product_plan', 'quantity', 'added_at']
    list_filter = ['added_at']
    search_fields = ['user__email', 'product__name', 'product__vendor']
    raw_id_fields = ['user', 'product', 'product_plan']
    date_hierarchy = 'added_at'
