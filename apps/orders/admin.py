from django.contrib import admin
from django.utils.html import format_html
from .models import Order, OrderStatus, Payment, ProductOrder


STATUS_COLORS = {
    OrderStatus.PENDING: ('#E5C49A', '#2C1810'),
    OrderStatus.ACCEPTED: ('#8FB3D9', 'white'),
    OrderStatus.PREPARING: ('#8FB3D9', 'white'),
    OrderStatus.READY: ('#6B8E5E', 'white'),
    OrderStatus.DELIVERED: ('#6B8E5E', 'white'),
    OrderStatus.COMPLETED: ('#3E6B35', 'white'),
    OrderStatus.REJECTED: ('#B85C5C', 'white'),
    OrderStatus.CANCELLED: ('#B85C5C', 'white'),
    OrderStatus.RETURN_REQUESTED: ('#A47449', 'white'),
    OrderStatus.RETURNED: ('#7A7A7A', 'white'),
    OrderStatus.RETURN_REJECTED: ('#7A7A7A', 'white'),
}


class ProductOrderInline(admin.TabularInline):
    """Inline admin for order line items."""
    model = ProductOrder
    extra = 0
    fields = [
        'product',
        'product_plan',
        'quantity',
        'unit_price',
        'amount',
        'serial_no',
        'return_requested',
        'is_returned',
    ]
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        """Line items are created when the order is placed."""
        return False


class PaymentInline(admin.StackedInline):
    model = Payment
    extra = 0
    fields = ['payment_method', 'address', 'amount', 'currency']
    readonly_fields = ['amount', 'currency']
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin interface for Orders.

    Status changes go through the API so that stock and payment
    amounts stay consistent; the status is read-only here.
    """

    list_display = [
        'short_id',
        'customer',
        'order_type',
        'status_badge',
        'get_amount',
        'created_at',
    ]
    list_filter = ['status', 'order_type', 'created_at']
    search_fields = ['id', 'customer__email', 'customer__name', 'items__serial_no']
    readonly_fields = ['status', 'created_at', 'updated_at']
    inlines = [PaymentInline, ProductOrderInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    list_select_related = ['customer', 'payment']

    def short_id(self, obj):
        return str(obj.id)[:8]
    short_id.short_description = 'Order'

    def status_badge(self, obj):
        """Display order status as colored badge."""
        bg, fg = STATUS_COLORS.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def get_amount(self, obj):
        payment = getattr(obj, 'payment', None)
        if payment is None:
            return '-'
        return f"{payment.amount} {payment.currency}"
    get_amount.short_description = 'Amount'


@admin.register(ProductOrder)
class ProductOrderAdmin(admin.ModelAdmin):
    list_display = ['serial_no', 'product', 'order', 'quantity', 'amount', 'return_requested', 'is_returned']
    list_filter = ['return_requested', 'is_returned']
    search_fields = ['serial_no', 'product__name', 'order__customer__email']
    raw_id_fields = ['order', 'product', 'product_plan']
    readonly_fields = ['serial_no', 'returned_at', 'created_at']
