from django.conf import settings
from django.db import models
from django.db.models import Sum
from django.core.validators import MinValueValidator
from decimal import Decimal
import secrets
import uuid


def default_currency():
    return getattr(settings, 'STORE_CURRENCY', 'USD')


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACCEPTED = 'accepted', 'Accepted'
    REJECTED = 'rejected', 'Rejected'
    CANCELLED = 'cancelled', 'Cancelled'
    PREPARING = 'preparing', 'Preparing'
    READY = 'ready', 'Ready for pickup'
    DELIVERED = 'delivered', 'Delivered'
    COMPLETED = 'completed', 'Completed'
    RETURN_REQUESTED = 'return_requested', 'Return requested'
    RETURNED = 'returned', 'Returned'
    RETURN_REJECTED = 'return_rejected', 'Return rejected'


class OrderType(models.TextChoices):
    PICKUP = 'pickup', 'Pickup'
    DELIVERY = 'delivery', 'Delivery'


class PaymentMethod(models.TextChoices):
    CREDIT_CARD = 'credit_card', 'Credit card'
    DEBIT_CARD = 'debit_card', 'Debit card'


class Order(models.Model):
    """Customer order with its lifecycle status."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='orders'
    )
    order_type = models.CharField(max_length=20, choices=OrderType.choices)
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING
    )

    # Only set for pickup orders
    pickup_datetime = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['customer', 'created_at'], name='orders_custome_1b9e4c_idx'),
            models.Index(fields=['status', 'created_at'], name='orders_status_6f2a8d_idx'),
            models.Index(fields=['order_type'], name='orders_order_t_0c7b3e_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Order {str(self.id)[:8]} ({self.get_status_display()})"

    def unreturned_total(self):
        """Sum of line amounts of items that have not been returned."""
        total = self.items.filter(is_returned=False).aggregate(
            total=Sum('amount')
        )['total']
        return total or Decimal('0.00')

    def has_unreturned_items(self):
        return self.items.filter(is_returned=False).exists()


class Payment(models.Model):
    """Payment record; every order has exactly one."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.OneToOneField(
        Order,
        on_delete=models.CASCADE,
        related_name='payment'
    )
    customer = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='payments'
    )
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices)

    # Only required for delivery orders
    address = models.TextField(blank=True)

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    currency = models.CharField(max_length=3, default=default_currency)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payments'

    def __str__(self):
        return f"{self.amount} {self.currency} ({self.get_payment_method_display()})"


class ProductOrder(models.Model):
    """One line item of an order."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items'
    )
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='order_items'
    )
    product_plan = models.ForeignKey(
        'catalog.ProductPlan',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items'
    )
    quantity = models.PositiveIntegerField()

    # Product price plus plan price at the time of ordering
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)

    # Line total; zeroed when a whole-order return is approved
    amount = models.DecimalField(max_digits=12, decimal_places=2)

    serial_no = models.CharField(max_length=16, unique=True, editable=False)
    return_requested = models.BooleanField(default=False)
    is_returned = models.BooleanField(default=False)
    returned_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'product_orders'
        indexes = [
            models.Index(fields=['order', 'is_returned'], name='product_ord_order_i_4e1d2a_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.quantity} x {self.product.name} ({self.serial_no})"

    def save(self, *args, **kwargs):
        if not self.serial_no:
            self.serial_no = self._generate_serial_no()
        super().save(*args, **kwargs)

    @staticmethod
    def _generate_serial_no():
        """16 random digits, retried until unused."""
        while True:
            serial_no = ''.join(str(secrets.randbelow(10)) for _ in range(16))
            if not ProductOrder.objects.filter(serial_no=serial_no).exists():
                return serial_no
