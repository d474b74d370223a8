from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class CartItem(models.Model):
    """One product (with an optional service plan) in a customer's cart."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='cart_items'
    )
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='cart_items'
    )
    product_plan = models.ForeignKey(
        'catalog.ProductPlan',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='cart_items'
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'cart_items'
        indexes = [
            models.Index(fields=['user', 'added_at'], name='cart_items_user_id_7d2f0b_idx'),
        ]
        ordering = ['added_at']

    def __str__(self):
        return f"{self.quantity} x {self.product.name} ({self.user.email})"

    @property
    def unit_price(self):
        """Product price plus the plan price, if any."""
        plan_price = self.product_plan.price if self.product_plan else Decimal('0.00')
        return self.product.price + plan_price

    @property
    def line_total(self):
        return self.unit_price * self.quantity
