from rest_framework import serializers
from apps.catalog.serializers import ProductMinimalSerializer
from .models import CartItem


# =============================================================================
# Input Serializers
# =============================================================================

class CartItemAddSerializer(serializers.Serializer):
    """Validate adding a product to the cart."""

    product_id = serializers.UUIDField()
    product_plan_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    quantity = serializers.IntegerField(min_value=1, default=1)


class CartItemUpdateSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)


# =============================================================================
# Output Serializers
# =============================================================================

class CartPlanSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)


class CartItemSerializer(serializers.ModelSerializer):
    """Cart line with computed prices."""

    product = ProductMinimalSerializer(read_only=True)
    product_plan = CartPlanSerializer(read_only=True, allow_null=True)
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    in_stock = serializers.SerializerMethodField()

    class Meta:
        model = CartItem
        fields = [
            'id',
            'product',
            'product_plan',
            'quantity',
            'unit_price',
            'line_total',
            'in_stock',
            'added_at',
        ]
        read_only_fields = fields

    def get_in_stock(self, obj):
        """Whether current stock covers the requested quantity."""
        return obj.product.is_active and obj.product.quantity >= obj.quantity


class CartSerializer(serializers.Serializer):
    items = CartItemSerializer(many=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    item_count = serializers.IntegerField()
