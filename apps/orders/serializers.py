from django.utils import timezone
from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from apps.catalog.serializers import ProductMinimalSerializer
from .models import Order, OrderStatus, OrderType, Payment, PaymentMethod, ProductOrder


# =============================================================================
# Input Serializers
# =============================================================================

class OrderItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    product_plan_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    quantity = serializers.IntegerField(min_value=1)


class OrderCreateSerializer(serializers.Serializer):
    """
    Validate order placement.

    When ``items`` is omitted the order is placed from the customer's cart.
    """

    order_type = serializers.ChoiceField(choices=OrderType.choices)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices)
    address = serializers.CharField(required=False, allow_blank=True, default='')
    pickup_datetime = serializers.DateTimeField(required=False, allow_null=True, default=None)
    items = OrderItemInputSerializer(many=True, required=False)

    def validate_pickup_datetime(self, value):
        if value is not None and value <= timezone.now():
            raise serializers.ValidationError("Pickup time must be in the future")
        return value

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError("Provide at least one item or omit items to use the cart")
        return value

    def validate(self, attrs):
        if attrs['order_type'] == OrderType.PICKUP and attrs.get('pickup_datetime') is None:
            raise serializers.ValidationError({
                'pickup_datetime': 'Pickup orders require a pickup time'
            })
        return attrs


class OrderFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for order listing.

    Query Parameters:
        status (str): Filter by order status (admin)
        type (str): Filter by order type (admin)
    """

    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    type = serializers.ChoiceField(choices=OrderType.choices, required=False)


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)


# =============================================================================
# Output Serializers
# =============================================================================

class PaymentSerializer(serializers.ModelSerializer):

    class Meta:
        model = Payment
        fields = ['id', 'payment_method', 'address', 'amount', 'currency', 'created_at', 'updated_at']
        read_only_fields = fields


class OrderPlanSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    guarantee = serializers.IntegerField()
    maintenance = serializers.IntegerField()


class ProductOrderSerializer(serializers.ModelSerializer):
    """Line item with its return state."""

    product = ProductMinimalSerializer(read_only=True)
    product_plan = OrderPlanSerializer(read_only=True, allow_null=True)

    class Meta:
        model = ProductOrder
        fields = [
            'id',
            'product',
            'product_plan',
            'quantity',
            'unit_price',
            'amount',
            'serial_no',
            'return_requested',
            'is_returned',
            'returned_at',
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Full order with items and payment."""

    customer = UserMinimalSerializer(read_only=True)
    items = ProductOrderSerializer(many=True, read_only=True)
    payment = PaymentSerializer(read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'customer',
            'order_type',
            'status',
            'pickup_datetime',
            'items',
            'payment',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    amount = serializers.DecimalField(
        source='payment.amount',
        max_digits=12,
        decimal_places=2,
        read_only=True
    )
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id',
            'order_type',
            'status',
            'amount',
            'item_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_item_count(self, obj):
        # Uses the prefetched items
        return len(obj.items.all())


class OrderSummarySerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    status = serializers.CharField()
    order_type = serializers.CharField()
    payment_method = serializers.CharField()
    currency = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    item_count = serializers.IntegerField()
    returned_item_count = serializers.IntegerField()
    return_requested_count = serializers.IntegerField()
    can_cancel = serializers.BooleanField()
    can_request_return = serializers.BooleanField()
