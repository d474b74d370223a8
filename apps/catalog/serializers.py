from rest_framework import serializers
from decimal import Decimal
from .models import Category, Product, ProductPlan
from .services import MEDIUM_SIMILARITY_THRESHOLD


# =============================================================================
# Input Serializers
# =============================================================================

class ProductFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for product listing.

    Query Parameters:
        search (str): Text search in name, vendor, description
        category (UUID): Filter by category
        vendor (str): Filter by vendor
        min_price (decimal): Lower price bound
        max_price (decimal): Upper price bound
        in_stock (bool): Only products with (or without) stock
    """

    search = serializers.CharField(required=False, allow_blank=True)
    category = serializers.UUIDField(required=False)
    vendor = serializers.CharField(required=False, allow_blank=True)
    min_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    max_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    in_stock = serializers.BooleanField(required=False, allow_null=True, default=None)

    def validate(self, attrs):
        """Validate price range."""
        min_price = attrs.get('min_price')
        max_price = attrs.get('max_price')

        if min_price is not None and max_price is not None and min_price > max_price:
            raise serializers.ValidationError({
                'max_price': 'Maximum price must be greater than minimum price'
            })

        return attrs


class ProductWriteSerializer(serializers.Serializer):
    """Validate product create/update payloads."""

    name = serializers.CharField(max_length=200)
    vendor = serializers.CharField(max_length=100)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.00'))
    quantity = serializers.IntegerField(min_value=0, default=0)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    image = serializers.URLField(max_length=500, required=False, allow_blank=True, default='')
    serial_no = serializers.CharField(max_length=64, required=False, allow_blank=True, default='')
    category_ids = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        default=list,
        help_text="Categories the product belongs to."
    )


class DuplicateCheckSerializer(serializers.Serializer):
    """Query parameters for the duplicate product check."""

    name = serializers.CharField(max_length=200)
    vendor = serializers.CharField(max_length=100)
    threshold = serializers.IntegerField(
        min_value=0,
        max_value=100,
        default=MEDIUM_SIMILARITY_THRESHOLD
    )


# =============================================================================
# Output Serializers
# =============================================================================

class CategorySerializer(serializers.ModelSerializer):
    """Category with the number of active products."""

    product_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Category
        fields = ['id', 'name', 'product_count', 'created_at']
        read_only_fields = ['id', 'product_count', 'created_at']
        # Case-insensitive uniqueness is checked by the category service
        extra_kwargs = {'name': {'validators': []}}


class ProductPlanSerializer(serializers.ModelSerializer):
    """Serializer for product plans."""

    class Meta:
        model = ProductPlan
        fields = [
            'id',
            'product',
            'name',
            'price',
            'guarantee',
            'maintenance',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class CategoryMinimalSerializer(serializers.ModelSerializer):

    class Meta:
        model = Category
        fields = ['id', 'name']
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    """Full product detail including plans and categories."""

    plans = ProductPlanSerializer(many=True, read_only=True)
    categories = CategoryMinimalSerializer(many=True, read_only=True)
    in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id',
            'name',
            'slug',
            'description',
            'image',
            'vendor',
            'serial_no',
            'price',
            'quantity',
            'in_stock',
            'categories',
            'plans',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ProductListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id',
            'name',
            'slug',
            'image',
            'vendor',
            'price',
            'in_stock',
        ]
        read_only_fields = fields


class ProductMinimalSerializer(serializers.ModelSerializer):
    """Minimal product info for nested serialization."""

    class Meta:
        model = Product
        fields = ['id', 'name', 'slug', 'vendor', 'image']
        read_only_fields = fields


class DuplicateCandidateSerializer(serializers.Serializer):
    product = ProductListSerializer()
    similarity = serializers.IntegerField()
    match_type = serializers.CharField()
