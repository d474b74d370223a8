from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from .serializers import (
    CartItemAddSerializer,
    CartItemUpdateSerializer,
    CartItemSerializer,
    CartSerializer,
)
from .services import (
    get_cart,
    add_item,
    update_item_quantity,
    remove_item,
    clear_cart,
    CartItemNotFoundError,
    ProductUnavailableError,
    InvalidPlanError,
)


@extend_schema(
    responses={200: CartSerializer},
    description="Get the current user's cart with line totals and the cart total.",
    tags=['cart'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def cart_detail(request):
    """Get the current user's cart."""
    return Response(CartSerializer(get_cart(user=request.user)).data)


@extend_schema(
    request=CartItemAddSerializer,
    responses={201: CartItemSerializer},
    description="Add a product (optionally with a plan) to the cart. "
                "Adding the same product and plan again increases the quantity.",
    tags=['cart'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cart_add_item(request):
    """Add an item to the cart."""
    serializer = CartItemAddSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        item = add_item(user=request.user, **serializer.validated_data)
    except (ProductUnavailableError, InvalidPlanError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(CartItemSerializer(item).data, status=status.HTTP_201_CREATED)


@extend_schema(
    methods=['PATCH'],
    request=CartItemUpdateSerializer,
    responses={200: CartItemSerializer},
    description="Change the quantity of a cart item.",
    tags=['cart'],
)
@extend_schema(
    methods=['DELETE'],
    responses={204: None},
    description="Remove an item from the cart.",
    tags=['cart'],
)
@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def cart_item_detail(request, item_id):
    """Update or remove a single cart item."""
    if request.method == 'DELETE':
        try:
            remove_item(user=request.user, item_id=item_id)
        except CartItemNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = CartItemUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        item = update_item_quantity(
            user=request.user,
            item_id=item_id,
            quantity=serializer.validated_data['quantity']
        )
    except CartItemNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(CartItemSerializer(item).data)


@extend_schema(
    request=None,
    responses={200: CartSerializer},
    description="Remove every item from the cart.",
    tags=['cart'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cart_clear(request):
    """Empty the cart."""
    clear_cart(user=request.user)
    return Response(CartSerializer(get_cart(user=request.user)).data)
