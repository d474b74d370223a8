from django.conf import settings
from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.permissions import IsStoreAdmin
from .models import Order
from .permissions import IsOrderOwnerOrStoreAdmin
from .serializers import (
    OrderCreateSerializer,
    OrderFilterSerializer,
    OrderStatusUpdateSerializer,
    OrderSerializer,
    OrderListSerializer,
    ProductOrderSerializer,
    OrderSummarySerializer,
)
from .services import (
    place_order,
    place_order_from_cart,
    update_order_status,
    accept_order,
    reject_order,
    cancel_order,
    request_return,
    approve_return,
    reject_return,
    return_item,
    get_customer_orders,
    get_all_orders,
    get_order,
    get_order_summary,
    OrdersServiceError,
    OrderNotFoundError,
    OrderItemNotFoundError,
    InsufficientStockError,
)

NOT_FOUND_ERRORS = (OrderNotFoundError, OrderItemNotFoundError)

UUID_PATTERN = r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}'

ADMIN_ACTIONS = ['accept', 'reject', 'set_status', 'approve_return', 'reject_return']


class OrderPagination(PageNumberPagination):
    """Custom pagination for orders."""
    page_size = settings.ORDER_PAGE_SIZE
    page_size_query_param = 'page_size'
    max_page_size = 100


class OrderViewSet(mixins.ListModelMixin,
                   mixins.RetrieveModelMixin,
                   viewsets.GenericViewSet):
    """
    ViewSet for orders and their lifecycle.

    list: Own orders (admins: all orders, filterable by status and type)
    create: Place an order from the given items or from the cart
    retrieve: Order with items and payment

    Customer actions: cancel, request-return, items/{item_id}/return
    Admin actions: accept, reject, status, approve-return, reject-return
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated, IsOrderOwnerOrStoreAdmin]
    pagination_class = OrderPagination
    lookup_value_regex = UUID_PATTERN

    def get_permissions(self):
        """Admin-only lifecycle actions."""
        if self.action in ADMIN_ACTIONS:
            return [IsAuthenticated(), IsStoreAdmin()]
        return super().get_permissions()

    def get_queryset(self):
        """Admins see every order, customers their own."""
        if getattr(self, 'swagger_fake_view', False):
            return Order.objects.none()

        user = self.request.user

        if not user.is_store_admin:
            return get_customer_orders(customer=user)

        if self.action != 'list':
            return get_all_orders()

        filter_serializer = OrderFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return get_all_orders(
            status=params.get('status'),
            order_type=params.get('type'),
        )

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return OrderListSerializer
        elif self.action == 'create':
            return OrderCreateSerializer
        return OrderSerializer

    def _order_response(self, order, status_code=status.HTTP_200_OK):
        order = get_order(order_id=order.id)
        return Response(OrderSerializer(order).data, status=status_code)

    @extend_schema(
        request=OrderCreateSerializer,
        responses={201: OrderSerializer},
    )
    def create(self, request, *args, **kwargs):
        """Place an order. Without ``items`` the cart is checked out."""
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        details = {
            'customer': request.user,
            'order_type': data['order_type'],
            'payment_method': data['payment_method'],
            'address': data['address'],
            'pickup_datetime': data['pickup_datetime'],
        }

        try:
            if 'items' in data:
                order = place_order(items=data['items'], **details)
            else:
                order = place_order_from_cart(**details)
        except InsufficientStockError as e:
            return Response({
                'error': str(e),
                'product_id': str(e.product.id),
                'requested': e.requested,
                'available': e.available,
            }, status=status.HTTP_400_BAD_REQUEST)
        except OrdersServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return self._order_response(order, status.HTTP_201_CREATED)

    @extend_schema(responses={200: OrderSummarySerializer})
    @action(detail=True, methods=['get'])
    def summary(self, request, pk=None):
        """
        Payment and return overview.

        GET /api/orders/{id}/summary/
        """
        order = self.get_object()
        summary = get_order_summary(order_id=order.id)
        return Response(OrderSummarySerializer(summary).data)

    # -------------------------------------------------------------------------
    # Customer actions
    # -------------------------------------------------------------------------

    @extend_schema(request=None, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        """
        Cancel own pending order.

        POST /api/orders/{id}/cancel/
        """
        try:
            order = cancel_order(order_id=pk, customer=request.user)
        except NOT_FOUND_ERRORS as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except OrdersServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return self._order_response(order)

    @extend_schema(request=None, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'], url_path='request-return')
    def request_return(self, request, pk=None):
        """
        Ask for the whole order to be returned.

        POST /api/orders/{id}/request-return/
        """
        try:
            order = request_return(order_id=pk, customer=request.user)
        except NOT_FOUND_ERRORS as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except OrdersServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return self._order_response(order)

    @extend_schema(
        request=None,
        responses={200: ProductOrderSerializer},
        parameters=[OpenApiParameter('item_id', str, OpenApiParameter.PATH)],
    )
    @action(
        detail=True,
        methods=['post'],
        url_path=rf'items/(?P<item_id>{UUID_PATTERN})/return'
    )
    def return_item(self, request, pk=None, item_id=None):
        """
        Return a single line item.

        POST /api/orders/{id}/items/{item_id}/return/
        """
        try:
            item = return_item(order_id=pk, item_id=item_id, customer=request.user)
        except NOT_FOUND_ERRORS as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except OrdersServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ProductOrderSerializer(item).data)

    # -------------------------------------------------------------------------
    # Admin actions
    # -------------------------------------------------------------------------

    def _run_admin_action(self, service, pk, **kwargs):
        try:
            order = service(order_id=pk, **kwargs)
        except NOT_FOUND_ERRORS as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except OrdersServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return self._order_response(order)

    @extend_schema(request=None, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'])
    def accept(self, request, pk=None):
        """POST /api/orders/{id}/accept/"""
        return self._run_admin_action(accept_order, pk)

    @extend_schema(request=None, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        """POST /api/orders/{id}/reject/"""
        return self._run_admin_action(reject_order, pk)

    @extend_schema(request=OrderStatusUpdateSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'], url_path='status')
    def set_status(self, request, pk=None):
        """
        Move the order to the next status.

        POST /api/orders/{id}/status/
        Body: {"status": "preparing"}
        """
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return self._run_admin_action(
            update_order_status,
            pk,
            status=serializer.validated_data['status']
        )

    @extend_schema(request=None, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'], url_path='approve-return')
    def approve_return(self, request, pk=None):
        """POST /api/orders/{id}/approve-return/"""
        return self._run_admin_action(approve_return, pk)

    @extend_schema(request=None, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'], url_path='reject-return')
    def reject_return(self, request, pk=None):
        """POST /api/orders/{id}/reject-return/"""
        return self._run_admin_action(reject_return, pk)
