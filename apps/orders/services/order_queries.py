"""Order read/query service."""

from django.db.models import QuerySet
from uuid import UUID
from typing import Optional, Dict, Any

from ..models import Order, OrderStatus
from .exceptions import OrderNotFoundError
from .transitions import RETURNABLE_STATUSES, can_transition


def _orders_queryset() -> QuerySet[Order]:
    return (
        Order.objects
        .select_related('customer', 'payment')
        .prefetch_related('items__product', 'items__product_plan')
    )


def get_customer_orders(*, customer) -> QuerySet[Order]:
    """All orders of one customer, newest first."""
    return _orders_queryset().filter(customer=customer)


def get_all_orders(
    *,
    status: Optional[str] = None,
    order_type: Optional[str] = None
) -> QuerySet[Order]:
    """All orders (admin), optionally filtered by status and type."""
    queryset = _orders_queryset()

    if status:
        queryset = queryset.filter(status=status)
    if order_type:
        queryset = queryset.filter(order_type=order_type)

    return queryset


def get_order(*, order_id: UUID, customer=None) -> Order:
    """
    Get an order with its items and payment.

    Raises:
        OrderNotFoundError: If order doesn't exist, or isn't the customer's
            when ``customer`` is given
    """
    queryset = _orders_queryset()
    if customer is not None:
        queryset = queryset.filter(customer=customer)

    try:
        return queryset.get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order {order_id} not found")


def get_order_summary(*, order_id: UUID, customer=None) -> Dict[str, Any]:
    """
    Payment and return overview of an order.

    Returns:
        dict with amounts, item counts and which customer actions are
        currently possible
    """
    order = get_order(order_id=order_id, customer=customer)
    items = list(order.items.all())

    returned = [item for item in items if item.is_returned]
    unreturned = [item for item in items if not item.is_returned]

    return {
        'order_id': order.id,
        'status': order.status,
        'order_type': order.order_type,
        'payment_method': order.payment.payment_method,
        'currency': order.payment.currency,
        'amount': order.payment.amount,
        'item_count': len(items),
        'returned_item_count': len(returned),
        'return_requested_count': sum(1 for item in items if item.return_requested),
        'can_cancel': can_transition(order, OrderStatus.CANCELLED),
        'can_request_return': order.status in RETURNABLE_STATUSES and bool(unreturned),
    }
