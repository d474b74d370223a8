"""
Order status lifecycle.

    PENDING -> ACCEPTED | REJECTED | CANCELLED
    ACCEPTED -> PREPARING
    PREPARING -> READY (pickup) | DELIVERED (delivery)
    READY | DELIVERED -> COMPLETED
    READY | DELIVERED | COMPLETED -> RETURN_REQUESTED
    RETURN_REQUESTED -> RETURNED | RETURN_REJECTED

Returning the last unreturned item moves a READY, DELIVERED or COMPLETED
order straight to RETURNED (see ``return_item``).
"""

import logging

from uuid import UUID

from ..models import Order, OrderStatus, OrderType
from .exceptions import OrderNotFoundError, InvalidStatusTransitionError

logger = logging.getLogger(__name__)


ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.ACCEPTED, OrderStatus.REJECTED, OrderStatus.CANCELLED},
    OrderStatus.ACCEPTED: {OrderStatus.PREPARING},
    OrderStatus.PREPARING: {OrderStatus.READY, OrderStatus.DELIVERED},
    OrderStatus.READY: {OrderStatus.COMPLETED, OrderStatus.RETURN_REQUESTED},
    OrderStatus.DELIVERED: {OrderStatus.COMPLETED, OrderStatus.RETURN_REQUESTED},
    OrderStatus.COMPLETED: {OrderStatus.RETURN_REQUESTED},
    OrderStatus.RETURN_REQUESTED: {OrderStatus.RETURNED, OrderStatus.RETURN_REJECTED},
}

# Statuses from which the customer may return the order or single items
RETURNABLE_STATUSES = {OrderStatus.READY, OrderStatus.DELIVERED, OrderStatus.COMPLETED}

# Refused orders give their stock back and owe nothing
REFUSED_STATUSES = {OrderStatus.REJECTED, OrderStatus.CANCELLED}


def can_transition(order: Order, status: str) -> bool:
    if status not in ALLOWED_TRANSITIONS.get(order.status, set()):
        return False
    if status == OrderStatus.READY and order.order_type != OrderType.PICKUP:
        return False
    if status == OrderStatus.DELIVERED and order.order_type != OrderType.DELIVERY:
        return False
    return True


def ensure_transition(order: Order, status: str) -> None:
    """
    Raises:
        InvalidStatusTransitionError: If ``status`` cannot follow the current one
    """
    if not can_transition(order, status):
        logger.warning("Order %s: refused %s -> %s", order.id, order.status, status)
        raise InvalidStatusTransitionError(
            f"Cannot change {order.get_order_type_display().lower()} order "
            f"from '{order.status}' to '{status}'"
        )


def get_locked_order(order_id: UUID, customer=None) -> Order:
    """
    Lock an order row for update. Must run inside a transaction.

    Raises:
        OrderNotFoundError: If the order doesn't exist, or isn't the
            customer's when ``customer`` is given
    """
    queryset = Order.objects.select_for_update()
    if customer is not None:
        queryset = queryset.filter(customer=customer)
    try:
        return queryset.get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order {order_id} not found")
