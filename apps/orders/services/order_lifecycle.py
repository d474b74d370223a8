"""Order status management service."""

import logging

from django.db import transaction
from decimal import Decimal
from uuid import UUID

from apps.catalog.services import restock_product
from ..models import Order, OrderStatus
from .exceptions import InvalidStatusTransitionError
from .order_returns import approve_return, reject_return
from .transitions import REFUSED_STATUSES, ensure_transition, get_locked_order

logger = logging.getLogger(__name__)


def _refuse(order: Order) -> None:
    """Give every unreturned item's stock back and zero the payment."""
    for item in order.items.filter(is_returned=False):
        restock_product(product_id=item.product_id, quantity=item.quantity)

    payment = order.payment
    payment.amount = Decimal('0.00')
    payment.save(update_fields=['amount', 'updated_at'])


def _apply_status(order: Order, status: str) -> Order:
    ensure_transition(order, status)

    if status in REFUSED_STATUSES:
        _refuse(order)

    previous = order.status
    order.status = status
    order.save(update_fields=['status', 'updated_at'])

    logger.info("Order %s: %s -> %s", order.id, previous, status)
    return order


@transaction.atomic
def update_order_status(*, order_id: UUID, status: str) -> Order:
    """
    Move an order along its lifecycle (admin).

    Rejecting an order restocks its items and zeroes the payment. Moving
    a RETURN_REQUESTED order to RETURNED or RETURN_REJECTED runs
    ``approve_return`` or ``reject_return``.

    Raises:
        OrderNotFoundError: If order doesn't exist
        InvalidStatusTransitionError: If the change is not allowed
    """
    if status == OrderStatus.RETURNED:
        return approve_return(order_id=order_id)
    if status == OrderStatus.RETURN_REJECTED:
        return reject_return(order_id=order_id)
    if status == OrderStatus.RETURN_REQUESTED:
        raise InvalidStatusTransitionError("Only the customer can request a return")
    if status == OrderStatus.CANCELLED:
        raise InvalidStatusTransitionError("Only the customer can cancel an order")

    order = get_locked_order(order_id)
    return _apply_status(order, status)


def accept_order(*, order_id: UUID) -> Order:
    """Accept a pending order."""
    return update_order_status(order_id=order_id, status=OrderStatus.ACCEPTED)


def reject_order(*, order_id: UUID) -> Order:
    """Reject a pending order, restocking its items."""
    return update_order_status(order_id=order_id, status=OrderStatus.REJECTED)


@transaction.atomic
def cancel_order(*, order_id: UUID, customer) -> Order:
    """
    Cancel the customer's own pending order.

    Raises:
        OrderNotFoundError: If order doesn't exist or isn't the customer's
        InvalidStatusTransitionError: If the order is no longer pending
    """
    order = get_locked_order(order_id, customer=customer)
    return _apply_status(order, OrderStatus.CANCELLED)
