"""Order and item returns service."""

import logging

from django.db import transaction
from django.utils import timezone
from decimal import Decimal
from uuid import UUID

from apps.catalog.services import restock_product
from ..models import Order, OrderStatus, ProductOrder
from .exceptions import (
    InvalidStatusTransitionError,
    NothingToReturnError,
    OrderItemNotFoundError,
    ItemAlreadyReturnedError,
)
from .transitions import RETURNABLE_STATUSES, ensure_transition, get_locked_order

logger = logging.getLogger(__name__)


def _ensure_returnable(order: Order) -> None:
    if order.status not in RETURNABLE_STATUSES:
        logger.warning("Return refused for order %s in status %s", order.id, order.status)
        raise InvalidStatusTransitionError(
            f"Order in status '{order.status}' cannot be returned"
        )


def _ensure_return_requested(order: Order) -> None:
    if order.status != OrderStatus.RETURN_REQUESTED:
        raise InvalidStatusTransitionError(
            f"Order in status '{order.status}' has no pending return request"
        )


@transaction.atomic
def request_return(*, order_id: UUID, customer) -> Order:
    """
    Ask for the whole order to be returned.

    Marks every unreturned item ``return_requested``. Stock and payment
    stay untouched until an admin approves the return.

    Raises:
        OrderNotFoundError: If order doesn't exist or isn't the customer's
        InvalidStatusTransitionError: If the order isn't READY, DELIVERED or COMPLETED
        NothingToReturnError: If every item was already returned
    """
    order = get_locked_order(order_id, customer=customer)
    _ensure_returnable(order)

    pending = order.items.filter(is_returned=False)
    if not pending.exists():
        raise NothingToReturnError("Every item of this order was already returned")

    pending.update(return_requested=True)

    order.status = OrderStatus.RETURN_REQUESTED
    order.save(update_fields=['status', 'updated_at'])

    logger.info("Return requested for order %s", order.id)
    return order


@transaction.atomic
def approve_return(*, order_id: UUID) -> Order:
    """
    Approve a return request (admin).

    Items not returned yet go back into stock. All items end up returned
    with zero amount and quantity, and the payment drops to zero.

    Raises:
        OrderNotFoundError: If order doesn't exist
        InvalidStatusTransitionError: If no return was requested
    """
    order = get_locked_order(order_id)
    _ensure_return_requested(order)
    ensure_transition(order, OrderStatus.RETURNED)

    pending = list(order.items.select_for_update().filter(is_returned=False))
    for item in pending:
        restock_product(product_id=item.product_id, quantity=item.quantity)

    order.items.filter(id__in=[item.id for item in pending]).update(returned_at=timezone.now())
    order.items.update(amount=Decimal('0.00'), quantity=0, is_returned=True)

    payment = order.payment
    payment.amount = Decimal('0.00')
    payment.save(update_fields=['amount', 'updated_at'])

    order.status = OrderStatus.RETURNED
    order.save(update_fields=['status', 'updated_at'])

    logger.info("Return approved for order %s", order.id)
    return order


@transaction.atomic
def reject_return(*, order_id: UUID) -> Order:
    """
    Reject a return request (admin).

    Clears the return flags and resets the payment to what the
    unreturned items cost.

    Raises:
        OrderNotFoundError: If order doesn't exist
        InvalidStatusTransitionError: If no return was requested
    """
    order = get_locked_order(order_id)
    _ensure_return_requested(order)
    ensure_transition(order, OrderStatus.RETURN_REJECTED)

    order.items.filter(return_requested=True).update(return_requested=False)

    payment = order.payment
    payment.amount = order.unreturned_total()
    payment.save(update_fields=['amount', 'updated_at'])

    order.status = OrderStatus.RETURN_REJECTED
    order.save(update_fields=['status', 'updated_at'])

    logger.info("Return rejected for order %s", order.id)
    return order


@transaction.atomic
def return_item(*, order_id: UUID, item_id: UUID, customer) -> ProductOrder:
    """
    Return a single line item.

    Restocks the item and takes its amount off the payment. Returning the
    last unreturned item marks the whole order RETURNED.

    Raises:
        OrderNotFoundError: If order doesn't exist or isn't the customer's
        InvalidStatusTransitionError: If the order isn't READY, DELIVERED or COMPLETED
        OrderItemNotFoundError: If the item isn't part of the order
        ItemAlreadyReturnedError: If the item was already returned
    """
    order = get_locked_order(order_id, customer=customer)
    _ensure_returnable(order)

    try:
        item = order.items.select_for_update().get(id=item_id)
    except ProductOrder.DoesNotExist:
        raise OrderItemNotFoundError(f"Item {item_id} is not part of order {order_id}")

    if item.is_returned:
        raise ItemAlreadyReturnedError(f"Item {item.serial_no} was already returned")

    restock_product(product_id=item.product_id, quantity=item.quantity)

    item.is_returned = True
    item.returned_at = timezone.now()
    item.save(update_fields=['is_returned', 'returned_at'])

    payment = order.payment
    payment.amount = max(Decimal('0.00'), payment.amount - item.amount)
    payment.save(update_fields=['amount', 'updated_at'])

    logger.info("Item %s of order %s returned", item.serial_no, order.id)

    if not order.has_unreturned_items():
        order.status = OrderStatus.RETURNED
        order.save(update_fields=['status', 'updated_at'])
        logger.info("Order %s fully returned", order.id)

    return item
