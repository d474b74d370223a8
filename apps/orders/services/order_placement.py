"""Order placement service."""

import logging

from django.db import transaction
from django.db.models import F
from decimal import Decimal
from uuid import UUID
from typing import Optional, List, Dict, Any
from datetime import datetime

from apps.cart.models import CartItem
from apps.catalog.models import Product, ProductPlan
from ..models import Order, OrderType, Payment, ProductOrder
from .exceptions import (
    EmptyOrderError,
    InvalidOrderDetailsError,
    ProductUnavailableError,
    InvalidPlanError,
    InsufficientStockError,
)

logger = logging.getLogger(__name__)


def _check_fulfilment_details(customer, order_type: str, address: str, pickup_datetime):
    """Return the delivery address to store on the payment."""
    if order_type == OrderType.DELIVERY:
        address = (address or customer.address or '').strip()
        if not address:
            raise InvalidOrderDetailsError("Delivery orders require an address")
        return address

    if pickup_datetime is None:
        raise InvalidOrderDetailsError("Pickup orders require a pickup time")
    return address or ''


def _lock_products(product_ids) -> Dict[UUID, Product]:
    # Fixed lock order so concurrent checkouts cannot deadlock
    products = (
        Product.objects
        .select_for_update()
        .filter(id__in=set(product_ids), is_active=True)
        .order_by('id')
    )
    return {product.id: product for product in products}


@transaction.atomic
def place_order(
    *,
    customer,
    items: List[Dict[str, Any]],
    order_type: str,
    payment_method: str,
    address: str = '',
    pickup_datetime: Optional[datetime] = None
) -> Order:
    """
    Place an order and take its products out of stock.

    Creates the order, one line item per entry in ``items`` and the
    payment, then decrements stock. Everything happens in one transaction:
    if any product is short on stock nothing is written.

    Args:
        customer: Ordering user
        items: List of dicts with ``product_id``, ``quantity`` and an
            optional ``product_plan_id``
        order_type: OrderType value
        payment_method: PaymentMethod value
        address: Delivery address; falls back to the customer's address
        pickup_datetime: Required for pickup orders

    Returns:
        Created Order instance

    Raises:
        EmptyOrderError: If ``items`` is empty
        InvalidOrderDetailsError: If address or pickup time is missing
        ProductUnavailableError: If a product doesn't exist or is inactive
        InvalidPlanError: If a plan doesn't belong to its product
        InsufficientStockError: If stock can't cover a product's total quantity
    """
    if not items:
        raise EmptyOrderError("Cannot place an order without items")

    address = _check_fulfilment_details(customer, order_type, address, pickup_datetime)

    products = _lock_products(item['product_id'] for item in items)

    plan_ids = {item['product_plan_id'] for item in items if item.get('product_plan_id')}
    plans = {plan.id: plan for plan in ProductPlan.objects.filter(id__in=plan_ids)}

    lines = []
    requested = {}
    for item in items:
        product = products.get(item['product_id'])
        if product is None:
            raise ProductUnavailableError(f"Product {item['product_id']} is not available")

        plan = None
        plan_id = item.get('product_plan_id')
        if plan_id:
            plan = plans.get(plan_id)
            if plan is None or plan.product_id != product.id:
                raise InvalidPlanError(
                    f"Plan {plan_id} is not offered for product {product.id}"
                )

        quantity = item['quantity']
        if quantity < 1:
            raise InvalidOrderDetailsError("Quantity must be at least 1")

        requested[product.id] = requested.get(product.id, 0) + quantity
        lines.append((product, plan, quantity))

    for product_id, quantity in requested.items():
        product = products[product_id]
        if quantity > product.quantity:
            logger.warning(
                "Order by %s refused: %s requested %s, %s in stock",
                customer.id, product.slug, quantity, product.quantity
            )
            raise InsufficientStockError(product, quantity, product.quantity)

    order = Order.objects.create(
        customer=customer,
        order_type=order_type,
        pickup_datetime=pickup_datetime if order_type == OrderType.PICKUP else None,
    )

    total = Decimal('0.00')
    for product, plan, quantity in lines:
        unit_price = product.price + (plan.price if plan else Decimal('0.00'))
        amount = unit_price * quantity
        ProductOrder.objects.create(
            order=order,
            product=product,
            product_plan=plan,
            quantity=quantity,
            unit_price=unit_price,
            amount=amount,
        )
        total += amount

    for product_id, quantity in requested.items():
        Product.objects.filter(id=product_id).update(quantity=F('quantity') - quantity)

    Payment.objects.create(
        order=order,
        customer=customer,
        payment_method=payment_method,
        address=address,
        amount=total,
    )

    logger.info(
        "Order %s placed by %s: %d line(s), total %s",
        order.id, customer.id, len(lines), total
    )
    return order


@transaction.atomic
def place_order_from_cart(
    *,
    customer,
    order_type: str,
    payment_method: str,
    address: str = '',
    pickup_datetime: Optional[datetime] = None
) -> Order:
    """
    Place an order for everything in the customer's cart and empty it.

    The cart is left untouched if the order fails.

    Raises:
        EmptyOrderError: If the cart is empty
        (and everything ``place_order`` raises)
    """
    cart_items = list(
        CartItem.objects
        .select_for_update()
        .filter(user=customer)
        .order_by('added_at')
    )
    if not cart_items:
        raise EmptyOrderError("Cart is empty")

    order = place_order(
        customer=customer,
        items=[
            {
                'product_id': item.product_id,
                'product_plan_id': item.product_plan_id,
                'quantity': item.quantity,
            }
            for item in cart_items
        ],
        order_type=order_type,
        payment_method=payment_method,
        address=address,
        pickup_datetime=pickup_datetime,
    )

    CartItem.objects.filter(id__in=[item.id for item in cart_items]).delete()
    return order
