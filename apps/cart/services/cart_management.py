"""Shopping cart operations service."""

import logging

from django.db import transaction
from decimal import Decimal
from uuid import UUID
from typing import Optional, Dict, Any

from apps.catalog.models import Product, ProductPlan
from ..models import CartItem
from .exceptions import (
    CartItemNotFoundError,
    ProductUnavailableError,
    InvalidPlanError,
    InvalidQuantityError,
)

logger = logging.getLogger(__name__)


def _cart_queryset(user):
    return (
        CartItem.objects
        .filter(user=user)
        .select_related('product', 'product_plan')
    )


def _get_own_item(user, item_id: UUID, lock: bool = False) -> CartItem:
    queryset = CartItem.objects.filter(user=user)
    if lock:
        queryset = queryset.select_for_update()
    try:
        return queryset.select_related('product', 'product_plan').get(id=item_id)
    except CartItem.DoesNotExist:
        raise CartItemNotFoundError(f"Cart item {item_id} not found")


def _check_quantity(quantity: int) -> None:
    if quantity < 1:
        raise InvalidQuantityError("Quantity must be at least 1")


def get_cart(*, user) -> Dict[str, Any]:
    """
    Get the user's cart.

    Returns:
        dict with ``items`` (list of CartItem), ``total`` (Decimal)
        and ``item_count`` (sum of quantities)
    """
    items = list(_cart_queryset(user))
    total = sum((item.line_total for item in items), Decimal('0.00'))

    return {
        'items': items,
        'total': total,
        'item_count': sum(item.quantity for item in items),
    }


@transaction.atomic
def add_item(
    *,
    user,
    product_id: UUID,
    quantity: int = 1,
    product_plan_id: Optional[UUID] = None
) -> CartItem:
    """
    Add a product to the cart.

    An existing entry with the same product and plan is merged by adding
    the quantities. Stock is not reserved here; it is checked when the
    order is placed.

    Raises:
        InvalidQuantityError: If quantity < 1
        ProductUnavailableError: If product doesn't exist or is inactive
        InvalidPlanError: If the plan doesn't belong to the product
    """
    _check_quantity(quantity)

    try:
        product = Product.objects.get(id=product_id, is_active=True)
    except Product.DoesNotExist:
        raise ProductUnavailableError(f"Product {product_id} is not available")

    plan = None
    if product_plan_id is not None:
        try:
            plan = ProductPlan.objects.get(id=product_plan_id, product=product)
        except ProductPlan.DoesNotExist:
            raise InvalidPlanError(
                f"Plan {product_plan_id} is not offered for product {product_id}"
            )

    item = (
        CartItem.objects
        .select_for_update()
        .filter(user=user, product=product, product_plan=plan)
        .first()
    )

    if item:
        item.quantity += quantity
        item.save(update_fields=['quantity'])
    else:
        item = CartItem.objects.create(
            user=user,
            product=product,
            product_plan=plan,
            quantity=quantity
        )

    logger.debug("Cart of %s: %s x %s", user.id, item.quantity, product.slug)
    return item


@transaction.atomic
def update_item_quantity(*, user, item_id: UUID, quantity: int) -> CartItem:
    """
    Set the quantity of a cart item.

    Raises:
        InvalidQuantityError: If quantity < 1
        CartItemNotFoundError: If item doesn't exist in the user's cart
    """
    _check_quantity(quantity)

    item = _get_own_item(user, item_id, lock=True)
    item.quantity = quantity
    item.save(update_fields=['quantity'])
    return item


@transaction.atomic
def remove_item(*, user, item_id: UUID) -> None:
    """
    Remove an item from the cart.

    Raises:
        CartItemNotFoundError: If item doesn't exist in the user's cart
    """
    deleted, _ = CartItem.objects.filter(user=user, id=item_id).delete()
    if not deleted:
        raise CartItemNotFoundError(f"Cart item {item_id} not found")


def clear_cart(*, user) -> int:
    """Empty the cart. Returns the number of removed items."""
    deleted, _ = CartItem.objects.filter(user=user).delete()
    return deleted
