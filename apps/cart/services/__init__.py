"""Services for cart business logic."""

from .exceptions import (
    CartServiceError,
    CartItemNotFoundError,
    ProductUnavailableError,
    InvalidPlanError,
    InvalidQuantityError,
)
from .cart_management import (
    get_cart,
    add_item,
    update_item_quantity,
    remove_item,
    clear_cart,
)

__all__ = [
    # Exceptions
    'CartServiceError',
    'CartItemNotFoundError',
    'ProductUnavailableError',
    'InvalidPlanError',
    'InvalidQuantityError',
    # Cart
    'get_cart',
    'add_item',
    'update_item_quantity',
    'remove_item',
    'clear_cart',
]
