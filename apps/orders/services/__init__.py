"""Services for order business logic."""

from .exceptions import (
    OrdersServiceError,
    OrderNotFoundError,
    OrderItemNotFoundError,
    EmptyOrderError,
    InvalidOrderDetailsError,
    ProductUnavailableError,
    InvalidPlanError,
    InsufficientStockError,
    InvalidStatusTransitionError,
    NothingToReturnError,
    ItemAlreadyReturnedError,
)
from .transitions import (
    ALLOWED_TRANSITIONS,
    RETURNABLE_STATUSES,
    REFUSED_STATUSES,
    can_transition,
)
from .order_placement import (
    place_order,
    place_order_from_cart,
)
from .order_returns import (
    request_return,
    approve_return,
    reject_return,
    return_item,
)
from .order_lifecycle import (
    update_order_status,
    accept_order,
    reject_order,
    cancel_order,
)
from .order_queries import (
    get_customer_orders,
    get_all_orders,
    get_order,
    get_order_summary,
)

__all__ = [
    # Exceptions
    'OrdersServiceError',
    'OrderNotFoundError',
    'OrderItemNotFoundError',
    'EmptyOrderError',
    'InvalidOrderDetailsError',
    'ProductUnavailableError',
    'InvalidPlanError',
    'InsufficientStockError',
    'InvalidStatusTransitionError',
    'NothingToReturnError',
    'ItemAlreadyReturnedError',
    # Lifecycle rules
    'ALLOWED_TRANSITIONS',
    'RETURNABLE_STATUSES',
    'REFUSED_STATUSES',
    'can_transition',
    # Placement
    'place_order',
    'place_order_from_cart',
    # Returns
    'request_return',
    'approve_return',
    'reject_return',
    'return_item',
    # Status management
    'update_order_status',
    'accept_order',
    'reject_order',
    'cancel_order',
    # Queries
    'get_customer_orders',
    'get_all_orders',
    'get_order',
    'get_order_summary',
]
