"""Domain-specific exceptions for order services."""


class OrdersServiceError(Exception):
    """Base exception for order services."""
    pass


class OrderNotFoundError(OrdersServiceError):
    """Raised when the order does not exist or belongs to another customer."""
    pass


class OrderItemNotFoundError(OrdersServiceError):
    """Raised when the line item is not part of the order."""
    pass


class EmptyOrderError(OrdersServiceError):
    """Raised when an order is placed without any items."""
    pass


class InvalidOrderDetailsError(OrdersServiceError):
    """Raised when delivery address or pickup time is missing."""
    pass


class ProductUnavailableError(OrdersServiceError):
    """Raised when an ordered product does not exist or is inactive."""
    pass


class InvalidPlanError(OrdersServiceError):
    """Raised when an ordered plan does not belong to its product."""
    pass


class InsufficientStockError(OrdersServiceError):
    """Raised when stock cannot cover the ordered quantity."""

    def __init__(self, product, requested, available):
        self.product = product
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for '{product.name}': "
            f"requested {requested}, available {available}"
        )


class InvalidStatusTransitionError(OrdersServiceError):
    """Raised when a status change is not allowed from the current status."""
    pass


class NothingToReturnError(OrdersServiceError):
    """Raised when every item of the order has already been returned."""
    pass


class ItemAlreadyReturnedError(OrdersServiceError):
    """Raised when returning an item that was already returned."""
    pass
