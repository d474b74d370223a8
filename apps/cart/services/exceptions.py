"""Domain-specific exceptions for cart services."""


class CartServiceError(Exception):
    """Base exception for cart services."""
    pass


class CartItemNotFoundError(CartServiceError):
    """Raised when the cart item does not exist or belongs to someone else."""
    pass


class ProductUnavailableError(CartServiceError):
    """Raised when the product does not exist or is no longer sold."""
    pass


class InvalidPlanError(CartServiceError):
    """Raised when the plan does not exist or belongs to another product."""
    pass


class InvalidQuantityError(CartServiceError):
    """Raised when a quantity is below one."""
    pass
