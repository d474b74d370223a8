"""Domain-specific exceptions for catalog services."""


class CatalogServiceError(Exception):
    """Base exception for catalog services."""
    pass


class CategoryNotFoundError(CatalogServiceError):
    """Raised when category does not exist."""
    pass


class DuplicateCategoryError(CatalogServiceError):
    """Raised when a category with the same name already exists."""
    pass


class ProductNotFoundError(CatalogServiceError):
    """Raised when product does not exist or is inactive."""
    pass


class DuplicateProductError(CatalogServiceError):
    """Raised when attempting to create a duplicate product."""
    pass


class PlanNotFoundError(CatalogServiceError):
    """Raised when product plan does not exist."""
    pass


class InvalidStockAdjustmentError(CatalogServiceError):
    """Raised when a stock change would be non-positive or drive stock negative."""
    pass
