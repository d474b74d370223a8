"""Services for catalog business logic."""

from .exceptions import (
    CatalogServiceError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    ProductNotFoundError,
    DuplicateProductError,
    PlanNotFoundError,
    InvalidStockAdjustmentError,
)
from .category_management import (
    create_category,
    update_category,
    delete_category,
    list_categories,
)
from .product_management import (
    create_product,
    update_product,
    soft_delete_product,
    get_product_by_id,
    get_product_by_slug,
    restock_product,
)
from .product_search import (
    search_products,
    get_all_vendors,
)
from .product_deduplication import (
    find_potential_duplicates,
    EXACT_MATCH_THRESHOLD,
    HIGH_SIMILARITY_THRESHOLD,
    MEDIUM_SIMILARITY_THRESHOLD,
)
from .plan_management import (
    create_plan,
    update_plan,
    delete_plan,
    list_plans,
)

__all__ = [
    # Exceptions
    'CatalogServiceError',
    'CategoryNotFoundError',
    'DuplicateCategoryError',
    'ProductNotFoundError',
    'DuplicateProductError',
    'PlanNotFoundError',
    'InvalidStockAdjustmentError',
    # Categories
    'create_category',
    'update_category',
    'delete_category',
    'list_categories',
    # Products
    'create_product',
    'update_product',
    'soft_delete_product',
    'get_product_by_id',
    'get_product_by_slug',
    'restock_product',
    # Search
    'search_products',
    'get_all_vendors',
    # Deduplication
    'find_potential_duplicates',
    'EXACT_MATCH_THRESHOLD',
    'HIGH_SIMILARITY_THRESHOLD',
    'MEDIUM_SIMILARITY_THRESHOLD',
    # Plans
    'create_plan',
    'update_plan',
    'delete_plan',
    'list_plans',
]
