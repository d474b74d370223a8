"""Product CRUD operations service."""

import logging

from django.db import transaction
from django.db.models import F
from decimal import Decimal
from uuid import UUID
from typing import Optional, Dict, Any, List

from ..models import Product, Category
from .exceptions import (
    ProductNotFoundError,
    DuplicateProductError,
    CategoryNotFoundError,
    InvalidStockAdjustmentError,
)

logger = logging.getLogger(__name__)


def _resolve_categories(category_ids: List[UUID]) -> List[Category]:
    categories = list(Category.objects.filter(id__in=category_ids))
    if len(categories) != len(set(category_ids)):
        found = {c.id for c in categories}
        missing = [str(cid) for cid in category_ids if cid not in found]
        raise CategoryNotFoundError(f"Categories not found: {', '.join(missing)}")
    return categories


@transaction.atomic
def create_product(
    *,
    name: str,
    vendor: str,
    price: Decimal,
    quantity: int = 0,
    description: str = '',
    image: str = '',
    serial_no: str = '',
    category_ids: Optional[List[UUID]] = None,
    check_duplicates: bool = True
) -> Product:
    """
    Create a new product.

    Args:
        name: Product name
        vendor: Manufacturer/brand
        price: Unit price
        quantity: Initial stock
        description: Detailed description
        image: Image URL
        serial_no: Manufacturer serial/model number
        category_ids: Categories to attach
        check_duplicates: If True, rejects a product whose normalized
            name and vendor match an active product

    Returns:
        Created Product instance

    Raises:
        DuplicateProductError: If product already exists
        CategoryNotFoundError: If any category id is unknown
    """
    if check_duplicates:
        existing = Product.objects.filter(
            name_normalized=Product._normalize_string(name),
            vendor_normalized=Product._normalize_string(vendor),
            is_active=True
        ).first()

        if existing:
            raise DuplicateProductError(
                f"Product '{name}' from '{vendor}' already exists"
            )

    categories = _resolve_categories(category_ids) if category_ids else []

    product = Product.objects.create(
        name=name,
        vendor=vendor,
        price=price,
        quantity=quantity,
        description=description,
        image=image,
        serial_no=serial_no,
    )
    if categories:
        product.categories.set(categories)

    logger.info("Created product %s (%s)", product.id, product.slug)
    return product


@transaction.atomic
def update_product(
    *,
    product_id: UUID,
    data: Dict[str, Any]
) -> Product:
    """
    Update an existing product.

    Renaming a product regenerates its slug. ``category_ids`` in ``data``
    replaces the category set.

    Raises:
        ProductNotFoundError: If product doesn't exist
        CategoryNotFoundError: If any category id is unknown
    """
    try:
        product = (
            Product.objects
            .select_for_update()
            .get(id=product_id, is_active=True)
        )
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product {product_id} not found")

    allowed_fields = [
        'name', 'vendor', 'price', 'quantity', 'description',
        'image', 'serial_no',
    ]

    if 'name' in data and data['name'] != product.name:
        product.slug = ''

    for field, value in data.items():
        if field in allowed_fields:
            setattr(product, field, value)

    product.save()

    if 'category_ids' in data:
        product.categories.set(_resolve_categories(data['category_ids']))

    return product


@transaction.atomic
def soft_delete_product(*, product_id: UUID) -> None:
    """
    Soft delete a product (set is_active=False).

    Existing orders keep referencing it.

    Raises:
        ProductNotFoundError: If product doesn't exist
    """
    try:
        product = (
            Product.objects
            .select_for_update()
            .get(id=product_id)
        )
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product {product_id} not found")

    product.is_active = False
    product.save(update_fields=['is_active', 'updated_at'])


def get_product_by_id(*, product_id: UUID, include_inactive: bool = False) -> Product:
    """
    Get product by ID.

    Raises:
        ProductNotFoundError: If product doesn't exist
    """
    queryset = Product.objects.prefetch_related('plans', 'categories')

    if not include_inactive:
        queryset = queryset.filter(is_active=True)

    try:
        return queryset.get(id=product_id)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product {product_id} not found")


def get_product_by_slug(*, slug: str) -> Product:
    """
    Get an active product by its slug.

    Raises:
        ProductNotFoundError: If no active product has this slug
    """
    try:
        return (
            Product.objects
            .prefetch_related('plans', 'categories')
            .get(slug=slug, is_active=True)
        )
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product '{slug}' not found")


def restock_product(*, product_id: UUID, quantity: int) -> None:
    """
    Put units back into stock.

    Must be called inside the caller's transaction; uses an F() expression
    so concurrent restocks add up.

    Raises:
        InvalidStockAdjustmentError: If quantity is negative
    """
    if quantity < 0:
        raise InvalidStockAdjustmentError(f"Cannot restock a negative quantity ({quantity})")
    if quantity == 0:
        return

    Product.objects.filter(id=product_id).update(quantity=F('quantity') + quantity)
