"""Product search and filtering service."""

from django.db.models import Q, QuerySet
from decimal import Decimal
from typing import Optional

from ..models import Product


def search_products(
    *,
    search: Optional[str] = None,
    category: Optional[str] = None,
    vendor: Optional[str] = None,
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
    in_stock: Optional[bool] = None,
    only_active: bool = True
) -> QuerySet[Product]:
    """
    Search and filter products.

    Args:
        search: Search term for name, vendor, description
        category: Category id
        vendor: Filter by vendor name (substring)
        min_price: Minimum unit price
        max_price: Maximum unit price
        in_stock: True for products with stock, False for sold out
        only_active: Only return active products

    Returns:
        Filtered QuerySet of Product
    """
    queryset = Product.objects.prefetch_related('plans', 'categories')

    if only_active:
        queryset = queryset.filter(is_active=True)

    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) |
            Q(vendor__icontains=search) |
            Q(description__icontains=search)
        )

    if category:
        queryset = queryset.filter(categories__id=category)

    if vendor:
        queryset = queryset.filter(vendor__icontains=vendor)

    if min_price is not None:
        queryset = queryset.filter(price__gte=min_price)

    if max_price is not None:
        queryset = queryset.filter(price__lte=max_price)

    if in_stock is True:
        queryset = queryset.filter(quantity__gt=0)
    elif in_stock is False:
        queryset = queryset.filter(quantity=0)

    return queryset.distinct()


def get_all_vendors(*, only_active: bool = True) -> list[str]:
    """Sorted list of distinct vendor names."""
    queryset = Product.objects.all()

    if only_active:
        queryset = queryset.filter(is_active=True)

    vendors = (
        queryset
        .values_list('vendor', flat=True)
        .distinct()
        .order_by('vendor')
    )

    return list(vendors)
