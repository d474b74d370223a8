"""Category CRUD operations service."""

from django.db import transaction
from django.db.models import Count, Q, QuerySet
from uuid import UUID

from ..models import Category
from .exceptions import CategoryNotFoundError, DuplicateCategoryError


def _check_unique_name(name: str, exclude_id: UUID = None) -> None:
    queryset = Category.objects.filter(name__iexact=name.strip())
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateCategoryError(f"Category '{name}' already exists")


@transaction.atomic
def create_category(*, name: str) -> Category:
    """
    Create a new category.

    Raises:
        DuplicateCategoryError: If a category with this name exists (case-insensitive)
    """
    _check_unique_name(name)
    return Category.objects.create(name=name.strip())


@transaction.atomic
def update_category(*, category_id: UUID, name: str) -> Category:
    """
    Rename a category.

    Raises:
        CategoryNotFoundError: If category doesn't exist
        DuplicateCategoryError: If the new name is taken
    """
    try:
        category = Category.objects.select_for_update().get(id=category_id)
    except Category.DoesNotExist:
        raise CategoryNotFoundError(f"Category {category_id} not found")

    _check_unique_name(name, exclude_id=category.id)

    category.name = name.strip()
    category.save(update_fields=['name'])
    return category


@transaction.atomic
def delete_category(*, category_id: UUID) -> None:
    """
    Delete a category. Products keep existing, only the link is removed.

    Raises:
        CategoryNotFoundError: If category doesn't exist
    """
    deleted, _ = Category.objects.filter(id=category_id).delete()
    if not deleted:
        raise CategoryNotFoundError(f"Category {category_id} not found")


def list_categories() -> QuerySet[Category]:
    """All categories with the number of active products in each."""
    return Category.objects.annotate(
        product_count=Count('products', filter=Q(products__is_active=True))
    ).order_by('name')
