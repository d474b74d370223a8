"""Product plan CRUD operations service."""

from django.db import transaction
from django.db.models import QuerySet
from decimal import Decimal
from uuid import UUID
from typing import Optional

from ..models import Product, ProductPlan
from .exceptions import PlanNotFoundError, ProductNotFoundError


@transaction.atomic
def create_plan(
    *,
    product_id: UUID,
    name: str,
    price: Decimal,
    guarantee: int = 0,
    maintenance: int = 0
) -> ProductPlan:
    """
    Create a service plan for a product.

    Raises:
        ProductNotFoundError: If product doesn't exist
    """
    try:
        product = Product.objects.get(id=product_id, is_active=True)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product {product_id} not found")

    return ProductPlan.objects.create(
        product=product,
        name=name,
        price=price,
        guarantee=guarantee,
        maintenance=maintenance
    )


@transaction.atomic
def update_plan(
    *,
    plan_id: UUID,
    name: Optional[str] = None,
    price: Optional[Decimal] = None,
    guarantee: Optional[int] = None,
    maintenance: Optional[int] = None
) -> ProductPlan:
    """
    Update a plan. Only the given fields change.

    Raises:
        PlanNotFoundError: If plan doesn't exist
    """
    try:
        plan = ProductPlan.objects.select_for_update().get(id=plan_id)
    except ProductPlan.DoesNotExist:
        raise PlanNotFoundError(f"Plan {plan_id} not found")

    if name is not None:
        plan.name = name
    if price is not None:
        plan.price = price
    if guarantee is not None:
        plan.guarantee = guarantee
    if maintenance is not None:
        plan.maintenance = maintenance

    plan.save()
    return plan


@transaction.atomic
def delete_plan(*, plan_id: UUID) -> None:
    """
    Delete a plan. Order line items that used it keep their amounts.

    Raises:
        PlanNotFoundError: If plan doesn't exist
    """
    deleted, _ = ProductPlan.objects.filter(id=plan_id).delete()
    if not deleted:
        raise PlanNotFoundError(f"Plan {plan_id} not found")


def list_plans(*, product_id: Optional[UUID] = None) -> QuerySet[ProductPlan]:
    """Plans of active products, optionally for one product."""
    queryset = ProductPlan.objects.select_related('product').filter(product__is_active=True)
    if product_id:
        queryset = queryset.filter(product_id=product_id)
    return queryset
