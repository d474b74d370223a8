"""
Custom permission classes for orders app.
"""
from rest_framework.permissions import BasePermission


class IsOrderOwnerOrStoreAdmin(BasePermission):
    """
    Permission to view an order.

    Allows if:
    - User placed the order
    - User is a store admin

    Usage:
        class OrderViewSet(viewsets.GenericViewSet):
            permission_classes = [IsAuthenticated, IsOrderOwnerOrStoreAdmin]
    """

    message = 'You do not have permission to view this order.'

    def has_object_permission(self, request, view, obj):
        return obj.customer_id == request.user.id or request.user.is_store_admin
