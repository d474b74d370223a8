"""
Store-wide permission classes.

Catalog writes and order administration are limited to store admins
(users with the admin role, or Django staff).
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsStoreAdmin(BasePermission):
    """
    Permission: user must be an authenticated store admin.

    Usage:
        def get_permissions(self):
            if self.action == 'approve_return':
                return [IsAuthenticated(), IsStoreAdmin()]
            return super().get_permissions()
    """

    message = 'Only store administrators can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_store_admin)


class IsStoreAdminOrReadOnly(IsStoreAdmin):
    """Anyone can read; only store admins can write."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return super().has_permission(request, view)
