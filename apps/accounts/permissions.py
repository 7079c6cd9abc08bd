from rest_framework.permissions import BasePermission, SAFE_METHODS
from .models import Role


class IsAdmin(BasePermission):
    def has_permission(self, request, view):
        return (
            request.user.is_authenticated and
            request.user.role == Role.ADMIN
        )


class IsAdminOrReadOnly(BasePermission):
    """
    Public catalog reads, admin-only writes.
    """
    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return (
            request.user.is_authenticated and
            request.user.role == Role.ADMIN
        )
