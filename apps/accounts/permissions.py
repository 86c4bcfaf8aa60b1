from rest_framework import permissions

from .models import UserRole


class HasRole(permissions.BasePermission):
    """
    Permission: authenticated user must carry one of ``allowed_roles``.

    Superusers always pass.
    """

    allowed_roles = ()

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_superuser:
            return True
        return user.role in self.allowed_roles


class IsCanteenAdmin(HasRole):
    """Permission: canteen administrators only."""
    allowed_roles = (UserRole.ADMIN,)


class IsServingAgent(HasRole):
    """Permission: agents (or admins) operating a QR scanner."""
    allowed_roles = (UserRole.ADMIN, UserRole.AGENT)
