from rest_framework import permissions

from apps.accounts.models import UserRole
from .models import CanteenStudent


class IsAdminOrStudentParent(permissions.BasePermission):
    """
    Permission: admins, or the parent of the canteen student named in the URL.

    Views must expose the student id as the ``canteen_student_id`` kwarg.
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_canteen_admin:
            return True
        if user.role != UserRole.PARENT:
            return False

        student_id = view.kwargs.get('canteen_student_id')
        if student_id is None:
            return False
        # Unknown ids pass so the view can answer 404
        parent_id = (
            CanteenStudent.objects
            .filter(id=student_id)
            .values_list('parent_id', flat=True)
            .first()
        )
        return parent_id is None or parent_id == user.id


class IsAdminOrSelfParent(permissions.BasePermission):
    """Permission: admins, or the parent whose id is the ``parent_id`` kwarg."""

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_canteen_admin:
            return True
        return user.role == UserRole.PARENT and str(view.kwargs.get('parent_id')) == str(user.id)
