"""Read-side queries for enrolled and canteen students."""

from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db.models import Q, QuerySet

from apps.accounts.models import UserRole
from apps.students.models import CanteenStudent, EnrolledStudent
from apps.students.exceptions import (
    EnrolledStudentNotFoundError,
    ParentNotFoundError,
    StudentNotFoundError,
)

User = get_user_model()


def get_canteen_student(*, canteen_student_id: UUID) -> CanteenStudent:
    """
    Retrieve a canteen student with enrollment and parent data.

    Raises:
        StudentNotFoundError: If the canteen student doesn't exist
    """
    try:
        return (
            CanteenStudent.objects
            .select_related('enrolled_student', 'parent')
            .get(id=canteen_student_id)
        )
    except CanteenStudent.DoesNotExist:
        raise StudentNotFoundError()


def list_canteen_students(*, is_active: Optional[bool] = True, search: str = '') -> QuerySet:
    """Canteen registrations, optionally filtered by state and student name/matricule."""
    queryset = (
        CanteenStudent.objects
        .select_related('enrolled_student', 'parent')
        .prefetch_related('subscriptions')
    )
    if is_active is not None:
        queryset = queryset.filter(is_active=is_active)
    if search:
        queryset = queryset.filter(
            Q(enrolled_student__name__icontains=search) |
            Q(enrolled_student__matricule__icontains=search)
        )
    return queryset.order_by('enrolled_student__name')


def get_students_for_parent(*, parent_id: UUID) -> QuerySet:
    """
    Canteen registrations linked to a parent account.

    Raises:
        ParentNotFoundError: If no parent account has this id
    """
    if not User.objects.filter(id=parent_id, role=UserRole.PARENT).exists():
        raise ParentNotFoundError()

    return (
        CanteenStudent.objects
        .filter(parent_id=parent_id)
        .select_related('enrolled_student', 'parent')
        .prefetch_related('subscriptions')
        .order_by('enrolled_student__name')
    )


def search_enrolled_students(*, search: str = '') -> QuerySet:
    """Enrolled students matching name or matricule."""
    queryset = EnrolledStudent.objects.all()
    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) |
            Q(matricule__icontains=search)
        )
    return queryset.order_by('name')


def get_enrolled_student(*, enrolled_student_id: UUID) -> EnrolledStudent:
    """
    Raises:
        EnrolledStudentNotFoundError: If the enrolled student doesn't exist
    """
    try:
        return EnrolledStudent.objects.get(id=enrolled_student_id)
    except EnrolledStudent.DoesNotExist:
        raise EnrolledStudentNotFoundError()
