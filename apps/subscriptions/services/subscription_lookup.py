"""Read-side queries for subscriptions."""

from uuid import UUID

from django.db.models import QuerySet

from apps.students.exceptions import StudentNotFoundError
from apps.students.models import CanteenStudent
from apps.subscriptions.models import Subscription


def get_student_subscriptions(*, canteen_student_id: UUID) -> QuerySet:
    """
    Subscription history of a canteen student, newest first.

    Raises:
        StudentNotFoundError: If the canteen student doesn't exist
    """
    if not CanteenStudent.objects.filter(id=canteen_student_id).exists():
        raise StudentNotFoundError()

    return (
        Subscription.objects
        .filter(canteen_student_id=canteen_student_id)
        .order_by('-created_at')
    )
