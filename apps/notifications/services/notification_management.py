"""Notification recording and read-state management."""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.notifications.models import Notification
from apps.notifications.exceptions import NotificationNotFoundError
from .drafts import NotificationDraft

logger = logging.getLogger(__name__)


def emit_notification(*, canteen_student, draft: NotificationDraft) -> Notification:
    """
    Persist a notification draft for a canteen student.

    Runs inside the caller's transaction so the notification commits or
    rolls back together with the state change it reports.
    """
    notification = Notification.objects.create(
        canteen_student=canteen_student,
        message=draft.message,
        type=draft.type,
        details=draft.details,
    )
    logger.debug(
        "Notification %s (%s) recorded for student %s",
        notification.id, draft.type, canteen_student.id,
    )
    return notification


def list_student_notifications(*, canteen_student_id: UUID) -> QuerySet:
    """Notifications of one student, newest first."""
    return (
        Notification.objects
        .filter(canteen_student_id=canteen_student_id)
        .select_related('canteen_student__enrolled_student')
        .order_by('-created_at')
    )


def mark_all_notifications_read(*, canteen_student_id: UUID) -> int:
    """Mark every unread notification of a student as read. Returns the count."""
    return (
        Notification.objects
        .filter(canteen_student_id=canteen_student_id, read=False)
        .update(read=True)
    )


@transaction.atomic
def mark_notification_read(*, canteen_student_id: UUID, notification_id: UUID) -> Notification:
    """
    Mark a single notification as read.

    Raises:
        NotificationNotFoundError: If the notification doesn't exist or
            belongs to another student
    """
    try:
        notification = (
            Notification.objects
            .select_for_update()
            .get(id=notification_id, canteen_student_id=canteen_student_id)
        )
    except Notification.DoesNotExist:
        raise NotificationNotFoundError()

    if not notification.read:
        notification.read = True
        notification.save(update_fields=['read'])

    return notification
