"""Notifications services - side-effect records for parents."""

from .drafts import (
    NotificationDraft,
    subscription_purchased_draft,
    subscription_expired_draft,
    meal_served_draft,
)
from .notification_management import (
    emit_notification,
    list_student_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)

__all__ = [
    'NotificationDraft',
    'subscription_purchased_draft',
    'subscription_expired_draft',
    'meal_served_draft',
    'emit_notification',
    'list_student_notifications',
    'mark_all_notifications_read',
    'mark_notification_read',
]
