"""Domain exceptions for notifications app."""

from apps.students.exceptions import NotFoundError


class NotificationNotFoundError(NotFoundError):
    """Notification does not exist or belongs to another student."""
    default_code = 'notification_not_found'
    default_message = 'Notification introuvable.'
