"""Notification drafts: what to record, decided before anything is written."""

from dataclasses import dataclass, field
from datetime import date, datetime

from apps.notifications.models import NotificationType


@dataclass(frozen=True)
class NotificationDraft:
    type: str
    message: str
    details: dict = field(default_factory=dict)


def _iso(value):
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def subscription_purchased_draft(*, student_name, duration, price, tariff_type, end_date):
    return NotificationDraft(
        type=NotificationType.SUBSCRIPTION_PURCHASED,
        message=(
            f"Un nouvel abonnement de {duration} jours a été acheté pour {student_name}."
        ),
        details={
            'duration': duration,
            'price': str(price),
            'type': tariff_type,
            'end_date': _iso(end_date),
        },
    )


def subscription_expired_draft(*, student_name, expired_at):
    return NotificationDraft(
        type=NotificationType.SUBSCRIPTION_EXPIRED,
        message=f"L'abonnement de {student_name} a expiré.",
        details={'expired_at': _iso(expired_at)},
    )


def meal_served_draft(*, student_name, served_at):
    return NotificationDraft(
        type=NotificationType.MEAL_SERVED,
        message=f"Votre enfant {student_name} a été servi à la cantine aujourd'hui.",
        details={'date': _iso(served_at), 'status': 'served'},
    )
