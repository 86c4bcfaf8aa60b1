"""
Subscription state machine.

States:
    NoSubscription  placeholder created at registration (expired, no end date)
    Active          status=active and end_date >= now
    Expired         status=expired, or status=active with end_date < now
                    (lapsed, waiting to be reconciled)

``reconcile_expiry`` is the single expiry rule. It is pure so that the
scan handler, the purchase flow and the periodic sweeper all apply exactly
the same predicate; ``expire_if_lapsed`` persists its outcome.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from apps.notifications.models import Notification
from apps.notifications.services import (
    NotificationDraft,
    emit_notification,
    subscription_expired_draft,
)
from apps.subscriptions.models import Subscription, SubscriptionStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpiryOutcome:
    status: str
    notification: Optional[NotificationDraft] = None

    @property
    def lapsed(self) -> bool:
        return self.notification is not None


def reconcile_expiry(subscription: Subscription, now: datetime, *, student_name: str = '') -> ExpiryOutcome:
    """
    Decide the status a subscription should have at ``now``.

    No grace period: an active subscription whose end date is strictly
    before ``now`` becomes expired and yields one expiry notification draft.
    Anything else keeps its status and yields no draft, which makes a second
    application on the same record a no-op.
    """
    if subscription.is_lapsed_at(now):
        return ExpiryOutcome(
            status=SubscriptionStatus.EXPIRED,
            notification=subscription_expired_draft(
                student_name=student_name,
                expired_at=now,
            ),
        )
    return ExpiryOutcome(status=subscription.status)


def expire_if_lapsed(subscription: Subscription, now: datetime, *, canteen_student=None) -> Optional[Notification]:
    """
    Apply ``reconcile_expiry`` and persist the transition.

    Must run inside a transaction holding the subscription row lock. The
    status update is written before the notification, so no expiry
    notification can exist for a row still marked active.

    Returns:
        The expiry Notification, or None if the subscription had not lapsed
    """
    student = canteen_student or subscription.canteen_student
    outcome = reconcile_expiry(
        subscription,
        now,
        student_name=student.enrolled_student.name,
    )
    if not outcome.lapsed:
        return None

    subscription.status = outcome.status
    subscription.save(update_fields=['status', 'updated_at'])
    notification = emit_notification(canteen_student=student, draft=outcome.notification)

    logger.info(
        "Subscription %s of student %s expired (end date %s)",
        subscription.id, student.id, subscription.end_date.isoformat(),
    )
    return notification


def create_placeholder_subscription(canteen_student) -> Subscription:
    """Create the 'no subscription yet' record for a new registration."""
    return Subscription.objects.create(
        canteen_student=canteen_student,
        duration=0,
        status=SubscriptionStatus.EXPIRED,
        end_date=None,
    )
