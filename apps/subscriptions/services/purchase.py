"""Subscription purchase service."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.notifications.models import Notification
from apps.notifications.services import emit_notification, subscription_purchased_draft
from apps.students.exceptions import StudentNotFoundError, StudentInactiveError
from apps.students.models import CanteenStudent
from apps.subscriptions.models import Subscription, SubscriptionStatus
from .pricing import get_tariff
from .state_machine import expire_if_lapsed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurchaseResult:
    subscription: Subscription
    notification: Notification
    created: bool


@transaction.atomic
def purchase_subscription(
    *,
    canteen_student_id: UUID,
    duration: int,
    now: Optional[datetime] = None
) -> PurchaseResult:
    """
    Buy a subscription of ``duration`` days for a canteen student.

    This operation:
    1. Resolves price and tariff type from the pricing table
    2. Locks the student row and the current active subscription
    3. Expires the active subscription first if it has already lapsed
    4. Reuses a row in this order: still-active subscription, never-purchased
       placeholder, otherwise a new row
    5. Activates it from now for ``duration`` days and records one
       subscription_purchased notification

    Buying while a subscription is running replaces the remaining time; it
    does not add to it.

    Args:
        canteen_student_id: UUID of the canteen student
        duration: Subscription length in days (must be a configured tariff)
        now: Reference time, defaults to timezone.now()

    Returns:
        PurchaseResult with the active subscription and its notification

    Raises:
        InvalidDurationError: If duration is not a configured tariff
        StudentNotFoundError: If the student doesn't exist
        StudentInactiveError: If the student was withdrawn from the canteen
    """
    tariff = get_tariff(duration)
    now = now or timezone.now()

    try:
        student = (
            CanteenStudent.objects
            .select_for_update()
            .get(id=canteen_student_id)
        )
    except CanteenStudent.DoesNotExist:
        raise StudentNotFoundError()

    if not student.is_active:
        raise StudentInactiveError()

    subscription = (
        Subscription.objects
        .select_for_update()
        .filter(canteen_student=student, status=SubscriptionStatus.ACTIVE)
        .first()
    )
    if subscription is not None and expire_if_lapsed(subscription, now, canteen_student=student):
        subscription = None

    if subscription is None:
        subscription = (
            Subscription.objects
            .select_for_update()
            .filter(canteen_student=student, end_date__isnull=True)
            .order_by('created_at')
            .first()
        )

    created = subscription is None
    if created:
        subscription = Subscription(canteen_student=student)

    subscription.duration = tariff.duration
    subscription.price = tariff.price
    subscription.tariff_type = tariff.type
    subscription.start_date = now
    subscription.end_date = now + timedelta(days=tariff.duration)
    subscription.status = SubscriptionStatus.ACTIVE
    subscription.save()

    notification = emit_notification(
        canteen_student=student,
        draft=subscription_purchased_draft(
            student_name=student.enrolled_student.name,
            duration=tariff.duration,
            price=tariff.price,
            tariff_type=tariff.type,
            end_date=subscription.end_date,
        ),
    )

    logger.info(
        "Subscription %s (%s days, %s) active for student %s until %s",
        subscription.id, tariff.duration, tariff.type, student.id,
        subscription.end_date.isoformat(),
    )
    return PurchaseResult(subscription=subscription, notification=notification, created=created)
