"""
Admission control for QR scans.

A scan presents the opaque credential printed on a student's QR code and
asks whether a meal may be served now. The whole decision runs in one
transaction holding the student's row lock, so concurrent scans of the same
student and the expiration sweeper are serialized. Each call ends in
exactly one of:

* no write (unknown or inactive student, no subscription, already served)
* subscription expiry + expiry notification (lapsed subscription, denied)
* meal record + meal notification (granted)

Denials are returned, not raised, so the expiry write of a lapsed
subscription commits together with the denial.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.meals.exceptions import AlreadyServedTodayError
from apps.meals.models import MealRecord
from apps.notifications.models import Notification
from apps.notifications.services import emit_notification, meal_served_draft
from apps.students.exceptions import (
    CanteenServiceError,
    StudentInactiveError,
    StudentNotFoundError,
)
from apps.students.models import CanteenStudent
from apps.subscriptions.exceptions import NoActiveSubscriptionError, SubscriptionExpiredError
from apps.subscriptions.models import Subscription, SubscriptionStatus
from apps.subscriptions.services import expire_if_lapsed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdmissionDecision:
    """
    Outcome of a scan.

    ``error`` is set on denial and tells the serving agent why (its
    ``code`` and ``message``); ``notification`` is the expiry notification
    for a lapsed subscription, or the meal notification on grant.
    """

    granted: bool
    error: Optional[CanteenServiceError] = None
    meal_record: Optional[MealRecord] = None
    notification: Optional[Notification] = None
    canteen_student: Optional[CanteenStudent] = None

    @property
    def reason(self) -> Optional[str]:
        return self.error.code if self.error else None

    @property
    def message(self) -> str:
        if self.error:
            return self.error.message
        return "L'élève a été servi avec succès."


def canteen_day(moment: datetime) -> date:
    """Calendar day of ``moment`` in the canteen's time zone (settings.TIME_ZONE)."""
    return timezone.localdate(moment)


def _deny(error, **kwargs) -> AdmissionDecision:
    return AdmissionDecision(granted=False, error=error, **kwargs)


@transaction.atomic
def admit(*, credential_token: str, now: Optional[datetime] = None) -> AdmissionDecision:
    """
    Decide whether the student behind ``credential_token`` may eat now.

    Checks, in order: student exists, student is active, an active
    subscription exists, it has not lapsed (lapsed ones are expired here),
    no meal was served today. On success records the meal and a
    meal_served notification.

    Args:
        credential_token: Hashed matricule read from the QR code
        now: Reference time, defaults to timezone.now()

    Returns:
        AdmissionDecision
    """
    now = now or timezone.now()

    student = (
        CanteenStudent.objects
        .select_for_update()
        .filter(matricule_hash=credential_token)
        .first()
    )
    if student is None:
        logger.info("Scan denied: unknown credential")
        return _deny(StudentNotFoundError())

    if not student.is_active:
        logger.info("Scan denied for student %s: withdrawn", student.id)
        return _deny(StudentInactiveError(), canteen_student=student)

    subscription = (
        Subscription.objects
        .select_for_update()
        .filter(canteen_student=student, status=SubscriptionStatus.ACTIVE)
        .first()
    )
    if subscription is None:
        logger.info("Scan denied for student %s: no active subscription", student.id)
        return _deny(NoActiveSubscriptionError(), canteen_student=student)

    expiry_notification = expire_if_lapsed(subscription, now, canteen_student=student)
    if expiry_notification is not None:
        logger.info("Scan denied for student %s: subscription expired", student.id)
        return _deny(
            SubscriptionExpiredError(),
            notification=expiry_notification,
            canteen_student=student,
        )

    today = canteen_day(now)
    if MealRecord.objects.filter(canteen_student=student, served_on=today).exists():
        logger.info("Scan denied for student %s: already served on %s", student.id, today)
        return _deny(AlreadyServedTodayError(), canteen_student=student)

    try:
        with transaction.atomic():
            meal = MealRecord.objects.create(
                canteen_student=student,
                served_at=now,
                served_on=today,
                served=True,
            )
    except IntegrityError:
        # Unique (student, day) constraint caught a concurrent scan
        logger.info("Scan denied for student %s: concurrent scan already served", student.id)
        return _deny(AlreadyServedTodayError(), canteen_student=student)

    notification = emit_notification(
        canteen_student=student,
        draft=meal_served_draft(
            student_name=student.enrolled_student.name,
            served_at=now,
        ),
    )

    logger.info("Meal %s served to student %s", meal.id, student.id)
    return AdmissionDecision(
        granted=True,
        meal_record=meal,
        notification=notification,
        canteen_student=student,
    )
