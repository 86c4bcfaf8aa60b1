from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.students.models import EnrolledStudent
from apps.students.services import register_canteen_student
from apps.subscriptions.models import Subscription, SubscriptionStatus


@pytest.fixture
def now():
    return timezone.now()


@pytest.fixture
def activate_subscription():
    """
    Turn a student's placeholder into an active subscription ending at
    ``end_date``, without going through the purchase flow.
    """
    def _activate(canteen_student, end_date, duration=10):
        subscription = Subscription.objects.get(canteen_student=canteen_student)
        subscription.duration = duration
        subscription.price = Decimal('5000.00')
        subscription.tariff_type = 'fortnightly'
        subscription.start_date = end_date - timedelta(days=duration)
        subscription.end_date = end_date
        subscription.status = SubscriptionStatus.ACTIVE
        subscription.save()
        return subscription
    return _activate


@pytest.fixture
def make_canteen_student(parent_user):
    """Register a fresh enrolled student for ``parent_user``."""
    counter = {'n': 100}

    def _make(name):
        counter['n'] += 1
        enrolled = EnrolledStudent.objects.create(
            name=name,
            student_class='CE2',
            matricule=f"MAT-2024-{counter['n']}",
        )
        student, _ = register_canteen_student(
            enrolled_student_id=enrolled.id,
            parent_email=parent_user.email,
            parent_name=parent_user.name,
        )
        return student
    return _make
