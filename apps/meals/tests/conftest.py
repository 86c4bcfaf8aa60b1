from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.subscriptions.models import Subscription, SubscriptionStatus


@pytest.fixture
def now():
    return timezone.now()


@pytest.fixture
def set_subscription():
    """Put a student's subscription in a given state, bypassing the purchase flow."""
    def _set(canteen_student, end_date, status=SubscriptionStatus.ACTIVE):
        subscription = Subscription.objects.get(canteen_student=canteen_student)
        subscription.duration = 10
        subscription.price = Decimal('5000.00')
        subscription.tariff_type = 'fortnightly'
        subscription.start_date = end_date - timedelta(days=10)
        subscription.end_date = end_date
        subscription.status = status
        subscription.save()
        return subscription
    return _set
