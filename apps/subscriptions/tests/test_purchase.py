import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.db import DatabaseError, IntegrityError, transaction

from apps.notifications.models import Notification, NotificationType
from apps.students.exceptions import StudentInactiveError, StudentNotFoundError
from apps.students.services import withdraw_canteen_students
from apps.subscriptions.exceptions import InvalidDurationError
from apps.subscriptions.models import Subscription, SubscriptionStatus
from apps.subscriptions.services import get_tariff, list_tariffs, purchase_subscription
from apps.subscriptions.services import purchase as purchase_module


class TestPricing:

    def test_known_durations(self, settings):
        assert [t.duration for t in list_tariffs()] == sorted(settings.CANTEEN_PRICING)

    def test_get_tariff(self):
        tariff = get_tariff(30)

        assert tariff.price == Decimal('14000.00')
        assert tariff.type == 'monthly'

    def test_unknown_duration(self):
        with pytest.raises(InvalidDurationError) as exc_info:
            get_tariff(7)

        assert exc_info.value.code == 'invalid_duration'


@pytest.mark.django_db
class TestPurchaseSubscription:

    def test_first_purchase_reuses_placeholder(self, canteen_student, now):
        placeholder = Subscription.objects.get(canteen_student=canteen_student)

        result = purchase_subscription(canteen_student_id=canteen_student.id, duration=10, now=now)

        assert result.subscription.id == placeholder.id
        assert result.created is False
        assert result.subscription.status == SubscriptionStatus.ACTIVE
        assert result.subscription.start_date == now
        assert result.subscription.end_date == now + timedelta(days=10)
        assert result.subscription.price == Decimal('5000.00')
        assert result.subscription.tariff_type == 'fortnightly'
        assert Subscription.objects.filter(canteen_student=canteen_student).count() == 1

    def test_purchase_emits_notification(self, canteen_student, now):
        result = purchase_subscription(canteen_student_id=canteen_student.id, duration=30, now=now)

        notification = result.notification
        assert notification.type == NotificationType.SUBSCRIPTION_PURCHASED
        assert notification.details == {
            'duration': 30,
            'price': '14000.00',
            'type': 'monthly',
            'end_date': (now + timedelta(days=30)).isoformat(),
        }

    def test_renewal_updates_active_row(self, canteen_student, activate_subscription, now):
        """Buying 30 days over an active 10-day subscription updates the same row."""
        existing = activate_subscription(canteen_student, now + timedelta(days=4), duration=10)

        result = purchase_subscription(canteen_student_id=canteen_student.id, duration=30, now=now)

        assert result.subscription.id == existing.id
        assert result.subscription.duration == 30
        assert result.subscription.end_date == now + timedelta(days=30)
        assert Subscription.objects.filter(canteen_student=canteen_student).count() == 1
        assert Notification.objects.filter(canteen_student=canteen_student).count() == 1

    def test_renewal_replaces_remaining_time(self, canteen_student, now):
        purchase_subscription(canteen_student_id=canteen_student.id, duration=30, now=now)
        later = now + timedelta(days=2)

        result = purchase_subscription(canteen_student_id=canteen_student.id, duration=5, now=later)

        assert result.subscription.end_date == later + timedelta(days=5)

    def test_lapsed_subscription_expired_before_purchase(self, canteen_student, activate_subscription, now):
        lapsed = activate_subscription(canteen_student, now - timedelta(days=2))

        result = purchase_subscription(canteen_student_id=canteen_student.id, duration=5, now=now)

        lapsed.refresh_from_db()
        assert lapsed.status == SubscriptionStatus.EXPIRED
        assert result.subscription.id != lapsed.id
        assert result.created is True
        assert Subscription.objects.filter(
            canteen_student=canteen_student, status=SubscriptionStatus.ACTIVE
        ).count() == 1
        types = sorted(
            Notification.objects.filter(canteen_student=canteen_student).values_list('type', flat=True)
        )
        assert types == [NotificationType.SUBSCRIPTION_EXPIRED, NotificationType.SUBSCRIPTION_PURCHASED]

    def test_invalid_duration_changes_nothing(self, canteen_student, now):
        with pytest.raises(InvalidDurationError):
            purchase_subscription(canteen_student_id=canteen_student.id, duration=7, now=now)

        placeholder = Subscription.objects.get(canteen_student=canteen_student)
        assert placeholder.is_placeholder
        assert not Notification.objects.exists()

    def test_unknown_student(self, db):
        with pytest.raises(StudentNotFoundError):
            purchase_subscription(canteen_student_id=uuid.uuid4(), duration=5)

    def test_withdrawn_student(self, canteen_student):
        withdraw_canteen_students(student_ids=[canteen_student.id])

        with pytest.raises(StudentInactiveError):
            purchase_subscription(canteen_student_id=canteen_student.id, duration=5)


def _failing_emit(**kwargs):
    raise DatabaseError('notifications table unavailable')


@pytest.mark.django_db
class TestPurchaseAtomicity:

    def test_renewal_rolled_back_when_notification_fails(self, canteen_student, activate_subscription, now, monkeypatch):
        existing = activate_subscription(canteen_student, now + timedelta(days=4), duration=10)
        monkeypatch.setattr(purchase_module, 'emit_notification', _failing_emit)

        with pytest.raises(DatabaseError):
            purchase_subscription(canteen_student_id=canteen_student.id, duration=30, now=now)

        existing.refresh_from_db()
        assert existing.duration == 10
        assert existing.end_date == now + timedelta(days=4)
        assert not Notification.objects.exists()

    def test_expiry_and_new_row_rolled_back_together(self, canteen_student, activate_subscription, now, monkeypatch):
        lapsed = activate_subscription(canteen_student, now - timedelta(days=2))
        monkeypatch.setattr(purchase_module, 'emit_notification', _failing_emit)

        with pytest.raises(DatabaseError):
            purchase_subscription(canteen_student_id=canteen_student.id, duration=5, now=now)

        lapsed.refresh_from_db()
        assert lapsed.status == SubscriptionStatus.ACTIVE
        assert Subscription.objects.filter(canteen_student=canteen_student).count() == 1
        assert not Notification.objects.exists()


@pytest.mark.django_db
class TestSingleActiveSubscription:

    def test_database_rejects_second_active_row(self, subscribed_student, now):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Subscription.objects.create(
                    canteen_student=subscribed_student,
                    duration=5,
                    status=SubscriptionStatus.ACTIVE,
                    start_date=now,
                    end_date=now + timedelta(days=5),
                )

    def test_expired_rows_accumulate(self, canteen_student, now):
        purchase_subscription(canteen_student_id=canteen_student.id, duration=5, now=now - timedelta(days=20))
        purchase_subscription(canteen_student_id=canteen_student.id, duration=5, now=now - timedelta(days=10))
        purchase_subscription(canteen_student_id=canteen_student.id, duration=5, now=now)

        statuses = list(
            Subscription.objects
            .filter(canteen_student=canteen_student)
            .values_list('status', flat=True)
        )
        assert statuses.count(SubscriptionStatus.ACTIVE) == 1
        assert statuses.count(SubscriptionStatus.EXPIRED) == 2
