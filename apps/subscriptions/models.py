from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
import uuid


class SubscriptionStatus(models.TextChoices):
    ACTIVE = 'active', 'Actif'
    EXPIRED = 'expired', 'Expiré'


class Subscription(models.Model):
    """
    Paid period of canteen access (abonnement).

    ``status`` is a cached value: a row can still say ``active`` after its
    ``end_date`` has passed until it is reconciled. Whether access is granted
    right now is always decided by :meth:`grants_access_at`.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    canteen_student = models.ForeignKey(
        'students.CanteenStudent',
        on_delete=models.PROTECT,
        related_name='subscriptions'
    )

    duration = models.PositiveIntegerField(default=0, help_text='Length in days')
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    tariff_type = models.CharField(max_length=30, blank=True)

    start_date = models.DateTimeField(null=True, blank=True)
    end_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(
        max_length=10,
        choices=SubscriptionStatus.choices,
        default=SubscriptionStatus.EXPIRED
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'subscriptions'
        constraints = [
            models.UniqueConstraint(
                fields=['canteen_student'],
                condition=Q(status='active'),
                name='one_active_subscription_per_student',
            ),
        ]
        indexes = [
            models.Index(fields=['status', 'end_date'], name='subscription_status_end_idx'),
            models.Index(fields=['canteen_student', 'status'], name='subscription_student_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.duration} jours - {self.get_status_display()} ({self.canteen_student_id})"

    @property
    def is_placeholder(self):
        """Registration-time record: never purchased."""
        return self.end_date is None

    def grants_access_at(self, now):
        """True if the subscription covers ``now`` (end date inclusive)."""
        return (
            self.status == SubscriptionStatus.ACTIVE
            and self.end_date is not None
            and self.end_date >= now
        )

    def is_lapsed_at(self, now):
        """True if still marked active although the end date has passed."""
        return (
            self.status == SubscriptionStatus.ACTIVE
            and self.end_date is not None
            and self.end_date < now
        )
