from django.db import models
import uuid


class NotificationType(models.TextChoices):
    SUBSCRIPTION_PURCHASED = 'subscription_purchased', 'Abonnement acheté'
    SUBSCRIPTION_EXPIRED = 'subscription_expired', 'Abonnement expiré'
    MEAL_SERVED = 'meal_served', 'Repas servi'


class Notification(models.Model):
    """
    Informational event for the parent of a canteen student.

    ``details`` depends on ``type``:
        subscription_purchased: duration, price, type, end_date
        subscription_expired: expired_at
        meal_served: date, status
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    canteen_student = models.ForeignKey(
        'students.CanteenStudent',
        on_delete=models.PROTECT,
        related_name='notifications'
    )
    message = models.TextField()
    type = models.CharField(max_length=30, choices=NotificationType.choices)
    details = models.JSONField(default=dict, blank=True)
    read = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        indexes = [
            models.Index(fields=['canteen_student', 'created_at'], name='notif_student_created_idx'),
            models.Index(fields=['canteen_student', 'read'], name='notif_student_read_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.get_type_display()} - {self.canteen_student_id}"
