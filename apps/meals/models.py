from django.db import models
import uuid


class MealRecord(models.Model):
    """
    One meal served to a canteen student (repas).

    Immutable audit record. ``served_on`` is the canteen's calendar day
    (``TIME_ZONE``) and is unique per student.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    canteen_student = models.ForeignKey(
        'students.CanteenStudent',
        on_delete=models.PROTECT,
        related_name='meals'
    )
    served_at = models.DateTimeField()
    served_on = models.DateField()
    served = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'meal_records'
        constraints = [
            models.UniqueConstraint(
                fields=['canteen_student', 'served_on'],
                name='one_meal_per_student_per_day',
            ),
        ]
        indexes = [
            models.Index(fields=['served_on'], name='meal_served_on_idx'),
        ]
        ordering = ['served_on']

    def __str__(self):
        return f"{self.canteen_student_id} - {self.served_on}"
