from django.conf import settings
from django.db import models
from django.db.models import Q
import uuid


class Gender(models.TextChoices):
    MALE = 'M', 'Masculin'
    FEMALE = 'F', 'Féminin'


class EnrolledStudent(models.Model):
    """School enrollment record, independent of canteen participation."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=150)
    student_class = models.CharField(max_length=50, blank=True)
    gender = models.CharField(max_length=1, choices=Gender.choices, blank=True)
    matricule = models.CharField(max_length=50, unique=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'enrolled_students'
        indexes = [
            models.Index(fields=['name'], name='enrolled_name_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.matricule})"


class CanteenStudent(models.Model):
    """
    A student's canteen registration.

    ``matricule_hash`` is the opaque credential printed on the QR code.
    Withdrawal only clears ``is_active`` so meal and notification history
    stays queryable.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    enrolled_student = models.ForeignKey(
        EnrolledStudent,
        on_delete=models.PROTECT,
        related_name='canteen_registrations'
    )
    parent = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='children'
    )
    matricule_hash = models.CharField(max_length=128, unique=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'canteen_students'
        constraints = [
            models.UniqueConstraint(
                fields=['enrolled_student'],
                condition=Q(is_active=True),
                name='one_active_registration_per_student',
            ),
        ]
        indexes = [
            models.Index(fields=['parent', 'is_active'], name='canteen_parent_active_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        state = "active" if self.is_active else "withdrawn"
        return f"{self.enrolled_student.name} ({state})"

    @property
    def display_name(self):
        return self.enrolled_student.name
