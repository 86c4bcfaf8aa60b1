from datetime import date, datetime, time

import pytest
from django.utils import timezone

from apps.meals.models import MealRecord
from apps.students.models import CanteenStudent, EnrolledStudent
from apps.students.services import register_canteen_student, withdraw_canteen_students
from apps.subscriptions.services import purchase_subscription


def at(year, month, day, hour=12):
    return timezone.make_aware(datetime(year, month, day, hour))


@pytest.fixture
def dashboard_now():
    return at(2025, 3, 15)


@pytest.fixture
def backdate():
    """Set a registration's ``created_at``."""
    def _backdate(canteen_student, moment):
        CanteenStudent.objects.filter(id=canteen_student.id).update(created_at=moment)
    return _backdate


@pytest.fixture
def serve():
    def _serve(canteen_student, day, served=True):
        return MealRecord.objects.create(
            canteen_student=canteen_student,
            served_at=timezone.make_aware(datetime.combine(day, time(12))),
            served_on=day,
            served=served,
        )
    return _serve


@pytest.fixture
def canteen_activity(canteen_student, other_enrolled_student, parent_user, backdate, serve):
    """
    Two registered students and a withdrawn one, seen from 15 March 2025.

    - Fatou: registered in February, 30 days bought on 23 February (running)
    - Ibrahima: registered in March, 10 days bought on 1 March (lapsed on 11 March)
    - Khady: registered and paid in March, then withdrawn
    """
    fatou = canteen_student
    ibrahima, _ = register_canteen_student(
        enrolled_student_id=other_enrolled_student.id,
        parent_email=parent_user.email,
        parent_name=parent_user.name,
    )
    khady_enrollment = EnrolledStudent.objects.create(name='Khady Sow', matricule='MAT-2024-003')
    khady, _ = register_canteen_student(
        enrolled_student_id=khady_enrollment.id,
        parent_email=parent_user.email,
        parent_name=parent_user.name,
    )

    backdate(fatou, at(2025, 2, 10))
    backdate(ibrahima, at(2025, 3, 5))
    backdate(khady, at(2025, 3, 3))

    purchase_subscription(canteen_student_id=fatou.id, duration=30, now=at(2025, 2, 23))
    purchase_subscription(canteen_student_id=ibrahima.id, duration=10, now=at(2025, 3, 1))
    purchase_subscription(canteen_student_id=khady.id, duration=90, now=at(2025, 3, 2))
    withdraw_canteen_students(student_ids=[khady.id])

    serve(fatou, date(2024, 12, 20))
    serve(fatou, date(2025, 2, 3))
    serve(fatou, date(2025, 3, 10))
    serve(fatou, date(2025, 3, 14))
    serve(ibrahima, date(2025, 3, 10))
    serve(ibrahima, date(2025, 3, 12), served=False)

    return {'fatou': fatou, 'ibrahima': ibrahima, 'khady': khady}
