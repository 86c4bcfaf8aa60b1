"""Meal history calendar."""

from uuid import UUID

from apps.meals.models import MealRecord
from apps.students.exceptions import StudentNotFoundError
from apps.students.models import CanteenStudent


def get_meal_history(*, canteen_student_id: UUID) -> list[dict]:
    """
    Meals of a student as calendar entries, oldest first.

    Returns:
        List of ``{'date': 'YYYY-MM-DD', 'served': bool}``

    Raises:
        StudentNotFoundError: If the canteen student doesn't exist
    """
    if not CanteenStudent.objects.filter(id=canteen_student_id).exists():
        raise StudentNotFoundError()

    meals = (
        MealRecord.objects
        .filter(canteen_student_id=canteen_student_id)
        .order_by('served_on')
        .values('served_on', 'served')
    )
    return [
        {'date': meal['served_on'].isoformat(), 'served': meal['served']}
        for meal in meals
    ]
