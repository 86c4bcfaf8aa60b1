"""Students services - enrollment lookup and canteen registration."""

from .registration import (
    make_credential_token,
    register_canteen_student,
    withdraw_canteen_students,
    re_register_canteen_student,
)
from .student_lookup import (
    get_canteen_student,
    list_canteen_students,
    get_students_for_parent,
    search_enrolled_students,
    get_enrolled_student,
)

__all__ = [
    # Registration
    'make_credential_token',
    'register_canteen_student',
    'withdraw_canteen_students',
    're_register_canteen_student',
    # Lookup
    'get_canteen_student',
    'list_canteen_students',
    'get_students_for_parent',
    'search_enrolled_students',
    'get_enrolled_student',
]
