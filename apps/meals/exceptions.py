"""Domain exceptions for meals app."""

from apps.students.exceptions import ConflictError


class AlreadyServedTodayError(ConflictError):
    default_code = 'already_served_today'
    default_message = "L'élève a déjà été servi aujourd'hui."
