"""
Domain exceptions shared by the canteen apps.

Every service error belongs to one category (invalid input, not found,
conflict, state) and carries a stable ``code`` plus the HTTP status the
API layer answers with. Store failures are not wrapped: ``DatabaseError``
propagates and is reported as a generic server error.
"""


class CanteenServiceError(Exception):
    """Base exception for all canteen service errors."""

    status_code = 400
    default_code = 'canteen_error'
    default_message = "La requête n'a pas pu être traitée."

    def __init__(self, message=None, code=None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        super().__init__(self.message)


# Categories

class InvalidInputError(CanteenServiceError):
    """Malformed or unexpected input."""
    default_code = 'invalid_input'
    default_message = 'Données invalides.'


class NotFoundError(CanteenServiceError):
    """Referenced record does not exist."""
    status_code = 404
    default_code = 'not_found'
    default_message = 'Ressource introuvable.'


class ConflictError(CanteenServiceError):
    """Operation collides with existing state (duplicates, exclusivity)."""
    default_code = 'conflict'
    default_message = "L'opération entre en conflit avec l'état actuel."


class StateError(CanteenServiceError):
    """Record is in a state that forbids the operation."""
    default_code = 'invalid_state'
    default_message = "L'état actuel ne permet pas cette opération."


# Students

class StudentNotFoundError(NotFoundError):
    default_code = 'student_not_found'
    default_message = 'Élève introuvable.'


class EnrolledStudentNotFoundError(NotFoundError):
    default_code = 'enrolled_student_not_found'
    default_message = "L'élève spécifié n'existe pas dans la liste des inscrits."


class ParentNotFoundError(NotFoundError):
    default_code = 'parent_not_found'
    default_message = 'Aucun parent trouvé avec cet identifiant.'


class StudentInactiveError(StateError):
    default_code = 'student_inactive'
    default_message = "Cet élève n'est plus inscrit à la cantine."


class AlreadyRegisteredError(ConflictError):
    default_code = 'already_registered'
    default_message = 'Cet élève est déjà inscrit à la cantine.'


class AlreadyActiveError(ConflictError):
    default_code = 'already_active'
    default_message = 'Cet élève est déjà actif à la cantine.'


class NotAParentAccountError(ConflictError):
    default_code = 'not_a_parent'
    default_message = "Ce compte existe déjà mais n'est pas un parent."
