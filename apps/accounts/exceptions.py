"""Domain exceptions for accounts app."""

from apps.students.exceptions import CanteenServiceError, ConflictError


class InvalidCredentialsError(CanteenServiceError):
    status_code = 401
    default_code = 'invalid_credentials'
    default_message = 'Email ou mot de passe invalide.'


class InactiveAccountError(CanteenServiceError):
    status_code = 403
    default_code = 'account_inactive'
    default_message = 'Ce compte est désactivé.'


class EmailAlreadyRegisteredError(ConflictError):
    default_code = 'email_already_registered'
    default_message = 'Un utilisateur avec cet email est déjà enregistré.'
