"""Domain exceptions for subscriptions app."""

from apps.students.exceptions import InvalidInputError, StateError


class InvalidDurationError(InvalidInputError):
    """Requested duration is not one of the configured tariffs."""
    default_code = 'invalid_duration'
    default_message = "Cette durée d'abonnement n'est pas proposée."


class NoActiveSubscriptionError(StateError):
    default_code = 'no_active_subscription'
    default_message = "L'élève n'a pas d'abonnement actif."


class SubscriptionExpiredError(StateError):
    default_code = 'subscription_expired'
    default_message = "L'abonnement de l'élève a expiré."
