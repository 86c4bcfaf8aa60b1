"""Credential check for the login endpoint."""

import logging

from django.contrib.auth import get_user_model

from apps.accounts.exceptions import InactiveAccountError, InvalidCredentialsError

User = get_user_model()
logger = logging.getLogger(__name__)


def authenticate_user(*, email: str, password: str) -> User:
    """
    Check an email/password pair.

    The email match is case-insensitive. ``last_login`` is stamped by the
    session login that follows, not here.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: Correct password on a deactivated account
    """
    user = User.objects.filter(email__iexact=email).first()
    if user is None or not user.check_password(password):
        logger.info("Failed login attempt for %s", email)
        raise InvalidCredentialsError()

    if not user.is_active:
        logger.info("Login refused for deactivated user %s", user.id)
        raise InactiveAccountError()

    logger.info("User %s (%s) authenticated", user.id, user.role)
    return user
