"""Account creation by canteen administrators."""

import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from apps.accounts.exceptions import EmailAlreadyRegisteredError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def create_account(*, email: str, password: str, name: str, role: str) -> User:
    """
    Create an admin, serving agent or parent account.

    Args:
        email: Login email, stored lowercased
        password: Already validated against AUTH_PASSWORD_VALIDATORS
        name: Display name
        role: One of UserRole

    Returns:
        Created User instance

    Raises:
        EmailAlreadyRegisteredError: If the email is taken (case-insensitive)
    """
    email = email.strip().lower()
    if User.objects.filter(email__iexact=email).exists():
        raise EmailAlreadyRegisteredError()

    try:
        with transaction.atomic():
            user = User.objects.create_user(email=email, password=password, name=name, role=role)
    except IntegrityError:
        # Concurrent creation with the same email
        raise EmailAlreadyRegisteredError()

    logger.info("Account %s created with role %s", user.id, role)
    return user
