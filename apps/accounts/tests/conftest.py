import pytest

from apps.accounts.models import User, UserRole


@pytest.fixture
def inactive_user(db):
    """Create and return a deactivated parent account."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        name='Inactive Parent',
        role=UserRole.PARENT,
        is_active=False,
    )
