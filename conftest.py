"""Fixtures shared by every app's tests."""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, UserRole
from apps.students.models import EnrolledStudent
from apps.students.services import register_canteen_student
from apps.subscriptions.services import purchase_subscription


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='admin@ecole.example',
        password='AdminPass123!',
        name='Admin Cantine',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def agent_user(db):
    return User.objects.create_user(
        email='agent@ecole.example',
        password='AgentPass123!',
        name='Agent Service',
        role=UserRole.AGENT,
    )


@pytest.fixture
def parent_user(db):
    return User.objects.create_user(
        email='parent@example.com',
        password='ParentPass123!',
        name='Awa Diop',
        role=UserRole.PARENT,
    )


@pytest.fixture
def other_parent(db):
    return User.objects.create_user(
        email='autre.parent@example.com',
        password='ParentPass123!',
        name='Moussa Ba',
        role=UserRole.PARENT,
    )


@pytest.fixture
def admin_client(admin_user):
    """API client authenticated as a canteen admin (JWT)."""
    return _client_for(admin_user)


@pytest.fixture
def agent_client(agent_user):
    """API client authenticated as a serving agent (JWT)."""
    return _client_for(agent_user)


@pytest.fixture
def parent_client(parent_user):
    """API client authenticated as the parent of ``canteen_student`` (JWT)."""
    return _client_for(parent_user)


@pytest.fixture
def other_parent_client(other_parent):
    return _client_for(other_parent)


@pytest.fixture
def enrolled_student(db):
    return EnrolledStudent.objects.create(
        name='Fatou Diop',
        student_class='CM2',
        gender='F',
        matricule='MAT-2024-001',
    )


@pytest.fixture
def other_enrolled_student(db):
    return EnrolledStudent.objects.create(
        name='Ibrahima Ba',
        student_class='CE1',
        gender='M',
        matricule='MAT-2024-002',
    )


@pytest.fixture
def canteen_student(enrolled_student, parent_user):
    """Registered canteen student with only a placeholder subscription."""
    student, _ = register_canteen_student(
        enrolled_student_id=enrolled_student.id,
        parent_email=parent_user.email,
        parent_name=parent_user.name,
    )
    return student


@pytest.fixture
def subscribed_student(canteen_student):
    """Canteen student holding a 30-day subscription bought now."""
    purchase_subscription(canteen_student_id=canteen_student.id, duration=30)
    canteen_student.refresh_from_db()
    return canteen_student
