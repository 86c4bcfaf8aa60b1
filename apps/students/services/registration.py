"""Canteen registration service: register, withdraw, re-register."""

import logging
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.hashers import make_password
from django.db import IntegrityError, transaction

from apps.accounts.models import UserRole
from apps.students.models import CanteenStudent, EnrolledStudent
from apps.students.exceptions import (
    AlreadyActiveError,
    AlreadyRegisteredError,
    EnrolledStudentNotFoundError,
    NotAParentAccountError,
    StudentNotFoundError,
)
from apps.subscriptions.services import create_placeholder_subscription

User = get_user_model()
logger = logging.getLogger(__name__)


def make_credential_token(matricule: str) -> str:
    """One-way salted hash of a matricule, printed on the student's QR code."""
    return make_password(matricule)


def _get_or_create_parent(*, email: str, name: str, password: Optional[str]):
    parent = User.objects.filter(email__iexact=email).first()
    if parent is None:
        return User.objects.create_user(
            email=email,
            password=password or settings.DEFAULT_PARENT_PASSWORD,
            name=name,
            role=UserRole.PARENT,
        )
    if parent.role != UserRole.PARENT:
        raise NotAParentAccountError()
    return parent


@transaction.atomic
def register_canteen_student(
    *,
    enrolled_student_id: UUID,
    parent_email: str,
    parent_name: str,
    parent_password: Optional[str] = None
) -> tuple[CanteenStudent, bool]:
    """
    Register an enrolled student at the canteen.

    This operation:
    1. Validates the enrolled student exists
    2. Refuses if an active registration already exists
    3. Creates the parent account if the email is unknown
    4. Reactivates a previous (withdrawn) registration, or creates a new one
       with a hashed credential and a placeholder subscription

    Args:
        enrolled_student_id: UUID of the school enrollment record
        parent_email: Parent account email
        parent_name: Parent display name (used when the account is created)
        parent_password: Initial password for a new parent account

    Returns:
        Tuple of (CanteenStudent, created)

    Raises:
        EnrolledStudentNotFoundError: If the enrolled student doesn't exist
        AlreadyRegisteredError: If the student already has an active registration
        NotAParentAccountError: If the email belongs to a non-parent account
    """
    try:
        enrolled = EnrolledStudent.objects.select_for_update().get(id=enrolled_student_id)
    except EnrolledStudent.DoesNotExist:
        raise EnrolledStudentNotFoundError()

    previous = (
        CanteenStudent.objects
        .select_for_update()
        .filter(enrolled_student=enrolled)
        .order_by('-created_at')
        .first()
    )
    if previous is not None and previous.is_active:
        raise AlreadyRegisteredError()

    parent = _get_or_create_parent(
        email=parent_email,
        name=parent_name,
        password=parent_password,
    )

    if previous is not None:
        previous.is_active = True
        previous.parent = parent
        previous.save(update_fields=['is_active', 'parent', 'updated_at'])
        logger.info("Canteen student %s re-registered", previous.id)
        return previous, False

    try:
        with transaction.atomic():
            student = CanteenStudent.objects.create(
                enrolled_student=enrolled,
                parent=parent,
                matricule_hash=make_credential_token(enrolled.matricule),
            )
    except IntegrityError:
        # Database constraint caught a concurrent registration
        raise AlreadyRegisteredError()

    create_placeholder_subscription(student)

    logger.info("Enrolled student %s registered at the canteen as %s", enrolled.id, student.id)
    return student, True


@transaction.atomic
def withdraw_canteen_students(*, student_ids: list[UUID]) -> int:
    """
    Withdraw students from the canteen (soft delete).

    Meal records, subscriptions and notifications are kept.

    Returns:
        Number of registrations deactivated

    Raises:
        StudentNotFoundError: If any id does not match a canteen student
    """
    unique_ids = set(student_ids)
    students = list(
        CanteenStudent.objects
        .select_for_update()
        .filter(id__in=unique_ids)
    )
    missing = unique_ids - {student.id for student in students}
    if missing:
        raise StudentNotFoundError(
            f"Élève(s) introuvable(s) : {', '.join(sorted(str(m) for m in missing))}."
        )

    count = (
        CanteenStudent.objects
        .filter(id__in=unique_ids, is_active=True)
        .update(is_active=False)
    )
    logger.info("Withdrew %d canteen student(s)", count)
    return count


@transaction.atomic
def re_register_canteen_student(*, canteen_student_id: UUID) -> CanteenStudent:
    """
    Reactivate a withdrawn canteen registration.

    Raises:
        StudentNotFoundError: If the canteen student doesn't exist
        AlreadyActiveError: If the registration is already active
        AlreadyRegisteredError: If another active registration exists for
            the same enrolled student
    """
    try:
        student = CanteenStudent.objects.select_for_update().get(id=canteen_student_id)
    except CanteenStudent.DoesNotExist:
        raise StudentNotFoundError()

    if student.is_active:
        raise AlreadyActiveError()

    other_active = (
        CanteenStudent.objects
        .filter(enrolled_student_id=student.enrolled_student_id, is_active=True)
        .exclude(id=student.id)
        .exists()
    )
    if other_active:
        raise AlreadyRegisteredError()

    student.is_active = True
    student.save(update_fields=['is_active', 'updated_at'])

    logger.info("Canteen student %s re-registered", student.id)
    return student
