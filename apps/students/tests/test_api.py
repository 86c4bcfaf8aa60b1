import uuid

import pytest
from django.urls import reverse
from rest_framework import status

from apps.students.models import CanteenStudent


# =============================================================================
# Canteen registration Tests
# =============================================================================

@pytest.mark.django_db
class TestCanteenStudentsEndpoint:
    """Tests for GET/POST/DELETE /api/canteen/students/"""

    def test_register(self, admin_client, enrolled_student, parent_user):
        url = reverse('students:canteen-students')
        data = {
            'enrolled_student_id': str(enrolled_student.id),
            'parent_email': parent_user.email,
            'parent_name': parent_user.name,
        }
        response = admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        student = response.data['student']
        assert student['enrolled_student']['matricule'] == enrolled_student.matricule
        assert student['parent']['email'] == parent_user.email
        assert student['is_active'] is True
        assert student['subscription']['status'] == 'expired'
        assert student['subscription']['end_date'] is None

    def test_register_rejects_unknown_fields(self, admin_client, enrolled_student, parent_user):
        url = reverse('students:canteen-students')
        data = {
            'enrolled_student_id': str(enrolled_student.id),
            'parent_email': parent_user.email,
            'parent_name': parent_user.name,
            'is_active': False,
        }
        response = admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_input'
        assert 'is_active' in response.data['errors']
        assert not CanteenStudent.objects.exists()

    def test_register_twice(self, admin_client, canteen_student, parent_user):
        url = reverse('students:canteen-students')
        data = {
            'enrolled_student_id': str(canteen_student.enrolled_student_id),
            'parent_email': parent_user.email,
            'parent_name': parent_user.name,
        }
        response = admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'already_registered'

    def test_register_unknown_enrolled_student(self, admin_client, parent_user):
        url = reverse('students:canteen-students')
        data = {
            'enrolled_student_id': str(uuid.uuid4()),
            'parent_email': parent_user.email,
            'parent_name': parent_user.name,
        }
        response = admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'enrolled_student_not_found'

    def test_register_requires_admin(self, parent_client, enrolled_student, parent_user):
        url = reverse('students:canteen-students')
        data = {
            'enrolled_student_id': str(enrolled_student.id),
            'parent_email': parent_user.email,
            'parent_name': parent_user.name,
        }
        response = parent_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list(self, admin_client, canteen_student):
        response = admin_client.get(reverse('students:canteen-students'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['id'] == str(canteen_student.id)

    def test_list_withdrawn(self, admin_client, canteen_student):
        canteen_student.is_active = False
        canteen_student.save()
        url = reverse('students:canteen-students')

        assert admin_client.get(url).data['count'] == 0
        assert admin_client.get(url, {'is_active': 'false'}).data['count'] == 1
        assert admin_client.get(url, {'is_active': 'all'}).data['count'] == 1

    def test_withdraw(self, admin_client, canteen_student):
        url = reverse('students:canteen-students')
        response = admin_client.delete(url, {'ids': [str(canteen_student.id)]}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        canteen_student.refresh_from_db()
        assert canteen_student.is_active is False

    def test_withdraw_unknown(self, admin_client, canteen_student):
        url = reverse('students:canteen-students')
        response = admin_client.delete(
            url,
            {'ids': [str(canteen_student.id), str(uuid.uuid4())]},
            format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        canteen_student.refresh_from_db()
        assert canteen_student.is_active is True

    def test_withdraw_empty_list(self, admin_client, db):
        url = reverse('students:canteen-students')
        response = admin_client.delete(url, {'ids': []}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestReRegister:
    """Tests for POST /api/canteen/students/{id}/re-register/"""

    def test_re_register(self, admin_client, canteen_student):
        canteen_student.is_active = False
        canteen_student.save()
        url = reverse('students:re-register', kwargs={'canteen_student_id': canteen_student.id})

        response = admin_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['student']['is_active'] is True

    def test_re_register_active(self, admin_client, canteen_student):
        url = reverse('students:re-register', kwargs={'canteen_student_id': canteen_student.id})

        response = admin_client.post(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'already_active'


@pytest.mark.django_db
class TestStudentAccess:
    """Detail and per-parent listing permissions."""

    def test_parent_sees_own_child(self, parent_client, canteen_student):
        url = reverse('students:canteen-student-detail', kwargs={'canteen_student_id': canteen_student.id})

        response = parent_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['enrolled_student']['name'] == 'Fatou Diop'

    def test_other_parent_forbidden(self, other_parent_client, canteen_student):
        url = reverse('students:canteen-student-detail', kwargs={'canteen_student_id': canteen_student.id})

        response = other_parent_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_agent_forbidden(self, agent_client, canteen_student):
        url = reverse('students:canteen-student-detail', kwargs={'canteen_student_id': canteen_student.id})

        assert agent_client.get(url).status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_student(self, admin_client, db):
        url = reverse('students:canteen-student-detail', kwargs={'canteen_student_id': uuid.uuid4()})

        response = admin_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'student_not_found'

    def test_parent_students(self, parent_client, parent_user, canteen_student):
        url = reverse('students:parent-students', kwargs={'parent_id': parent_user.id})

        response = parent_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [s['id'] for s in response.data] == [str(canteen_student.id)]

    def test_parent_students_of_someone_else(self, other_parent_client, parent_user, canteen_student):
        url = reverse('students:parent-students', kwargs={'parent_id': parent_user.id})

        assert other_parent_client.get(url).status_code == status.HTTP_403_FORBIDDEN

    def test_parent_students_unknown_parent(self, admin_client, db):
        url = reverse('students:parent-students', kwargs={'parent_id': uuid.uuid4()})

        response = admin_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'parent_not_found'


# =============================================================================
# Enrolled students Tests
# =============================================================================

@pytest.mark.django_db
class TestEnrolledStudents:
    """Tests for /api/enrolled/"""

    def test_list(self, admin_client, enrolled_student, other_enrolled_student):
        response = admin_client.get(reverse('enrolled:enrolled-student-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2

    def test_search(self, admin_client, enrolled_student, other_enrolled_student):
        response = admin_client.get(reverse('enrolled:enrolled-student-list'), {'search': '002'})

        assert [s['id'] for s in response.data['results']] == [str(other_enrolled_student.id)]

    def test_detail(self, admin_client, enrolled_student):
        url = reverse('enrolled:enrolled-student-detail', kwargs={'pk': enrolled_student.id})

        response = admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['matricule'] == 'MAT-2024-001'

    def test_update(self, admin_client, enrolled_student):
        url = reverse('enrolled:enrolled-student-detail', kwargs={'pk': enrolled_student.id})

        response = admin_client.patch(url, {'student_class': 'CM1'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        enrolled_student.refresh_from_db()
        assert enrolled_student.student_class == 'CM1'

    def test_duplicate_matricule(self, admin_client, enrolled_student, other_enrolled_student):
        url = reverse('enrolled:enrolled-student-detail', kwargs={'pk': other_enrolled_student.id})

        response = admin_client.patch(url, {'matricule': enrolled_student.matricule}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'matricule' in response.data['errors']

    def test_requires_admin(self, parent_client, enrolled_student):
        response = parent_client.get(reverse('enrolled:enrolled-student-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
