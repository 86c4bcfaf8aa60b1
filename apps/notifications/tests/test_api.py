import uuid

import pytest
from django.urls import reverse
from rest_framework import status

from apps.notifications.models import Notification


@pytest.mark.django_db
class TestNotificationEndpoints:

    def test_list(self, parent_client, subscribed_student):
        url = reverse('notifications:student-notifications', kwargs={'canteen_student_id': subscribed_student.id})

        response = parent_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['type'] == 'subscription_purchased'
        assert response.data['results'][0]['read'] is False

    def test_list_unknown_student(self, admin_client, db):
        url = reverse('notifications:student-notifications', kwargs={'canteen_student_id': uuid.uuid4()})

        assert admin_client.get(url).status_code == status.HTTP_404_NOT_FOUND

    def test_list_other_parent_forbidden(self, other_parent_client, subscribed_student):
        url = reverse('notifications:student-notifications', kwargs={'canteen_student_id': subscribed_student.id})

        assert other_parent_client.get(url).status_code == status.HTTP_403_FORBIDDEN

    def test_mark_all_read(self, parent_client, subscribed_student):
        url = reverse('notifications:mark-all-read', kwargs={'canteen_student_id': subscribed_student.id})

        response = parent_client.patch(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert not Notification.objects.filter(read=False).exists()

    def test_mark_one_read(self, parent_client, subscribed_student):
        notification = Notification.objects.get(canteen_student=subscribed_student)
        url = reverse('notifications:mark-one-read', kwargs={
            'canteen_student_id': subscribed_student.id,
            'notification_id': notification.id,
        })

        response = parent_client.patch(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['read'] is True

    def test_mark_one_unknown(self, parent_client, subscribed_student):
        url = reverse('notifications:mark-one-read', kwargs={
            'canteen_student_id': subscribed_student.id,
            'notification_id': uuid.uuid4(),
        })

        response = parent_client.patch(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'notification_not_found'
