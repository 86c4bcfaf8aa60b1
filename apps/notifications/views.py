from rest_framework import serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.students.permissions import IsAdminOrStudentParent
from apps.students.services import get_canteen_student
from .serializers import NotificationSerializer
from .services import (
    list_student_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)


class MarkAllReadResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    count = drf_serializers.IntegerField()


class NotificationPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    responses={200: NotificationSerializer(many=True)},
    description="List a canteen student's notifications, newest first.",
    tags=['notifications'],
)
@api_view(['GET'])
@permission_classes([IsAdminOrStudentParent])
def student_notifications(request, canteen_student_id):
    get_canteen_student(canteen_student_id=canteen_student_id)

    notifications = list_student_notifications(canteen_student_id=canteen_student_id)
    paginator = NotificationPagination()
    page = paginator.paginate_queryset(notifications, request)
    serializer = NotificationSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


@extend_schema(
    request=None,
    responses={200: MarkAllReadResponseSerializer},
    description="Mark every notification of a canteen student as read.",
    tags=['notifications'],
)
@api_view(['PATCH'])
@permission_classes([IsAdminOrStudentParent])
def mark_all_read(request, canteen_student_id):
    get_canteen_student(canteen_student_id=canteen_student_id)

    count = mark_all_notifications_read(canteen_student_id=canteen_student_id)
    return Response({
        'message': 'Notifications marquées comme lues.',
        'count': count,
    })


@extend_schema(
    request=None,
    responses={200: NotificationSerializer},
    description="Mark one notification as read.",
    tags=['notifications'],
)
@api_view(['PATCH'])
@permission_classes([IsAdminOrStudentParent])
def mark_one_read(request, canteen_student_id, notification_id):
    notification = mark_notification_read(
        canteen_student_id=canteen_student_id,
        notification_id=notification_id,
    )
    return Response(NotificationSerializer(notification).data)
