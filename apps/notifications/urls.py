from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    path(
        'students/<uuid:canteen_student_id>/notifications/',
        views.student_notifications,
        name='student-notifications'
    ),
    path(
        'students/<uuid:canteen_student_id>/notifications/read/',
        views.mark_all_read,
        name='mark-all-read'
    ),
    path(
        'students/<uuid:canteen_student_id>/notifications/<uuid:notification_id>/read/',
        views.mark_one_read,
        name='mark-one-read'
    ),
]
