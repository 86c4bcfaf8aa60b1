from django.urls import path
from . import views

app_name = 'subscriptions'

urlpatterns = [
    path('tariffs/', views.tariffs, name='tariffs'),
    path(
        'students/<uuid:canteen_student_id>/subscription/',
        views.purchase,
        name='purchase'
    ),
    path(
        'students/<uuid:canteen_student_id>/subscriptions/',
        views.student_subscriptions,
        name='student-subscriptions'
    ),
]
