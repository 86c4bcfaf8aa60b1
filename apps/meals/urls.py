from django.urls import path
from . import views

app_name = 'meals'

urlpatterns = [
    path('scan/', views.scan, name='scan'),
    path(
        'students/<uuid:canteen_student_id>/meal-history/',
        views.meal_history,
        name='meal-history'
    ),
]
