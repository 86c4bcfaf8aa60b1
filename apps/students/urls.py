from django.urls import path
from . import views

app_name = 'students'

urlpatterns = [
    # GET    /api/canteen/students/  - List canteen students
    # POST   /api/canteen/students/  - Register an enrolled student
    # DELETE /api/canteen/students/  - Withdraw students
    path('students/', views.canteen_students, name='canteen-students'),
    path('students/<uuid:canteen_student_id>/', views.canteen_student_detail, name='canteen-student-detail'),
    path('students/<uuid:canteen_student_id>/re-register/', views.re_register_student, name='re-register'),
    path('parents/<uuid:parent_id>/students/', views.parent_students, name='parent-students'),
]
