from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'enrolled'

router = SimpleRouter()
router.register(r'', views.EnrolledStudentViewSet, basename='enrolled-student')

urlpatterns = [
    # GET       /api/enrolled/       - List/search enrolled students
    # GET       /api/enrolled/{id}/  - Get enrolled student
    # PUT/PATCH /api/enrolled/{id}/  - Update enrolled student
    path('', include(router.urls)),
]
