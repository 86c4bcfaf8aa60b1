from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),
    path('user/', views.get_current_user, name='current-user'),
    path('users/', views.create_user, name='create-user'),
]
