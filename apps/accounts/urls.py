# accounts/urls.py
from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    # =============================================================================
    # AUTHENTICATION URLS
    # =============================================================================
    path('login/', views.login_view, name='login'),
    path('logout/', views.logout_view, name='logout'),
    path('register/', views.register_view, name='register'),

    # =============================================================================
    # PROFILE URLS
    # =============================================================================
    path('profile/', views.profile_update, name='profile'),
]
