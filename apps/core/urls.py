# core/urls.py

from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    path('', views.home, name='home'),

    # =============================================================================
    # DASHBOARDS
    # =============================================================================
    path('facilitator/', views.facilitator_dashboard, name='facilitator_dashboard'),
    path('coordinator/', views.coordinator_dashboard, name='coordinator_dashboard'),
    path('director/', views.director_dashboard, name='director_dashboard'),

    # =============================================================================
    # PEOPLE IN SCOPE
    # =============================================================================
    path('facilitators/', views.facilitator_list, name='facilitator_list'),
    path('facilitators/<int:pk>/', views.facilitator_detail, name='facilitator_detail'),
    path('coordinators/', views.coordinator_list, name='coordinator_list'),
]
