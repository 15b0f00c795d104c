# savers/urls.py

from django.urls import path
from . import views, htmx_views, modal_views

app_name = 'savers'

urlpatterns = [
    # =============================================================================
    # DASHBOARD & PARTICIPATION
    # =============================================================================
    path('', views.saver_dashboard, name='dashboard'),
    path('groups/<int:group_pk>/join/', views.join_group, name='join_group'),
    path('purpose/', views.purpose_update, name='purpose_update'),

    # HTMX Views
    path('htmx/group-search/', htmx_views.group_search, name='group_search'),

    # Modal Views
    path('new-cycle/modal/', modal_views.new_cycle_modal, name='new_cycle_modal'),
    path('new-cycle/modal/submit/', modal_views.new_cycle_submit, name='new_cycle_submit'),

    # =============================================================================
    # MOVEMENTS
    # =============================================================================
    path('movements/create/', views.movement_create, name='movement_create'),
    path('movements/<int:pk>/edit/', views.movement_edit, name='movement_edit'),
    path('movements/<int:pk>/modal/delete/', modal_views.movement_delete_modal, name='movement_delete_modal'),
    path('movements/<int:pk>/modal/delete/submit/', modal_views.movement_delete_submit, name='movement_delete_submit'),
]
