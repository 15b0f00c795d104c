# savings_groups/urls.py

"""
URL Configuration for Savings Groups

1. Regular Views (views.py) - Full page loads and redirects
2. Modal Views (modal_views.py) - HTMX delete confirmations
3. HTMX Views (htmx_views.py) - JSON search and quick stats
"""

from django.urls import path
from . import views, htmx_views, modal_views

app_name = 'savings_groups'

urlpatterns = [
    # =============================================================================
    # SAVINGS GROUPS
    # =============================================================================

    # Regular Views
    path('', views.group_list, name='group_list'),
    path('create/', views.group_create, name='group_create'),
    path('<int:pk>/', views.group_detail, name='group_detail'),
    path('<int:pk>/edit/', views.group_edit, name='group_edit'),

    # Modal Views
    path('<int:pk>/modal/delete/', modal_views.group_delete_modal, name='group_delete_modal'),
    path('<int:pk>/modal/delete/submit/', modal_views.group_delete_submit, name='group_delete_submit'),

    # HTMX Views
    path('htmx/search/', htmx_views.group_search, name='group_search'),
    path('htmx/quick-stats/', htmx_views.group_quick_stats, name='group_quick_stats'),

    # =============================================================================
    # CYCLES
    # =============================================================================

    path('<int:group_pk>/cycles/create/', views.cycle_create, name='cycle_create'),
    path('cycles/<int:pk>/edit/', views.cycle_edit, name='cycle_edit'),
    path('cycles/<int:pk>/modal/delete/', modal_views.cycle_delete_modal, name='cycle_delete_modal'),
    path('cycles/<int:pk>/modal/delete/submit/', modal_views.cycle_delete_submit, name='cycle_delete_submit'),
]
