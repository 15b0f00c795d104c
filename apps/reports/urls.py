# reports/urls.py

from django.urls import path
from . import views, htmx_views, modal_views

app_name = 'reports'

urlpatterns = [
    # =============================================================================
    # FACILITATOR REPORTS
    # =============================================================================
    path('', views.report_list, name='report_list'),
    path('create/', views.report_create, name='report_create'),
    path('<int:pk>/edit/', views.report_edit, name='report_edit'),
    path('<int:pk>/modal/delete/', modal_views.report_delete_modal, name='report_delete_modal'),
    path('<int:pk>/modal/delete/submit/', modal_views.report_delete_submit, name='report_delete_submit'),

    # =============================================================================
    # SCOPED REPORTS & EXPORTS
    # =============================================================================
    path('zone/', views.zone_reports, name='zone_reports'),
    path('country/', views.country_reports, name='country_reports'),
    path('country/export/pdf/', views.export_summary_pdf, name='export_summary_pdf'),
    path('country/export/excel/', views.export_reports_excel, name='export_reports_excel'),

    # HTMX Views
    path('htmx/monthly-summary/', htmx_views.monthly_summary, name='monthly_summary'),
]
