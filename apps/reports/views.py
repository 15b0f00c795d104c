# reports/views.py

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib import messages
from django.http import HttpResponse
from django.urls import reverse
import logging

from .models import MonthlyReport
from .forms import MonthlyReportForm, PeriodFilterForm
from .stats import get_scoped_monthly_summary, get_reports_for_user, get_report_totals
from .utils import (
    build_monthly_summary_pdf,
    build_reports_workbook,
    get_summary_pdf_filename,
    get_reports_excel_filename,
)
from accounts.decorators import facilitator_required, coordinator_required, director_required
from savings_groups.utils import get_scope_label
from core.utils import parse_period, paginate_queryset, get_month_name

logger = logging.getLogger(__name__)


def _period_context(request, year, month):
    return {
        'year': year,
        'month': month,
        'month_name': get_month_name(month),
        'period_form': PeriodFilterForm(initial={'year': year, 'month': month}),
    }


def _scoped_summary(request, year, month, facilitator=None):
    """Monthly summary for the page; failures are logged and shown as a notice"""
    try:
        return get_scoped_monthly_summary(request.user, year, month, facilitator=facilitator)
    except Exception as e:
        logger.error(f"Error building monthly summary for {request.user.username}: {e}")
        messages.error(request, "No se pudieron cargar las estadísticas del mes", extra_tags='sweetalert-error')
        return None


# =============================================================================
# FACILITATOR REPORTS
# =============================================================================

@facilitator_required
def report_list(request):
    """The facilitator's own reports, newest first"""
    reports = MonthlyReport.objects.filter(
        facilitator=request.user
    ).select_related('group').order_by('-year', '-month', '-id')

    rows, window = paginate_queryset(request, reports)

    context = {
        'reports': rows,
        'pagination': window,
        'totals': get_report_totals(reports),
        'title': 'Mis reportes',
    }
    return render(request, 'reports/report_list.html', context)


@facilitator_required
def report_create(request):
    """File a monthly report for one of the facilitator's groups"""
    if request.method == "POST":
        form = MonthlyReportForm(request.POST, facilitator=request.user)
        if form.is_valid():
            report = form.save()
            logger.info(f"Report {report.pk} created for group {report.group_id} ({report.period_label})")
            messages.success(request, "Reporte creado exitosamente", extra_tags='sweetalert')
            return redirect("reports:report_list")
        else:
            messages.error(
                request,
                "Por favor corrige los errores del formulario",
                extra_tags='sweetalert-error'
            )
    else:
        form = MonthlyReportForm(facilitator=request.user, initial={'group': request.GET.get('group')})

    context = {
        'form': form,
        'title': 'Crear reporte',
    }
    return render(request, 'reports/report_form.html', context)


@facilitator_required
def report_edit(request, pk):
    """Edit one of the facilitator's reports"""
    report = get_object_or_404(MonthlyReport, pk=pk, facilitator=request.user)

    if request.method == "POST":
        form = MonthlyReportForm(request.POST, instance=report, facilitator=request.user)
        if form.is_valid():
            report = form.save()
            messages.success(request, "Reporte actualizado exitosamente", extra_tags='sweetalert')
            return redirect("reports:report_list")
        else:
            messages.error(
                request,
                "Por favor corrige los errores del formulario",
                extra_tags='sweetalert-error'
            )
    else:
        form = MonthlyReportForm(instance=report, facilitator=request.user)

    context = {
        'form': form,
        'report': report,
        'title': 'Editar reporte',
    }
    return render(request, 'reports/report_form.html', context)


# =============================================================================
# COORDINATOR & DIRECTOR REPORT PAGES
# =============================================================================

def _scoped_reports_page(request, template_name, title):
    year, month = parse_period(request)
    reports = get_reports_for_user(request.user, year=year, month=month)
    rows, window = paginate_queryset(request, reports)

    context = {
        'summary': _scoped_summary(request, year, month),
        'reports': rows,
        'pagination': window,
        'scope_label': get_scope_label(request.user),
        'title': title,
        **_period_context(request, year, month),
    }
    return render(request, template_name, context)


@coordinator_required
def zone_reports(request):
    """Coordinator: monthly summary and paged reports of the zone"""
    return _scoped_reports_page(request, 'reports/scoped_reports.html', 'Reportes de la zona')


@director_required
def country_reports(request):
    """Director: monthly summary, paged reports and exports for the country"""
    return _scoped_reports_page(request, 'reports/scoped_reports.html', 'Reportes del país')


# =============================================================================
# EXPORTS
# =============================================================================

@director_required
def export_summary_pdf(request):
    """Monthly summary PDF for the director's country"""
    year, month = parse_period(request)
    month_name = get_month_name(month)
    summary = _scoped_summary(request, year, month)

    if summary is None:
        messages.error(
            request,
            f"No hay datos para {month_name} {year}",
            extra_tags='sweetalert-error'
        )
        return redirect(f"{reverse('reports:country_reports')}?year={year}&month={month}")

    pdf = build_monthly_summary_pdf(
        summary,
        month_name,
        year,
        country=get_scope_label(request.user),
        director_name=request.user.get_full_name() or request.user.email,
    )

    response = HttpResponse(pdf, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="{get_summary_pdf_filename(month_name, year)}"'
    return response


@director_required
def export_reports_excel(request):
    """The period's reports for the director's country as an Excel workbook"""
    year, month = parse_period(request)
    month_name = get_month_name(month)
    reports = get_reports_for_user(request.user, year=year, month=month)

    workbook = build_reports_workbook(reports, month_name, year)

    response = HttpResponse(
        content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )
    response['Content-Disposition'] = f'attachment; filename="{get_reports_excel_filename(month_name, year)}"'
    workbook.save(response)

    logger.info(f"Exported {reports.count()} reports for {month_name} {year} to Excel")
    return response
