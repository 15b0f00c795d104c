# reports/modal_views.py

from django.shortcuts import render, get_object_or_404
from django.urls import reverse
from django.views.decorators.http import require_http_methods
import logging

from .models import MonthlyReport
from accounts.decorators import facilitator_required
from core.utils import create_error_response, create_redirect_response

logger = logging.getLogger(__name__)


# =============================================================================
# REPORT MODALS
# =============================================================================

@facilitator_required
@require_http_methods(["GET"])
def report_delete_modal(request, pk):
    """Load delete report modal"""
    report = get_object_or_404(MonthlyReport.objects.select_related('group'), pk=pk, facilitator=request.user)
    return render(request, 'reports/modals/_report_delete_modal.html', {'report': report})


@facilitator_required
@require_http_methods(["POST"])
def report_delete_submit(request, pk):
    """Delete one of the facilitator's reports"""
    report = get_object_or_404(MonthlyReport, pk=pk, facilitator=request.user)

    try:
        period = report.period_label
        report.delete()

        logger.info(f"Report {pk} ({period}) deleted by {request.user.username}")

        return create_redirect_response(
            redirect_url=reverse('reports:report_list'),
            message=f"Reporte de {period} eliminado",
            title='Reporte eliminado'
        )

    except Exception as e:
        logger.error(f"Error deleting report {pk}: {e}")
        return create_error_response(
            message=f"Error al eliminar el reporte: {str(e)}",
            title='No se pudo eliminar'
        )
