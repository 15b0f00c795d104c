# reports/htmx_views.py

from django.http import JsonResponse
from django.contrib.auth.decorators import login_required
import logging

from .stats import get_scoped_monthly_summary
from core.utils import parse_period, get_month_name

logger = logging.getLogger(__name__)


@login_required
def monthly_summary(request):
    """
    JSON monthly summary over the acting user's scope.

    ?year=&month= select the period (default: current month). An empty
    period answers {"summary": null}.
    """
    year, month = parse_period(request)

    try:
        summary = get_scoped_monthly_summary(request.user, year, month)
    except Exception as e:
        logger.error(f"Error building monthly summary JSON for {request.user.username}: {e}")
        return JsonResponse({'error': 'No se pudieron calcular las estadísticas'}, status=500)

    return JsonResponse({
        'year': year,
        'month': month,
        'month_name': get_month_name(month),
        'summary': summary,
    })
