# savings_groups/htmx_views.py

from django.http import JsonResponse
from django.contrib.auth.decorators import login_required
from django.db.models import Q, Prefetch
import logging

from .models import Cycle
from .utils import (
    get_groups_for_user,
    classify_cycle_status,
    get_cycle_status_counts,
    CYCLE_STATUS_LABELS,
)
from reports.stats import get_demographics
from core.utils import parse_filters, paginate_queryset

logger = logging.getLogger(__name__)


# =============================================================================
# GROUP SEARCH
# =============================================================================

@login_required
def group_search(request):
    """JSON group search over the acting user's scope"""
    filters = parse_filters(request, ['q', 'savings_type', 'city'])

    groups = (
        get_groups_for_user(request.user)
        .prefetch_related(Prefetch('cycles', queryset=Cycle.objects.order_by('-id')))
        .order_by('name')
    )

    if filters['q']:
        groups = groups.filter(
            Q(name__icontains=filters['q']) |
            Q(operating_city__icontains=filters['q']) |
            Q(facilitator__first_name__icontains=filters['q']) |
            Q(facilitator__last_name__icontains=filters['q'])
        )

    if filters['savings_type']:
        groups = groups.filter(savings_type=filters['savings_type'])

    if filters['city']:
        groups = groups.filter(operating_city__iexact=filters['city'])

    rows, window = paginate_queryset(request, groups, page_size=20)

    results = []
    for group in rows:
        status = classify_cycle_status(group.cycles.all())
        results.append({
            'id': group.pk,
            'name': group.name,
            'savings_type': group.savings_type,
            'is_youth_group': group.is_youth_group,
            'operating_city': group.operating_city,
            'facilitator': group.facilitator.get_full_name() or group.facilitator.email,
            'total_members': group.total_members,
            'cycle_status': status,
            'cycle_status_label': CYCLE_STATUS_LABELS[status],
        })

    return JsonResponse({'results': results, 'pagination': window})


# =============================================================================
# QUICK STATS
# =============================================================================

@login_required
def group_quick_stats(request):
    """JSON counts for the acting user's groups: totals, cycle badges and demographics"""
    groups = get_groups_for_user(request.user).prefetch_related('cycles')

    try:
        stats = {
            'total_groups': groups.count(),
            'youth_groups': groups.filter(is_youth_group=True).count(),
            'cycle_status': get_cycle_status_counts(groups),
            'demographics': get_demographics(groups),
        }
    except Exception as e:
        logger.error(f"Error computing group quick stats for {request.user.username}: {e}")
        return JsonResponse({'error': 'No se pudieron calcular las estadísticas'}, status=500)

    return JsonResponse(stats)
