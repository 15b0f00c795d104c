# savers/htmx_views.py

from django.shortcuts import render
from django.db.models import Prefetch
import logging

from accounts.decorators import saver_required
from savings_groups.models import SavingsGroup, Cycle
from savings_groups.utils import classify_cycle_status, CYCLE_STATUS_LABELS, ACTIVE
from core.utils import parse_filters

logger = logging.getLogger(__name__)


# =============================================================================
# GROUP SEARCH
# =============================================================================

@saver_required
def group_search(request):
    """HTMX group search for savers: name contains, with facilitator and cycle status"""
    filters = parse_filters(request, ['q'])
    query = filters['q']

    results = []
    if query:
        groups = (
            SavingsGroup.objects
            .filter(name__icontains=query)
            .select_related('facilitator')
            .prefetch_related(Prefetch('cycles', queryset=Cycle.objects.order_by('-id')))
            .order_by('name')[:20]
        )
        for group in groups:
            status = classify_cycle_status(group.cycles.all())
            results.append({
                'group': group,
                'facilitator_name': group.facilitator.get_full_name() or group.facilitator.email,
                'cycle_status': status,
                'cycle_status_label': CYCLE_STATUS_LABELS[status],
                'can_join': status == ACTIVE,
            })

    return render(request, 'savers/_group_results.html', {
        'query': query,
        'results': results,
    })
