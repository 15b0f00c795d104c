# core/stats.py
"""
Dashboard rollups for every role.

All functions take querysets or users already scoped by
savings_groups.utils; nothing here decides who may see what.
"""

from django.db.models import Count, Sum
from decimal import Decimal
import logging

from savings_groups.utils import (
    get_groups_for_user,
    get_facilitators_for_user,
    get_coordinators_for_user,
    get_cycle_status_counts,
)
from reports.stats import get_demographics
from core.utils import format_money, get_cached_stats

logger = logging.getLogger(__name__)


# =============================================================================
# GROUP OVERVIEW
# =============================================================================

def get_group_overview(groups):
    """
    Totals over a set of groups: count, cycle badges, demographics and the
    amount saved across all their reports (every period).

    Args:
        groups: SavingsGroup queryset

    Returns:
        dict
    """
    from reports.models import MonthlyReport

    groups = groups.prefetch_related('cycles')
    report_aggregates = MonthlyReport.objects.filter(group__in=groups).aggregate(
        report_count=Count('id'),
        total_saved=Sum('amount_saved'),
    )
    total_saved = report_aggregates['total_saved'] or Decimal('0.00')

    return {
        'group_count': groups.count(),
        'youth_group_count': groups.filter(is_youth_group=True).count(),
        'cycle_status': get_cycle_status_counts(groups),
        'demographics': get_demographics(groups),
        'report_count': report_aggregates['report_count'] or 0,
        'total_saved': total_saved,
        'total_saved_formatted': format_money(total_saved),
    }


# =============================================================================
# ROLE DASHBOARDS
# =============================================================================

def get_dashboard_stats(user):
    """
    Headline numbers for the acting user's dashboard, cached until the next
    write. Facilitators see their own groups; coordinators and directors see
    their zone or country and the people in it.
    """
    def build():
        stats = get_group_overview(get_groups_for_user(user))
        stats['facilitator_count'] = get_facilitators_for_user(user).count()
        stats['coordinator_count'] = get_coordinators_for_user(user).count()
        return stats

    return get_cached_stats(['dashboard', user.pk], build)


def get_facilitator_rows(user):
    """
    One row per facilitator in the acting user's scope with their own
    group overview, ordered by name.
    """
    from savings_groups.models import SavingsGroup

    rows = []
    facilitators = get_facilitators_for_user(user).select_related('profile').order_by('first_name', 'last_name')

    for facilitator in facilitators:
        overview = get_group_overview(SavingsGroup.objects.filter(facilitator=facilitator))
        rows.append({
            'facilitator': facilitator,
            'name': facilitator.get_full_name() or facilitator.email,
            'city': facilitator.profile.city,
            **overview,
        })

    return rows


def get_coordinator_rows(user):
    """
    Director view: one row per coordinator in the country with the totals
    of the zone each one coordinates.
    """
    rows = []
    coordinators = get_coordinators_for_user(user).select_related('profile').order_by('first_name', 'last_name')

    for coordinator in coordinators:
        overview = get_group_overview(get_groups_for_user(coordinator))
        rows.append({
            'coordinator': coordinator,
            'name': coordinator.get_full_name() or coordinator.email,
            'zone': coordinator.profile.coordination_zone or 'Sin zona',
            'facilitator_count': get_facilitators_for_user(coordinator).count(),
            **overview,
        })

    return rows
