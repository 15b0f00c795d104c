# reports/stats.py

"""
Monthly aggregation of savings groups and their reports.

get_monthly_summary() is the single aggregation used by every dashboard,
the JSON endpoints, the PDF export and the monthly_summary command. It is
pure: callers fetch the collections (already restricted to the acting
user's scope) and pass them in.

get_scoped_monthly_summary() is the database-facing wrapper: it resolves
the scope for a user, fetches groups and the period's reports, and caches
the result until the next write.
"""

from decimal import Decimal, InvalidOperation
import logging

from core.utils import get_month_name, get_cached_stats

logger = logging.getLogger(__name__)


SAVINGS_TYPES = ('Asca', 'Rosca', 'Simple')
YOUTH_BUCKET = 'youth'


# =============================================================================
# HELPERS
# =============================================================================

def _as_int(value):
    return int(value or 0)


def _as_decimal(value):
    if value is None:
        return Decimal('0')
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal('0')


def is_group_active_in_period(group, year, month):
    """
    A group counts for a period once it exists: created in an earlier year,
    or earlier in the same year. Groups without a creation year never count;
    a missing creation month counts as January.
    """
    creation_year = getattr(group, 'creation_year', None)
    if creation_year is None:
        return False

    creation_month = getattr(group, 'creation_month', None) or 1
    return creation_year < year or (creation_year == year and creation_month <= month)


def _resolve_report_group(report, groups_by_id):
    group_id = getattr(report, 'group_id', None)
    if group_id is not None and group_id in groups_by_id:
        return groups_by_id[group_id]
    return getattr(report, 'group', None)


# =============================================================================
# MONTHLY SUMMARY
# =============================================================================

def get_monthly_summary(groups, reports, year, month):
    """
    Summarize groups and reports for one (year, month).

    Membership, demographic and type counts come from the groups active in
    the period; financial sums come from the period's reports. Reports are
    never deduplicated, and a group's members are counted once however many
    reports it filed. A report whose group is unknown, or has a savings type
    outside Asca/Rosca/Simple, is skipped entirely.

    Args:
        groups: Iterable of groups (objects with id, total_members, men,
                women, boys, girls, savings_type, is_youth_group,
                creation_year, creation_month)
        reports: Iterable of reports (objects with group_id or group,
                 year, month, average_attendance, amount_saved)
        year: Target year
        month: Target month (1..12)

    Returns:
        dict: The summary, or None when the period has neither active
              groups nor reports
    """
    groups = list(groups)
    groups_by_id = {getattr(group, 'id', None): group for group in groups}

    active_groups = [group for group in groups if is_group_active_in_period(group, year, month)]

    # Reports whose group or type cannot be resolved are left out of every
    # figure so the type buckets always add up to total_savings
    period_reports = []
    for report in reports:
        if report.year != year or report.month != month:
            continue
        group = _resolve_report_group(report, groups_by_id)
        if group is None or group.savings_type not in SAVINGS_TYPES:
            logger.warning(f"Report {getattr(report, 'id', '?')} skipped: no group with a known savings type")
            continue
        period_reports.append((report, group))

    if not active_groups and not period_reports:
        return None

    summary = {
        'year': year,
        'month': month,
        'month_name': get_month_name(month),
        'report_count': len(period_reports),
        'group_count': len(active_groups),
        'total_members': 0,
        'total_attendance': Decimal('0'),
        'total_savings': Decimal('0'),
        'asca_count': 0,
        'rosca_count': 0,
        'simple_count': 0,
        'youth_count': 0,
        'total_men': 0,
        'total_women': 0,
        'total_children': 0,
        'savings_by_type': {
            'Asca': Decimal('0'),
            'Rosca': Decimal('0'),
            'Simple': Decimal('0'),
            YOUTH_BUCKET: Decimal('0'),
        },
    }

    # State as of the period
    for group in active_groups:
        summary['total_members'] += _as_int(group.total_members)
        summary['total_men'] += _as_int(group.men)
        summary['total_women'] += _as_int(group.women)
        summary['total_children'] += _as_int(group.boys) + _as_int(group.girls)

        if group.savings_type in SAVINGS_TYPES:
            summary[f"{group.savings_type.lower()}_count"] += 1
        if group.is_youth_group:
            summary['youth_count'] += 1

    # Activity reported in the period
    for report, group in period_reports:
        amount = _as_decimal(report.amount_saved)
        summary['total_attendance'] += _as_decimal(report.average_attendance)
        summary['total_savings'] += amount
        summary['savings_by_type'][group.savings_type] += amount
        if group.is_youth_group:
            summary['savings_by_type'][YOUTH_BUCKET] += amount

    return summary


# =============================================================================
# SCOPED SUMMARIES
# =============================================================================

def get_scoped_monthly_summary(user, year, month, facilitator=None):
    """
    Monthly summary over the acting user's scope, cached until the next write.

    Args:
        user: Acting user; decides the scope (see get_groups_for_user)
        year, month: Target period
        facilitator: Optional facilitator user to narrow the scope to
                     (coordinator/director drill-down)

    Returns:
        dict or None, as get_monthly_summary
    """
    from savings_groups.utils import get_groups_for_user
    from .models import MonthlyReport

    def build():
        groups = get_groups_for_user(user)
        if facilitator is not None:
            groups = groups.filter(facilitator=facilitator)
        groups = list(groups)

        reports = MonthlyReport.objects.filter(
            group_id__in=[group.id for group in groups],
            year=year,
            month=month,
        )
        return get_monthly_summary(groups, reports, year, month)

    key_parts = ['monthly', user.pk, year, month, facilitator.pk if facilitator is not None else 'all']
    return get_cached_stats(key_parts, build)


def get_report_totals(reports):
    """
    Count and total saved over a report queryset.

    Returns:
        dict: {'report_count': n, 'total_saved': Decimal}
    """
    from django.db.models import Count, Sum

    aggregates = reports.aggregate(report_count=Count('id'), total_saved=Sum('amount_saved'))
    return {
        'report_count': aggregates['report_count'] or 0,
        'total_saved': aggregates['total_saved'] or Decimal('0.00'),
    }


def get_demographics(groups):
    """Summed demographics over a group queryset (all groups, no period rule)"""
    from django.db.models import Sum

    aggregates = groups.aggregate(
        total_members=Sum('total_members'),
        total_men=Sum('men'),
        total_women=Sum('women'),
        total_boys=Sum('boys'),
        total_girls=Sum('girls'),
    )
    return {
        'total_members': aggregates['total_members'] or 0,
        'total_men': aggregates['total_men'] or 0,
        'total_women': aggregates['total_women'] or 0,
        'total_children': (aggregates['total_boys'] or 0) + (aggregates['total_girls'] or 0),
    }


def get_reports_for_user(user, year=None, month=None):
    """
    Monthly reports over the groups in the acting user's scope, newest first,
    optionally restricted to one period.
    """
    from savings_groups.utils import get_groups_for_user
    from .models import MonthlyReport

    reports = MonthlyReport.objects.filter(
        group__in=get_groups_for_user(user)
    ).select_related('group', 'facilitator').order_by('-year', '-month', '-id')

    if year is not None:
        reports = reports.filter(year=year)
    if month is not None:
        reports = reports.filter(month=month)

    return reports
