# core/views.py

"""
Role dashboards.

home() sends every signed-in user to the dashboard of their role; the
coordinator and director pages drill down into facilitators and
coordinators inside their scope.
"""

from django.shortcuts import render, redirect
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db.models import Prefetch
from django.http import Http404
import logging

from accounts.models import UserProfile, get_user_role
from accounts.decorators import (
    role_required,
    facilitator_required,
    coordinator_required,
    director_required,
)
from savings_groups.models import SavingsGroup, Cycle
from savings_groups.utils import (
    get_facilitators_for_user,
    get_scope_label,
    classify_cycle_status,
    CYCLE_STATUS_LABELS,
)
from reports.forms import PeriodFilterForm
from reports.models import MonthlyReport
from reports.stats import get_scoped_monthly_summary, get_report_totals
from .stats import (
    get_dashboard_stats,
    get_group_overview,
    get_facilitator_rows,
    get_coordinator_rows,
)
from core.utils import parse_period, paginate_queryset, get_month_name

logger = logging.getLogger(__name__)


DASHBOARD_BY_ROLE = {
    UserProfile.FACILITATOR: 'core:facilitator_dashboard',
    UserProfile.COORDINATOR: 'core:coordinator_dashboard',
    UserProfile.DIRECTOR: 'core:director_dashboard',
    UserProfile.SAVER: 'savers:dashboard',
}


def _dashboard_context(request):
    """Headline stats plus the selected month's summary for the acting user"""
    year, month = parse_period(request)
    context = {
        'year': year,
        'month': month,
        'month_name': get_month_name(month),
        'period_form': PeriodFilterForm(initial={'year': year, 'month': month}),
        'scope_label': get_scope_label(request.user),
        'stats': {},
        'summary': None,
    }

    try:
        context['stats'] = get_dashboard_stats(request.user)
        context['summary'] = get_scoped_monthly_summary(request.user, year, month)
    except Exception as e:
        logger.error(f"Error loading dashboard for {request.user.username}: {e}")
        messages.error(request, "No se pudieron cargar las estadísticas", extra_tags='sweetalert-error')

    return context


# =============================================================================
# HOME
# =============================================================================

@login_required
def home(request):
    """Redirect to the dashboard of the user's role"""
    role = get_user_role(request.user)
    if role is None:
        profile, _ = UserProfile.objects.get_or_create(user=request.user)
        logger.warning(f"Created missing profile for {request.user.username}")
        role = profile.role
    return redirect(DASHBOARD_BY_ROLE[role])


# =============================================================================
# DASHBOARDS
# =============================================================================

@facilitator_required
def facilitator_dashboard(request):
    """Facilitator: own groups, reports, total saved and the month's summary"""
    context = _dashboard_context(request)
    context['recent_reports'] = (
        MonthlyReport.objects
        .filter(facilitator=request.user)
        .select_related('group')
        .order_by('-year', '-month', '-id')[:5]
    )
    return render(request, 'core/facilitator_dashboard.html', context)


@coordinator_required
def coordinator_dashboard(request):
    """Coordinator: facilitators in the zone, their groups and cycle badges"""
    context = _dashboard_context(request)
    return render(request, 'core/coordinator_dashboard.html', context)


@director_required
def director_dashboard(request):
    """Director: the whole country at a glance"""
    context = _dashboard_context(request)
    return render(request, 'core/director_dashboard.html', context)


# =============================================================================
# FACILITATORS & COORDINATORS
# =============================================================================

@role_required(UserProfile.COORDINATOR, UserProfile.DIRECTOR)
def facilitator_list(request):
    """Facilitators in the acting user's zone or country with their totals"""
    try:
        rows = get_facilitator_rows(request.user)
    except Exception as e:
        logger.error(f"Error loading facilitators for {request.user.username}: {e}")
        messages.error(request, "No se pudieron cargar los facilitadores", extra_tags='sweetalert-error')
        rows = []

    context = {
        'facilitator_rows': rows,
        'scope_label': get_scope_label(request.user),
        'title': 'Facilitadores',
    }
    return render(request, 'core/facilitator_list.html', context)


@role_required(UserProfile.COORDINATOR, UserProfile.DIRECTOR)
def facilitator_detail(request, pk):
    """One facilitator's groups, reports and monthly summary"""
    facilitator = get_facilitators_for_user(request.user).filter(pk=pk).select_related('profile').first()
    if facilitator is None:
        raise Http404("Facilitador no encontrado")

    year, month = parse_period(request)
    groups = (
        SavingsGroup.objects
        .filter(facilitator=facilitator)
        .prefetch_related(Prefetch('cycles', queryset=Cycle.objects.order_by('-id')))
        .order_by('name')
    )

    group_rows = []
    for group in groups:
        cycles = list(group.cycles.all())
        status = classify_cycle_status(cycles)
        group_rows.append({
            'group': group,
            'latest_cycle': cycles[0] if cycles else None,
            'cycle_status': status,
            'cycle_status_label': CYCLE_STATUS_LABELS[status],
        })

    reports = (
        MonthlyReport.objects
        .filter(facilitator=facilitator)
        .select_related('group')
        .order_by('-year', '-month', '-id')
    )
    report_rows, window = paginate_queryset(request, reports)

    summary = None
    try:
        summary = get_scoped_monthly_summary(request.user, year, month, facilitator=facilitator)
    except Exception as e:
        logger.error(f"Error loading summary of facilitator {pk}: {e}")
        messages.error(request, "No se pudieron cargar las estadísticas", extra_tags='sweetalert-error')

    context = {
        'facilitator': facilitator,
        'facilitator_name': facilitator.get_full_name() or facilitator.email,
        'group_rows': group_rows,
        'overview': get_group_overview(groups),
        'reports': report_rows,
        'pagination': window,
        'report_totals': get_report_totals(reports),
        'summary': summary,
        'year': year,
        'month': month,
        'month_name': get_month_name(month),
        'period_form': PeriodFilterForm(initial={'year': year, 'month': month}),
    }
    return render(request, 'core/facilitator_detail.html', context)


@director_required
def coordinator_list(request):
    """Coordinators in the director's country with per-zone totals"""
    try:
        rows = get_coordinator_rows(request.user)
    except Exception as e:
        logger.error(f"Error loading coordinators for {request.user.username}: {e}")
        messages.error(request, "No se pudieron cargar los coordinadores", extra_tags='sweetalert-error')
        rows = []

    context = {
        'coordinator_rows': rows,
        'scope_label': get_scope_label(request.user),
        'title': 'Coordinadores',
    }
    return render(request, 'core/coordinator_list.html', context)
