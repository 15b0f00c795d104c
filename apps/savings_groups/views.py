# savings_groups/views.py

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db.models import Prefetch
from django.http import Http404
import logging

from .models import SavingsGroup, Cycle
from .forms import SavingsGroupForm, CycleForm
from .utils import (
    get_groups_for_user,
    classify_cycle_status,
    get_cycle_status_counts,
    CYCLE_STATUS_LABELS,
)
from accounts.decorators import facilitator_required
from reports.stats import get_report_totals
from utils.forms import get_form_errors_as_string

logger = logging.getLogger(__name__)


def _get_own_group(request, pk):
    return get_object_or_404(SavingsGroup, pk=pk, facilitator=request.user)


# =============================================================================
# SAVINGS GROUPS
# =============================================================================

@facilitator_required
def group_list(request):
    """The facilitator's groups with their cycle badge"""
    groups = list(
        SavingsGroup.objects
        .filter(facilitator=request.user)
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

    context = {
        'group_rows': group_rows,
        'status_counts': get_cycle_status_counts(groups),
        'title': 'Mis grupos de ahorro',
    }
    return render(request, 'savings_groups/group_list.html', context)


@facilitator_required
def group_create(request):
    """Create a new savings group owned by the facilitator"""
    if request.method == "POST":
        form = SavingsGroupForm(request.POST)
        if form.is_valid():
            group = form.save(commit=False)
            group.facilitator = request.user
            group.save()

            logger.info(f"Savings group '{group.name}' created by {request.user.username}")
            messages.success(
                request,
                f"Grupo '{group.name}' creado exitosamente",
                extra_tags='sweetalert'
            )
            return redirect("savings_groups:group_detail", pk=group.pk)
        else:
            messages.error(
                request,
                "Por favor corrige los errores del formulario",
                extra_tags='sweetalert-error'
            )
    else:
        form = SavingsGroupForm()

    context = {
        'form': form,
        'title': 'Crear grupo de ahorro',
    }
    return render(request, 'savings_groups/group_form.html', context)


@facilitator_required
def group_edit(request, pk):
    """Edit one of the facilitator's groups"""
    group = _get_own_group(request, pk)

    if request.method == "POST":
        form = SavingsGroupForm(request.POST, instance=group)
        if form.is_valid():
            group = form.save()
            messages.success(
                request,
                f"Grupo '{group.name}' actualizado exitosamente",
                extra_tags='sweetalert'
            )
            return redirect("savings_groups:group_detail", pk=group.pk)
        else:
            messages.error(
                request,
                "Por favor corrige los errores del formulario",
                extra_tags='sweetalert-error'
            )
    else:
        form = SavingsGroupForm(instance=group)

    context = {
        'form': form,
        'group': group,
        'title': 'Editar grupo de ahorro',
    }
    return render(request, 'savings_groups/group_form.html', context)


@login_required
def group_detail(request, pk):
    """
    Group detail for anyone whose scope includes the group: cycle history,
    reports and the participants of the current cycle.
    """
    group = get_groups_for_user(request.user).filter(pk=pk).first()
    if group is None:
        raise Http404("Grupo no encontrado")

    cycles = list(group.cycles.order_by('-id'))
    latest_cycle = cycles[0] if cycles else None
    status = classify_cycle_status(cycles)
    reports = group.reports.select_related('facilitator').order_by('-year', '-month', '-id')

    context = {
        'group': group,
        'cycles': cycles,
        'latest_cycle': latest_cycle,
        'cycle_status': status,
        'cycle_status_label': CYCLE_STATUS_LABELS[status],
        'participant_count': latest_cycle.participants.count() if latest_cycle else 0,
        'reports': reports[:12],
        'report_totals': get_report_totals(reports),
        'is_owner': group.facilitator_id == request.user.pk,
    }
    return render(request, 'savings_groups/group_detail.html', context)


# =============================================================================
# CYCLES
# =============================================================================

@facilitator_required
def cycle_create(request, group_pk):
    """Start a new cycle for one of the facilitator's groups"""
    group = _get_own_group(request, group_pk)

    if request.method == "POST":
        form = CycleForm(request.POST, group=group)
        if form.is_valid():
            cycle = form.save(commit=False)
            cycle.created_by = request.user
            cycle.save()

            logger.info(f"Cycle '{cycle.name}' created for group {group.name}")
            messages.success(request, "Ciclo creado exitosamente", extra_tags='sweetalert')
            return redirect("savings_groups:group_detail", pk=group.pk)
        else:
            messages.error(request, get_form_errors_as_string(form), extra_tags='sweetalert-error')
    else:
        form = CycleForm(group=group)

    context = {
        'form': form,
        'group': group,
        'title': 'Crear ciclo',
    }
    return render(request, 'savings_groups/cycle_form.html', context)


@facilitator_required
def cycle_edit(request, pk):
    """Manage a cycle: rename, change dates or terminate it"""
    cycle = get_object_or_404(Cycle.objects.select_related('group'), pk=pk, group__facilitator=request.user)

    if request.method == "POST":
        form = CycleForm(request.POST, instance=cycle, group=cycle.group)
        if form.is_valid():
            cycle = form.save()
            messages.success(request, "Ciclo actualizado exitosamente", extra_tags='sweetalert')
            return redirect("savings_groups:group_detail", pk=cycle.group_id)
        else:
            messages.error(request, get_form_errors_as_string(form), extra_tags='sweetalert-error')
    else:
        form = CycleForm(instance=cycle, group=cycle.group)

    context = {
        'form': form,
        'group': cycle.group,
        'cycle': cycle,
        'title': 'Gestionar ciclo',
    }
    return render(request, 'savings_groups/cycle_form.html', context)
