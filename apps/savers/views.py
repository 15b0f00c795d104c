# savers/views.py

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib import messages
from django.views.decorators.http import require_POST
import logging

from .models import Movement
from .forms import PurposeForm, MovementForm
from .services import ParticipationService, MovementService, get_current_participation
from .stats import get_participant_ranking, get_saver_movements
from accounts.decorators import saver_required
from savings_groups.models import SavingsGroup
from savings_groups.forms import GroupSearchForm
from utils.forms import get_form_errors_as_string

logger = logging.getLogger(__name__)


# =============================================================================
# DASHBOARD
# =============================================================================

@saver_required
def saver_dashboard(request):
    """
    The saver's home: their group card when participating in a cycle,
    otherwise the group search to join one.
    """
    participant = get_current_participation(request.user)

    context = {
        'participant': participant,
        'search_form': GroupSearchForm(request.GET or None),
    }

    if participant is not None:
        cycle = participant.cycle
        context.update({
            'group': cycle.group,
            'cycle': cycle,
            'ranking': get_participant_ranking(cycle),
            **get_saver_movements(participant),
        })

    return render(request, 'savers/dashboard.html', context)


@saver_required
@require_POST
def join_group(request, group_pk):
    """Join the active cycle of a group"""
    group = get_object_or_404(SavingsGroup, pk=group_pk)

    success, result = ParticipationService.join_cycle(request.user, group)
    if success:
        messages.success(request, "Te has unido al grupo exitosamente", extra_tags='sweetalert')
    else:
        messages.error(request, result, extra_tags='sweetalert-error')

    return redirect('savers:dashboard')


# =============================================================================
# PURPOSE
# =============================================================================

@saver_required
def purpose_update(request):
    """Edit the saver's personal purpose and goal"""
    participant = get_current_participation(request.user)
    if participant is None:
        messages.error(request, "No estás participando en ningún grupo", extra_tags='sweetalert-error')
        return redirect('savers:dashboard')

    if request.method == "POST":
        form = PurposeForm(request.POST, instance=participant)
        if form.is_valid():
            success, result = ParticipationService.update_purpose(
                participant,
                form.cleaned_data['personal_purpose'],
                form.cleaned_data['personal_goal'],
            )
            if success:
                messages.success(request, "Propósito actualizado exitosamente", extra_tags='sweetalert')
                return redirect('savers:dashboard')
            messages.error(request, result, extra_tags='sweetalert-error')
        else:
            messages.error(request, get_form_errors_as_string(form), extra_tags='sweetalert-error')
    else:
        form = PurposeForm(instance=participant)

    context = {
        'form': form,
        'participant': participant,
        'title': 'Actualizar propósito',
    }
    return render(request, 'savers/purpose_form.html', context)


# =============================================================================
# MOVEMENTS
# =============================================================================

@saver_required
def movement_create(request):
    """Register a contribution in the current cycle"""
    participant = get_current_participation(request.user)
    if participant is None:
        messages.error(request, "No estás participando en ningún grupo", extra_tags='sweetalert-error')
        return redirect('savers:dashboard')

    if request.method == "POST":
        form = MovementForm(request.POST)
        if form.is_valid():
            success, result = MovementService.record_movement(
                participant,
                form.cleaned_data['date'],
                form.cleaned_data['amount'],
                form.cleaned_data['note'],
            )
            if success:
                messages.success(request, "Movimiento registrado exitosamente", extra_tags='sweetalert')
                return redirect('savers:dashboard')
            messages.error(request, result, extra_tags='sweetalert-error')
        else:
            messages.error(request, get_form_errors_as_string(form), extra_tags='sweetalert-error')
    else:
        form = MovementForm()

    context = {
        'form': form,
        'participant': participant,
        'title': 'Registrar movimiento',
    }
    return render(request, 'savers/movement_form.html', context)


@saver_required
def movement_edit(request, pk):
    """Edit one of the saver's own movements"""
    movement = get_object_or_404(Movement, pk=pk, user=request.user)
    participant = get_current_participation(request.user)
    if participant is None:
        messages.error(request, "No estás participando en ningún grupo", extra_tags='sweetalert-error')
        return redirect('savers:dashboard')

    if request.method == "POST":
        form = MovementForm(request.POST, instance=movement)
        if form.is_valid():
            # Service applies the change to the instance the form already holds
            success, result = MovementService.update_movement(
                movement,
                participant,
                form.cleaned_data['date'],
                form.cleaned_data['amount'],
                form.cleaned_data['note'],
            )
            if success:
                messages.success(request, "Movimiento actualizado", extra_tags='sweetalert')
                return redirect('savers:dashboard')
            messages.error(request, result, extra_tags='sweetalert-error')
        else:
            messages.error(request, get_form_errors_as_string(form), extra_tags='sweetalert-error')
    else:
        form = MovementForm(instance=movement)

    context = {
        'form': form,
        'movement': movement,
        'participant': participant,
        'title': 'Editar movimiento',
    }
    return render(request, 'savers/movement_form.html', context)
