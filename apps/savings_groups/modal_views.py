# savings_groups/modal_views.py

"""
Savings Group Modal Action Views

1. _modal (GET) - Loads the confirmation modal
2. _submit (POST) - Runs the delete and redirects through HX-Redirect
"""

from django.shortcuts import render, get_object_or_404
from django.urls import reverse
from django.views.decorators.http import require_http_methods
import logging

from .models import SavingsGroup, Cycle
from accounts.decorators import facilitator_required
from core.utils import create_error_response, create_redirect_response

logger = logging.getLogger(__name__)


# =============================================================================
# GROUP MODALS
# =============================================================================

@facilitator_required
@require_http_methods(["GET"])
def group_delete_modal(request, pk):
    """Load delete group modal"""
    group = get_object_or_404(SavingsGroup, pk=pk, facilitator=request.user)

    context = {
        'group': group,
        'cycle_count': group.cycles.count(),
        'report_count': group.reports.count(),
    }
    return render(request, 'savings_groups/modals/_group_delete_modal.html', context)


@facilitator_required
@require_http_methods(["POST"])
def group_delete_submit(request, pk):
    """Delete a group with its cycles, participations and reports"""
    group = get_object_or_404(SavingsGroup, pk=pk, facilitator=request.user)

    try:
        group_name = group.name
        group.delete()

        logger.info(f"Savings group {group_name} deleted by {request.user.username}")

        return create_redirect_response(
            redirect_url=reverse('savings_groups:group_list'),
            message=f"Grupo '{group_name}' eliminado",
            title='Grupo eliminado'
        )

    except Exception as e:
        logger.error(f"Error deleting group {pk}: {e}")
        return create_error_response(
            message=f"Error al eliminar el grupo: {str(e)}",
            title='No se pudo eliminar'
        )


# =============================================================================
# CYCLE MODALS
# =============================================================================

@facilitator_required
@require_http_methods(["GET"])
def cycle_delete_modal(request, pk):
    """Load delete cycle modal"""
    cycle = get_object_or_404(Cycle.objects.select_related('group'), pk=pk, group__facilitator=request.user)

    context = {
        'cycle': cycle,
        'participant_count': cycle.participants.count(),
    }
    return render(request, 'savings_groups/modals/_cycle_delete_modal.html', context)


@facilitator_required
@require_http_methods(["POST"])
def cycle_delete_submit(request, pk):
    """Delete a cycle with its participations and movements"""
    cycle = get_object_or_404(Cycle.objects.select_related('group'), pk=pk, group__facilitator=request.user)
    group_pk = cycle.group_id

    try:
        cycle_name = cycle.name
        cycle.delete()

        logger.info(f"Cycle {cycle_name} of group {group_pk} deleted")

        return create_redirect_response(
            redirect_url=reverse('savings_groups:group_detail', kwargs={'pk': group_pk}),
            message=f"Ciclo '{cycle_name}' eliminado",
            title='Ciclo eliminado'
        )

    except Exception as e:
        logger.error(f"Error deleting cycle {pk}: {e}")
        return create_error_response(
            message=f"Error al eliminar el ciclo: {str(e)}",
            title='No se pudo eliminar'
        )
