# savers/modal_views.py

"""
Saver Modal Action Views

Each action has two views:
1. _modal (GET) - Loads the confirmation modal
2. _submit (POST) - Runs the action and answers with sweetalert headers
"""

from django.shortcuts import render, get_object_or_404
from django.urls import reverse
from django.views.decorators.http import require_http_methods
import logging

from .models import Movement
from .services import ParticipationService, MovementService, get_current_participation
from accounts.decorators import saver_required
from core.utils import create_error_response, create_redirect_response

logger = logging.getLogger(__name__)


# =============================================================================
# MOVEMENT MODALS
# =============================================================================

@saver_required
@require_http_methods(["GET"])
def movement_delete_modal(request, pk):
    """Load delete movement modal"""
    movement = get_object_or_404(Movement, pk=pk, user=request.user)
    return render(request, 'savers/modals/_movement_delete_modal.html', {'movement': movement})


@saver_required
@require_http_methods(["POST"])
def movement_delete_submit(request, pk):
    """Delete one of the saver's movements"""
    movement = get_object_or_404(Movement, pk=pk, user=request.user)

    success, result = MovementService.delete_movement(movement, request.user)
    if not success:
        return create_error_response(message=result, title='No se pudo eliminar')

    return create_redirect_response(
        redirect_url=reverse('savers:dashboard'),
        message="Reunión eliminada",
        title='Eliminado'
    )


# =============================================================================
# NEW CYCLE MODAL
# =============================================================================

@saver_required
@require_http_methods(["GET"])
def new_cycle_modal(request):
    """Confirm leaving a terminated cycle"""
    participant = get_current_participation(request.user)
    return render(request, 'savers/modals/_new_cycle_modal.html', {'participant': participant})


@saver_required
@require_http_methods(["POST"])
def new_cycle_submit(request):
    """Delete the saver's movements and participation so they can join again"""
    participant = get_current_participation(request.user)
    if participant is None:
        return create_error_response(message="No estás participando en ningún grupo")

    success, result = ParticipationService.start_new_cycle(request.user, participant)
    if not success:
        return create_error_response(message=result, title='No se pudo reiniciar')

    return create_redirect_response(
        redirect_url=reverse('savers:dashboard'),
        message="Información eliminada. Listo para un nuevo ciclo.",
        title='Nuevo ciclo'
    )
