# savers/services.py

"""
Saver Business Logic Services

Every write a saver makes goes through one of these services so that the
rules (one participation at a time, active cycle only, clean exit) live in
one place. Each service returns (success, result_or_error_message).
"""

from django.db import transaction
from decimal import Decimal
import logging

from .models import Participant, Movement
from savings_groups.models import Cycle

logger = logging.getLogger(__name__)


def get_current_participation(user):
    """The saver's participation (at most one), with cycle and group loaded"""
    return (
        Participant.objects
        .filter(user=user)
        .select_related('cycle', 'cycle__group', 'cycle__group__facilitator')
        .order_by('-id')
        .first()
    )


# =============================================================================
# PARTICIPATION SERVICES
# =============================================================================

class ParticipationService:
    """Joining, updating and leaving a cycle"""

    @staticmethod
    @transaction.atomic
    def join_cycle(user, group):
        """
        Join the group's latest cycle, which must be active.

        Returns:
            tuple: (success, participant_or_error_message)
        """
        # The latest cycle decides, as for the group's badge
        active_cycle = group.latest_cycle
        if active_cycle is None or not active_cycle.is_active:
            return False, "Este grupo no tiene un ciclo activo"

        if Participant.objects.filter(user=user).exists():
            return False, "Ya estás participando en un grupo. Solo puedes estar en un grupo a la vez."

        try:
            participant = Participant.objects.create(
                cycle=active_cycle,
                user=user,
                personal_purpose='',
                personal_goal=Decimal('0.00'),
            )
            logger.info(f"User {user.username} joined cycle {active_cycle.pk} of group {group.name}")
            return True, participant

        except Exception as e:
            logger.error(f"Error joining cycle for {user.username}: {e}")
            return False, str(e)

    @staticmethod
    def update_purpose(participant, purpose, goal=None):
        """
        Update the saver's personal purpose and, when given, the savings goal.

        Returns:
            tuple: (success, participant_or_error_message)
        """
        purpose = (purpose or '').strip()
        if not purpose:
            return False, "El propósito es requerido"
        if len(purpose) > 500:
            return False, "El propósito no puede exceder los 500 caracteres"
        if goal is not None and goal < 0:
            return False, "La meta no puede ser negativa"

        try:
            participant.personal_purpose = purpose
            update_fields = ['personal_purpose', 'updated_at']
            if goal is not None:
                participant.personal_goal = goal
                update_fields.append('personal_goal')
            participant.save(update_fields=update_fields)

            logger.info(f"Purpose updated for participant {participant.pk}")
            return True, participant

        except Exception as e:
            logger.error(f"Error updating purpose for participant {participant.pk}: {e}")
            return False, str(e)

    @staticmethod
    @transaction.atomic
    def start_new_cycle(user, participant):
        """
        Leave a terminated cycle: delete the saver's movements, then the
        participation. Any failure rolls back both deletes.

        Returns:
            tuple: (success, deleted_movement_count_or_error_message)
        """
        if participant.user_id != user.pk:
            return False, "Esta participación no te pertenece"

        if participant.cycle.status != Cycle.TERMINATED:
            return False, "Solo puedes empezar de nuevo cuando el ciclo ha terminado"

        try:
            deleted, _ = Movement.objects.filter(cycle=participant.cycle, user=user).delete()
            participant.delete()

            logger.info(f"User {user.username} left cycle {participant.cycle_id} ({deleted} movements removed)")
            return True, deleted

        except Exception as e:
            logger.error(f"Error leaving cycle for {user.username}: {e}")
            transaction.set_rollback(True)
            return False, str(e)


# =============================================================================
# MOVEMENT SERVICES
# =============================================================================

class MovementService:
    """Contributions recorded by a saver in their current cycle"""

    @staticmethod
    def _validate(participant, amount):
        if participant.cycle.status != Cycle.ACTIVE:
            return False, "El ciclo ha terminado. No se pueden registrar movimientos."
        if amount is None or amount < 0:
            return False, "El monto no puede ser negativo"
        return True, None

    @staticmethod
    @transaction.atomic
    def record_movement(participant, date, amount, note=''):
        """
        Record a contribution in the participant's cycle.

        Returns:
            tuple: (success, movement_or_error_message)
        """
        is_valid, message = MovementService._validate(participant, amount)
        if not is_valid:
            return False, message

        try:
            movement = Movement.objects.create(
                cycle=participant.cycle,
                user=participant.user,
                date=date,
                amount=amount,
                note=note or '',
            )
            logger.info(f"Movement {movement.pk} recorded: {amount} for {participant.user.username}")
            return True, movement

        except Exception as e:
            logger.error(f"Error recording movement: {e}")
            return False, str(e)

    @staticmethod
    @transaction.atomic
    def update_movement(movement, participant, date, amount, note=''):
        """Returns: tuple (success, movement_or_error_message)"""
        if movement.user_id != participant.user_id or movement.cycle_id != participant.cycle_id:
            return False, "Este movimiento no te pertenece"

        is_valid, message = MovementService._validate(participant, amount)
        if not is_valid:
            return False, message

        try:
            movement.date = date
            movement.amount = amount
            movement.note = note or ''
            movement.save()

            logger.info(f"Movement {movement.pk} updated")
            return True, movement

        except Exception as e:
            logger.error(f"Error updating movement {movement.pk}: {e}")
            return False, str(e)

    @staticmethod
    def delete_movement(movement, user):
        """Returns: tuple (success, None_or_error_message)"""
        if movement.user_id != user.pk:
            return False, "Este movimiento no te pertenece"

        try:
            movement_id = movement.pk
            movement.delete()
            logger.info(f"Movement {movement_id} deleted by {user.username}")
            return True, None

        except Exception as e:
            logger.error(f"Error deleting movement {movement.pk}: {e}")
            return False, str(e)
