# savers/stats.py

from django.db.models import Sum
from decimal import Decimal
import logging

from .models import Participant, Movement
from core.utils import format_money

logger = logging.getLogger(__name__)


def get_participant_ranking(cycle):
    """
    Participants of a cycle ranked by total saved, highest first.

    Returns:
        list of dicts: rank, participant, user, name, total_saved,
        total_saved_formatted
    """
    totals = {
        row['user_id']: row['total']
        for row in Movement.objects.filter(cycle=cycle).values('user_id').annotate(total=Sum('amount'))
    }

    rows = []
    for participant in Participant.objects.filter(cycle=cycle).select_related('user'):
        total = totals.get(participant.user_id) or Decimal('0.00')
        rows.append({
            'participant': participant,
            'user': participant.user,
            'name': participant.user.get_full_name() or participant.user.email,
            'total_saved': total,
            'total_saved_formatted': format_money(total),
        })

    rows.sort(key=lambda row: (-row['total_saved'], row['name'].lower()))
    for rank, row in enumerate(rows, start=1):
        row['rank'] = rank

    return rows


def get_saver_movements(participant):
    """The saver's movements in their cycle (newest first) and their total"""
    movements = list(
        Movement.objects
        .filter(cycle=participant.cycle, user=participant.user)
        .order_by('-date', '-id')
    )
    total = sum((movement.amount for movement in movements), Decimal('0.00'))

    return {
        'movements': movements,
        'movement_count': len(movements),
        'total_saved': total,
        'total_saved_formatted': format_money(total),
    }
