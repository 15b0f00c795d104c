# savers/models.py

from django.contrib.auth.models import User
from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import logging

from utils.models import BaseModel
from savings_groups.models import Cycle
from core.utils import format_money

logger = logging.getLogger(__name__)


# =============================================================================
# PARTICIPANT MODEL
# =============================================================================

class Participant(BaseModel):
    """A saver taking part in one cycle. A saver is in at most one cycle at a time."""

    cycle = models.ForeignKey(Cycle, on_delete=models.CASCADE, related_name='participants')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='participations')
    personal_purpose = models.CharField("Propósito personal", max_length=500, blank=True, default='')
    personal_goal = models.DecimalField(
        "Meta de ahorro personal",
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
    )

    def get_total_saved(self):
        """Sum of this saver's movements in the cycle"""
        total = Movement.objects.filter(cycle=self.cycle, user=self.user).aggregate(
            total=models.Sum('amount')
        )['total']
        return total or Decimal('0.00')

    @property
    def formatted_total_saved(self):
        return format_money(self.get_total_saved())

    def __str__(self):
        return f"{self.user.username} - {self.cycle.name}"

    class Meta:
        db_table = 'participantes_ciclo'
        verbose_name = 'Participant'
        verbose_name_plural = 'Participants'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['cycle', 'user'], name='unique_participant_per_cycle'),
        ]


# =============================================================================
# MOVEMENT MODEL
# =============================================================================

class Movement(BaseModel):
    """One contribution recorded by a saver at a group meeting"""

    cycle = models.ForeignKey(Cycle, on_delete=models.CASCADE, related_name='movements')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='movements')
    date = models.DateField("Fecha")
    amount = models.DecimalField(
        "Monto",
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    note = models.CharField("Nota", max_length=255, blank=True, default='')

    @property
    def formatted_amount(self):
        return format_money(self.amount)

    def __str__(self):
        return f"{self.user.username} {self.date}: {self.amount}"

    class Meta:
        db_table = 'movimientos_ahorro'
        verbose_name = 'Movement'
        verbose_name_plural = 'Movements'
        ordering = ['-date', '-id']
