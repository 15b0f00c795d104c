# reports/models.py

from django.contrib.auth.models import User
from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal
import logging

from utils.models import BaseModel
from savings_groups.models import SavingsGroup
from core.utils import format_money, get_month_name

logger = logging.getLogger(__name__)


# =============================================================================
# MONTHLY REPORT MODEL
# =============================================================================

class MonthlyReport(BaseModel):
    """
    A facilitator's report of one group's activity in one month.

    (group, year, month) is not unique: an amendment is a new row and every
    row for the period is summed by the statistics.
    """

    group = models.ForeignKey(SavingsGroup, on_delete=models.CASCADE, related_name='reports')
    facilitator = models.ForeignKey(User, on_delete=models.CASCADE, related_name='monthly_reports')

    year = models.PositiveSmallIntegerField(
        "Año",
        validators=[MinValueValidator(2020), MaxValueValidator(2100)],
    )
    month = models.PositiveSmallIntegerField(
        "Mes",
        validators=[MinValueValidator(1), MaxValueValidator(12)],
    )

    meetings_count = models.PositiveIntegerField("Número de reuniones", default=0)
    average_attendance = models.DecimalField(
        "Promedio de asistencia",
        max_digits=8,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    amount_saved = models.DecimalField(
        "Cantidad ahorrada",
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    comments = models.TextField("Comentarios", blank=True, default='')

    @property
    def month_name(self):
        return get_month_name(self.month)

    @property
    def period_label(self):
        return f"{self.month_name} {self.year}"

    @property
    def formatted_amount_saved(self):
        return format_money(self.amount_saved)

    def __str__(self):
        return f"{self.group.name} - {self.period_label}"

    class Meta:
        db_table = 'reportes_grupos'
        verbose_name = 'Monthly Report'
        verbose_name_plural = 'Monthly Reports'
        ordering = ['-year', '-month', '-id']

        indexes = [
            models.Index(fields=['year', 'month'], name='reportes_gr_year_5e2a41_idx'),
            models.Index(fields=['facilitator', 'year', 'month'], name='reportes_gr_facilit_8d9b13_idx'),
        ]
