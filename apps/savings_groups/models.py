# savings_groups/models.py

from django.contrib.auth.models import User
from django.db import models
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from django_countries.fields import CountryField
from dateutil.relativedelta import relativedelta
import logging

from utils.models import BaseModel

logger = logging.getLogger(__name__)


# =============================================================================
# SAVINGS GROUP MODEL
# =============================================================================

class SavingsGroup(BaseModel):
    """
    A community savings group run by one facilitator.

    The member total is expected to equal men + women + boys + girls. The
    group form computes it from the four counts; the database does not
    enforce it.
    """

    SIMPLE = 'Simple'
    ROSCA = 'Rosca'
    ASCA = 'Asca'

    SAVINGS_TYPE_CHOICES = (
        (SIMPLE, 'Simple'),
        (ROSCA, 'Rosca'),
        (ASCA, 'Asca'),
    )

    # -------------------------------------------------------------------------
    # BASIC INFORMATION
    # -------------------------------------------------------------------------

    name = models.CharField("Nombre del grupo", max_length=200, db_index=True)
    facilitator = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='savings_groups',
    )
    savings_type = models.CharField(
        "Tipo de ahorro",
        max_length=10,
        choices=SAVINGS_TYPE_CHOICES,
        default=SIMPLE,
    )
    is_youth_group = models.BooleanField("Grupo juvenil", default=False)

    # -------------------------------------------------------------------------
    # LOCATION
    # -------------------------------------------------------------------------

    operating_country = CountryField("País de operación", default='CO', db_index=True)
    operating_city = models.CharField("Ciudad de operación", max_length=100)
    operating_zone = models.CharField("Zona de operación", max_length=100, blank=True, default='')

    # -------------------------------------------------------------------------
    # COMPOSITION
    # -------------------------------------------------------------------------

    total_members = models.PositiveIntegerField("Total de miembros", default=0)
    men = models.PositiveIntegerField("Hombres", default=0)
    women = models.PositiveIntegerField("Mujeres", default=0)
    boys = models.PositiveIntegerField("Niños", default=0)
    girls = models.PositiveIntegerField("Niñas", default=0)

    # -------------------------------------------------------------------------
    # CREATION PERIOD & CYCLE
    # -------------------------------------------------------------------------

    creation_year = models.PositiveSmallIntegerField(
        "Año de creación",
        null=True,
        blank=True,
        validators=[MinValueValidator(2000), MaxValueValidator(2100)],
    )
    creation_month = models.PositiveSmallIntegerField(
        "Mes de creación",
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(12)],
    )
    cycle_duration_months = models.PositiveSmallIntegerField(
        "Duración del ciclo (meses)",
        default=12,
        validators=[MinValueValidator(1)],
    )

    # -------------------------------------------------------------------------
    # PROPERTIES
    # -------------------------------------------------------------------------

    @property
    def total_children(self):
        return (self.boys or 0) + (self.girls or 0)

    @property
    def demographic_total(self):
        """Sum of the four demographic counts"""
        return (self.men or 0) + (self.women or 0) + self.total_children

    @property
    def latest_cycle(self):
        """The current cycle: the one with the highest id"""
        return self.cycles.order_by('-id').first()

    @property
    def cycle_status(self):
        """WITHOUT_CYCLE / ACTIVE / TERMINATED badge for this group"""
        from .utils import classify_cycle_status
        return classify_cycle_status(self.cycles.all())

    def has_active_cycle(self):
        return self.cycles.filter(status=Cycle.ACTIVE).exists()

    def __str__(self):
        return f"{self.name} ({self.savings_type})"

    class Meta:
        db_table = 'grupos_ahorro'
        verbose_name = 'Savings Group'
        verbose_name_plural = 'Savings Groups'
        ordering = ['name']

        indexes = [
            models.Index(fields=['facilitator', 'name'], name='grupos_ahor_facilit_6a1f0e_idx'),
            models.Index(fields=['creation_year', 'creation_month'], name='grupos_ahor_creatio_3b7c2d_idx'),
        ]


# =============================================================================
# CYCLE MODEL
# =============================================================================

class Cycle(BaseModel):
    """A bounded period of group operation; savers join the active one"""

    ACTIVE = 'ACTIVE'
    TERMINATED = 'TERMINATED'

    STATUS_CHOICES = (
        (ACTIVE, 'Activo'),
        (TERMINATED, 'Terminado'),
    )

    group = models.ForeignKey(SavingsGroup, on_delete=models.CASCADE, related_name='cycles')
    name = models.CharField("Nombre del ciclo", max_length=200)
    start_date = models.DateField("Fecha de inicio")
    end_date = models.DateField("Fecha de fin", null=True, blank=True)
    status = models.CharField("Estado", max_length=12, choices=STATUS_CHOICES, default=ACTIVE, db_index=True)
    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_cycles',
    )

    # -------------------------------------------------------------------------
    # PROPERTIES
    # -------------------------------------------------------------------------

    @property
    def is_active(self):
        return self.status == self.ACTIVE

    @property
    def is_terminated(self):
        return self.status == self.TERMINATED

    @property
    def expected_end_date(self):
        """Explicit end date, or start date plus the group's cycle duration"""
        if self.end_date:
            return self.end_date
        if not self.start_date:
            return None
        return self.start_date + relativedelta(months=self.group.cycle_duration_months)

    # -------------------------------------------------------------------------
    # VALIDATION AND SAVE METHODS
    # -------------------------------------------------------------------------

    def clean(self):
        super().clean()
        errors = {}

        if self.start_date and self.end_date and self.end_date < self.start_date:
            errors['end_date'] = "La fecha de fin no puede ser anterior a la fecha de inicio."

        if self.status == self.ACTIVE and self.group_id:
            other_active = Cycle.objects.filter(group_id=self.group_id, status=self.ACTIVE)
            if self.pk:
                other_active = other_active.exclude(pk=self.pk)
            if other_active.exists():
                errors['status'] = "El grupo ya tiene un ciclo activo. Termínalo antes de activar otro."

        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} - {self.group.name} ({self.get_status_display()})"

    class Meta:
        db_table = 'ciclos_ahorro'
        verbose_name = 'Cycle'
        verbose_name_plural = 'Cycles'
        ordering = ['-id']
