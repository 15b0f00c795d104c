# accounts/models.py

from django.contrib.auth.models import User
from django.db import models
from django_countries.fields import CountryField
import logging

from utils.models import BaseModel

logger = logging.getLogger(__name__)


# =============================================================================
# USER PROFILE MODEL
# =============================================================================

class UserProfile(BaseModel):
    """
    Program role and residence details for a login account.

    Every auth.User gets exactly one profile (created by signal). The role
    decides which dashboard the user lands on and which data scope the
    statistics are computed over:

    - FACILITATOR: own groups and reports
    - COORDINATOR: groups whose facilitator lives in the coordination zone
    - DIRECTOR: groups operating in the director's country
    - SAVER: own participation only
    """

    FACILITATOR = 'FACILITATOR'
    COORDINATOR = 'COORDINATOR'
    DIRECTOR = 'DIRECTOR'
    SAVER = 'SAVER'

    USER_ROLES = (
        (FACILITATOR, 'Facilitador'),
        (COORDINATOR, 'Coordinador'),
        (DIRECTOR, 'Director'),
        (SAVER, 'Ahorrador'),
    )

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')
    role = models.CharField(max_length=20, choices=USER_ROLES, default=SAVER, db_index=True)

    # Residence
    country = CountryField(blank_label='(seleccione país)', default='CO')
    city = models.CharField(max_length=100, blank=True, default='', db_index=True)
    coordination_zone = models.CharField(
        max_length=100,
        blank=True,
        default='',
        help_text="Coordinators only: facilitators residing in this city belong to the zone"
    )

    # Personal details
    phone = models.CharField(max_length=20, blank=True, default='')
    church = models.CharField(max_length=150, blank=True, default='')
    birth_date = models.DateField(null=True, blank=True)

    class Meta:
        db_table = 'usuarios'
        verbose_name = 'User Profile'
        verbose_name_plural = 'User Profiles'

    def __str__(self):
        return f"{self.user.username} - {self.role}"

    # Role helpers
    @property
    def is_facilitator(self):
        return self.role == self.FACILITATOR

    @property
    def is_coordinator(self):
        return self.role == self.COORDINATOR

    @property
    def is_director(self):
        return self.role == self.DIRECTOR

    @property
    def is_saver(self):
        return self.role == self.SAVER

    @property
    def display_name(self):
        return self.user.get_full_name() or self.user.email or self.user.username


def get_user_role(user):
    """Role of a user; anonymous users and users without a profile have none"""
    if not user or not user.is_authenticated:
        return None
    try:
        return user.profile.role
    except UserProfile.DoesNotExist:
        return None
