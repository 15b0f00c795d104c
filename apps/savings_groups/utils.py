# savings_groups/utils.py

"""
Savings Groups Utilities

Scope resolution and cycle classification:
- get_groups_for_user / get_facilitators_for_user: which rows a role may see
- classify_cycle_status / get_cycle_status_counts: cycle badges and tallies

Every function receives the acting user explicitly.
"""

from django.contrib.auth.models import User
import logging

from accounts.models import UserProfile

logger = logging.getLogger(__name__)


WITHOUT_CYCLE = 'WITHOUT_CYCLE'
ACTIVE = 'ACTIVE'
TERMINATED = 'TERMINATED'

CYCLE_STATUS_LABELS = {
    WITHOUT_CYCLE: 'Sin ciclo',
    ACTIVE: 'Ciclo activo',
    TERMINATED: 'Ciclo terminado',
}


# =============================================================================
# SCOPE RESOLUTION
# =============================================================================

def _get_profile(user):
    if not user or not user.is_authenticated:
        return None
    try:
        return user.profile
    except UserProfile.DoesNotExist:
        return None


def get_facilitators_for_user(user):
    """
    Facilitators visible to the acting user.

    - Facilitator: only themself
    - Coordinator: facilitators residing in the coordination zone
    - Director: facilitators residing in the director's country
    - Anyone else: none
    """
    profile = _get_profile(user)
    facilitators = User.objects.filter(profile__role=UserProfile.FACILITATOR)

    if profile is None:
        return facilitators.none()

    if profile.role == UserProfile.FACILITATOR:
        return facilitators.filter(pk=user.pk)

    if profile.role == UserProfile.COORDINATOR:
        if not profile.coordination_zone:
            logger.warning(f"Coordinator {user.username} has no coordination zone")
            return facilitators.none()
        return facilitators.filter(profile__city__iexact=profile.coordination_zone)

    if profile.role == UserProfile.DIRECTOR:
        return facilitators.filter(profile__country=profile.country)

    return facilitators.none()


def get_coordinators_for_user(user):
    """Coordinators residing in a director's country; empty for other roles"""
    profile = _get_profile(user)
    coordinators = User.objects.filter(profile__role=UserProfile.COORDINATOR)

    if profile is None or profile.role != UserProfile.DIRECTOR:
        return coordinators.none()

    return coordinators.filter(profile__country=profile.country)


def get_groups_for_user(user):
    """
    Savings groups in the acting user's scope, as a queryset.

    - Facilitator: own groups
    - Coordinator: groups whose facilitator resides in the coordination zone
    - Director: groups operating in the director's country
    - Saver or anyone else: none
    """
    from .models import SavingsGroup

    profile = _get_profile(user)
    groups = SavingsGroup.objects.select_related('facilitator')

    if profile is None:
        return groups.none()

    if profile.role == UserProfile.FACILITATOR:
        return groups.filter(facilitator=user)

    if profile.role == UserProfile.COORDINATOR:
        return groups.filter(facilitator__in=get_facilitators_for_user(user))

    if profile.role == UserProfile.DIRECTOR:
        return groups.filter(operating_country=profile.country)

    return groups.none()


def get_scope_label(user):
    """Human label for the acting user's scope ('Barranquilla', 'Colombia', ...)"""
    profile = _get_profile(user)
    if profile is None:
        return ''
    if profile.role == UserProfile.COORDINATOR:
        return profile.coordination_zone or 'Sin zona'
    if profile.role == UserProfile.DIRECTOR:
        return profile.country.name
    return profile.display_name


# =============================================================================
# CYCLE CLASSIFICATION
# =============================================================================

def classify_cycle_status(cycles):
    """
    Classify a group by its cycles.

    The cycle with the highest id is the group's current cycle and decides
    the badge, the same cycle whose dates are displayed:

    - no cycles -> WITHOUT_CYCLE
    - latest cycle active -> ACTIVE
    - latest cycle terminated -> TERMINATED

    Args:
        cycles: Iterable of objects with `id` and `status`

    Returns:
        str: WITHOUT_CYCLE, ACTIVE or TERMINATED
    """
    latest = None
    for cycle in cycles:
        if latest is None or cycle.id > latest.id:
            latest = cycle

    if latest is None:
        return WITHOUT_CYCLE

    return ACTIVE if latest.status == ACTIVE else TERMINATED


def get_cycle_status_counts(groups):
    """
    Tally groups per cycle classification.

    Args:
        groups: Iterable of SavingsGroup (prefetch 'cycles' to avoid N+1)

    Returns:
        dict: {'without_cycle': n, 'active': n, 'terminated': n}
    """
    counts = {'without_cycle': 0, 'active': 0, 'terminated': 0}

    for group in groups:
        status = classify_cycle_status(group.cycles.all())
        counts[status.lower()] += 1

    return counts
