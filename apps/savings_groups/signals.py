# savings_groups/signals.py

"""
Savings Groups Signals

Any write to a group or a cycle changes the scoped statistics, so every
post_save / post_delete bumps the statistics cache version.
"""

from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
import logging

from .models import SavingsGroup, Cycle
from core.utils import bump_stats_cache_version

logger = logging.getLogger(__name__)


# =============================================================================
# SAVINGS GROUP SIGNALS
# =============================================================================

@receiver(post_save, sender=SavingsGroup)
def savings_group_saved(sender, instance, created, **kwargs):
    if created:
        logger.info(f"Savings group created: {instance.name} (facilitator {instance.facilitator_id})")
    bump_stats_cache_version()


@receiver(post_delete, sender=SavingsGroup)
def savings_group_deleted(sender, instance, **kwargs):
    logger.info(f"Savings group deleted: {instance.name}")
    bump_stats_cache_version()


# =============================================================================
# CYCLE SIGNALS
# =============================================================================

@receiver(post_save, sender=Cycle)
def cycle_saved(sender, instance, created, **kwargs):
    if created:
        logger.info(f"Cycle {instance.name} created for group {instance.group_id} ({instance.status})")
    bump_stats_cache_version()


@receiver(post_delete, sender=Cycle)
def cycle_deleted(sender, instance, **kwargs):
    bump_stats_cache_version()
