# reports/signals.py

"""
Reports Signals

A new, edited or deleted report changes every summary for its period, so
each write bumps the statistics cache version.
"""

from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
import logging

from .models import MonthlyReport
from core.utils import bump_stats_cache_version

logger = logging.getLogger(__name__)


@receiver(post_save, sender=MonthlyReport)
def monthly_report_saved(sender, instance, created, **kwargs):
    if created:
        logger.info(
            f"Monthly report {instance.pk} filed for group {instance.group_id} "
            f"({instance.year}-{instance.month:02d}): {instance.amount_saved}"
        )
    bump_stats_cache_version()


@receiver(post_delete, sender=MonthlyReport)
def monthly_report_deleted(sender, instance, **kwargs):
    logger.info(f"Monthly report {instance.pk} deleted")
    bump_stats_cache_version()
