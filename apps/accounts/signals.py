# accounts/signals.py

"""
Accounts Signals

- Creates the UserProfile for every new auth.User (role defaults to SAVER)
- Invalidates cached statistics when a profile changes
"""

from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver
import logging

from .models import UserProfile

logger = logging.getLogger(__name__)


@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    """Give every new user a profile"""
    if not created:
        return

    profile, profile_created = UserProfile.objects.get_or_create(user=instance)
    if profile_created:
        logger.info(f"Created {profile.role} profile for user {instance.username}")


@receiver(post_save, sender=UserProfile)
def profile_saved(sender, instance, **kwargs):
    """Role, zone or country changes move users between scopes"""
    from core.utils import bump_stats_cache_version
    bump_stats_cache_version()
