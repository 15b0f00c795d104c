# accounts/decorators.py

"""
Role-based access decorators.

Views are restricted by program role rather than by Django permissions:
a user whose role is not allowed is sent back to core:home, which in turn
redirects to the dashboard of their own role. Anonymous users end up on the
login page the same way.
"""

from django.contrib.auth.decorators import user_passes_test
from django.urls import reverse_lazy
import logging

from .models import UserProfile, get_user_role

logger = logging.getLogger(__name__)


def role_required(*roles):
    """
    Usage:
        @role_required(UserProfile.FACILITATOR)
        def groups_list(request): ...
    """

    def check_role(user):
        role = get_user_role(user)
        if role in roles:
            return True
        if user.is_authenticated:
            logger.warning(f"User {user.username} with role {role} denied access (requires {', '.join(roles)})")
        return False

    return user_passes_test(check_role, login_url=reverse_lazy('core:home'), redirect_field_name=None)


facilitator_required = role_required(UserProfile.FACILITATOR)
coordinator_required = role_required(UserProfile.COORDINATOR)
director_required = role_required(UserProfile.DIRECTOR)
saver_required = role_required(UserProfile.SAVER)
