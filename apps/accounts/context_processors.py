# accounts/context_processors.py

import logging

logger = logging.getLogger(__name__)


def user_context(request):
    """
    Provides the acting user's role and display details to every template.
    """
    context = {
        'user_role': None,
        'user_role_display': '',
        'user_full_name': '',
    }

    if request.user.is_authenticated:
        profile = getattr(request.user, 'profile', None)

        context['user_full_name'] = request.user.get_full_name() or request.user.email
        context['user_email'] = request.user.email

        if profile:
            context['user_profile'] = profile
            context['user_role'] = profile.role
            context['user_role_display'] = profile.get_role_display()
        else:
            logger.warning(f"User {request.user.username} has no profile")

    return context
