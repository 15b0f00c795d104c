# accounts/backends.py

from django.contrib.auth.backends import ModelBackend
from django.contrib.auth import get_user_model
from django.db.models import Q
import logging

logger = logging.getLogger(__name__)

User = get_user_model()


class EmailAuthBackend(ModelBackend):
    """
    Authentication backend that allows login with email or username.
    Accounts are registered by email, so the email is the usual login.
    """

    def authenticate(self, request, username=None, password=None, email=None, **kwargs):
        login_field = email or username

        if login_field is None or password is None:
            return None

        user = User.objects.filter(
            Q(email__iexact=login_field) | Q(username__iexact=login_field)
        ).order_by('id').first()

        if not user:
            # Run the default password hasher to reduce timing difference
            User().set_password(password)
            logger.warning(f"Login attempt for non-existent user: {login_field}")
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user

        logger.warning(f"Failed login attempt for: {login_field}")
        return None
