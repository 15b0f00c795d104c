# accounts/apps.py

from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class AccountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
    verbose_name = "Accounts & Roles"

    def ready(self):
        """
        Import signals when the app is ready.
        This ensures every new user gets a profile.
        """
        import accounts.signals
        logger.info("✓ Accounts app signals registered successfully")
