# savings_groups/apps.py

from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class SavingsGroupsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "savings_groups"
    verbose_name = "Savings Groups & Cycles"

    def ready(self):
        """
        Import signals when the app is ready.
        This ensures all signal handlers are registered.
        """
        import savings_groups.signals
        logger.info("✓ Savings groups app signals registered successfully")
