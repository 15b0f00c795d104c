# reports/apps.py

from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class ReportsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "reports"
    verbose_name = "Monthly Reports"

    def ready(self):
        """
        Import signals when the app is ready.
        This ensures all signal handlers are registered.
        """
        import reports.signals
        logger.info("✓ Reports app signals registered successfully")
