# savers/apps.py

from django.apps import AppConfig


class SaversConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "savers"
    verbose_name = "Savers & Contributions"
