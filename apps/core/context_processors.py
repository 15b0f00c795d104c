# core/context_processors.py

from core.utils import get_app_setting, get_today
import logging

logger = logging.getLogger(__name__)


def app_settings(request):
    """
    Provides organisation-wide display settings for all templates.
    """
    return {
        'organization_name': get_app_setting('ORGANIZATION_NAME'),
        'currency_symbol': get_app_setting('CURRENCY_SYMBOL'),
        'current_year': get_today().year,
    }
