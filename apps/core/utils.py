# core/utils.py

"""
Central utilities for the Open Hands dashboard
Prevents code duplication and ensures consistency
"""
from django.conf import settings
from django.core.cache import cache
from django.core.paginator import Paginator, EmptyPage, PageNotAnInteger
from django.http import HttpResponse
from django.utils import timezone
from decimal import Decimal, InvalidOperation
import logging

logger = logging.getLogger(__name__)


MONTH_NAMES = [
    'Enero', 'Febrero', 'Marzo', 'Abril', 'Mayo', 'Junio',
    'Julio', 'Agosto', 'Septiembre', 'Octubre', 'Noviembre', 'Diciembre',
]

APP_SETTING_DEFAULTS = {
    'ORGANIZATION_NAME': 'Open Hands',
    'REPORTS_PAGE_SIZE': 8,
    'STATS_CACHE_TIMEOUT': 300,
    'CURRENCY_SYMBOL': '$',
    'DEFAULT_COUNTRY': 'CO',
    'CITIES_BY_COUNTRY': {},
}


# =============================================================================
# APPLICATION SETTINGS
# =============================================================================

def get_app_setting(name):
    """
    Read a value from settings.OPEN_HANDS, falling back to the built-in default.

    Args:
        name: Key inside the OPEN_HANDS settings dict

    Returns:
        The configured value or its default
    """
    configured = getattr(settings, 'OPEN_HANDS', {}) or {}
    if name in configured:
        return configured[name]
    return APP_SETTING_DEFAULTS.get(name)


def get_cities_for_country(country_code):
    """Cities the program operates in for a country code ('CO', 'VE', ...)"""
    cities_by_country = get_app_setting('CITIES_BY_COUNTRY') or {}
    return list(cities_by_country.get(str(country_code or ''), []))


def get_city_choices():
    """All configured cities as (value, label) choices, sorted by name"""
    cities_by_country = get_app_setting('CITIES_BY_COUNTRY') or {}
    cities = sorted({city for city_list in cities_by_country.values() for city in city_list})
    return [(city, city) for city in cities]


# =============================================================================
# MONEY & DATE FORMATTING
# =============================================================================

def format_money(amount, include_symbol=True):
    """
    Format an amount the way the program's reports show it (es-CO style).

    Args:
        amount: Decimal or numeric value; None counts as zero
        include_symbol: Whether to prefix the currency symbol

    Returns:
        str: e.g. '$1.234.500,00'
    """
    try:
        amount_decimal = Decimal(str(amount if amount is not None else 0))
    except (InvalidOperation, ValueError, TypeError):
        amount_decimal = Decimal('0')

    # 1,234,500.00 -> 1.234.500,00
    formatted = f"{amount_decimal:,.2f}".replace(',', '_').replace('.', ',').replace('_', '.')
    symbol = get_app_setting('CURRENCY_SYMBOL')
    return f"{symbol}{formatted}" if include_symbol else formatted


def get_month_name(month):
    """Spanish month name for 1..12, empty string otherwise"""
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return ''


def get_today():
    """Today's date in the configured TIME_ZONE"""
    return timezone.localdate()


def parse_period(request):
    """
    Read the selected (year, month) from request.GET.

    Missing or malformed values fall back to the current month; the month is
    clamped to 1..12 and the year to 2000..2100.

    Returns:
        tuple: (year, month)
    """
    today = get_today()

    try:
        year = int(request.GET.get('year', today.year))
    except (TypeError, ValueError):
        year = today.year

    try:
        month = int(request.GET.get('month', today.month))
    except (TypeError, ValueError):
        month = today.month

    year = min(max(year, 2000), 2100)
    month = min(max(month, 1), 12)
    return year, month


# =============================================================================
# PAGINATION & FILTERING
# =============================================================================

def _get_page(paginator, current_page):
    """Resolve ?page= into a Page, clamped into [1, num_pages]"""
    try:
        return paginator.page(current_page)
    except PageNotAnInteger:
        return paginator.page(1)
    except EmptyPage:
        try:
            below_first = int(current_page) < 1
        except (TypeError, ValueError):
            below_first = True
        return paginator.page(1 if below_first else paginator.num_pages)


def _page_window(page):
    paginator = page.paginator
    total_count = paginator.count

    return {
        'page': page.number,
        'offset': max(page.start_index() - 1, 0),
        'limit': paginator.per_page,
        # num_pages is 1 for an empty listing
        'total_pages': paginator.num_pages if total_count else 0,
        'total_count': total_count,
        'has_previous': page.has_previous(),
        'has_next': page.has_next(),
        'previous_page': page.previous_page_number() if page.has_previous() else page.number,
        'next_page': page.next_page_number() if page.has_next() else page.number,
    }


def get_page_window(current_page, total_count, page_size=None):
    """
    Compute the slice of a server-side paged listing.

    The requested page is clamped into [1, max(total_pages, 1)], so page 1 of
    an empty listing is a valid, empty window.

    Args:
        current_page: 1-based page number (int or numeric string)
        total_count: Total rows available for the current scope
        page_size: Rows per page (default: REPORTS_PAGE_SIZE, 8)

    Returns:
        dict: page, offset, limit, total_pages, total_count, has_previous,
              has_next, previous_page, next_page
    """
    page_size = page_size or get_app_setting('REPORTS_PAGE_SIZE')
    paginator = Paginator(range(max(int(total_count or 0), 0)), page_size)
    return _page_window(_get_page(paginator, current_page))


def paginate_queryset(request, queryset, page_size=None):
    """
    Paginate a queryset using ?page= from the request.

    Returns:
        tuple: (list of rows for the page, window dict as get_page_window)
    """
    paginator = Paginator(queryset, page_size or get_app_setting('REPORTS_PAGE_SIZE'))
    page = _get_page(paginator, request.GET.get('page', 1))
    return list(page.object_list), _page_window(page)


def parse_filters(request, filter_keys):
    """
    Extract filter values from request.GET.

    Returns:
        dict: {key: value or None}
    """
    filters = {}
    for key in filter_keys:
        value = request.GET.get(key, '').strip()
        filters[key] = value if value else None
    return filters


# =============================================================================
# HTMX MODAL RESPONSES WITH SWEETALERT2
# =============================================================================

def create_sweetalert_response(html_content='', message='', alert_type='success', title=None, close_modal=True):
    """
    Create HTTP response with SweetAlert2 headers for HTMX modal actions.

    Headers Set:
        HX-Alert-Message: The message text
        HX-Alert-Type: The alert type (success/error/warning/info)
        HX-Alert-Title: Custom title (optional)
        HX-Close-Modal: 'true' to close modal (optional)
    """
    response = HttpResponse(html_content)

    if message:
        response['HX-Alert-Message'] = message
        response['HX-Alert-Type'] = alert_type or 'success'

        if title:
            response['HX-Alert-Title'] = title

    if close_modal:
        response['HX-Close-Modal'] = 'true'

    return response


def create_error_response(message, title='Error', close_modal=True):
    return create_sweetalert_response(
        html_content='',
        message=message,
        alert_type='error',
        title=title,
        close_modal=close_modal
    )


def create_redirect_response(redirect_url, message='', alert_type='success', title=None):
    """
    Redirect an HTMX request after a modal action, typically after a delete.

    Headers Set:
        HX-Redirect: The URL to redirect to
        HX-Alert-*: As create_sweetalert_response when a message is given
        HX-Close-Modal: Always 'true'
    """
    response = HttpResponse('')
    response['HX-Redirect'] = redirect_url

    if message:
        response['HX-Alert-Message'] = message
        response['HX-Alert-Type'] = alert_type or 'success'

        if title:
            response['HX-Alert-Title'] = title

    response['HX-Close-Modal'] = 'true'

    return response


# =============================================================================
# STATISTICS CACHE
# =============================================================================

STATS_CACHE_VERSION_KEY = 'openhands:stats:version'


def get_stats_cache_version():
    """Current version of cached statistics; starts at 1"""
    version = cache.get(STATS_CACHE_VERSION_KEY)
    if version is None:
        cache.add(STATS_CACHE_VERSION_KEY, 1, timeout=None)
        version = cache.get(STATS_CACHE_VERSION_KEY, 1)
    return version


def bump_stats_cache_version():
    """
    Invalidate every cached statistic at once.
    Called from post_save / post_delete signals after any write.
    """
    try:
        version = cache.incr(STATS_CACHE_VERSION_KEY)
    except ValueError:
        cache.set(STATS_CACHE_VERSION_KEY, 2, timeout=None)
        version = 2
    logger.debug(f"Statistics cache version bumped to {version}")
    return version


def get_cached_stats(key_parts, builder):
    """
    Return a cached statistic, building and caching it when missing.

    Args:
        key_parts: Iterable identifying the statistic (scope, user id, period...)
        builder: Zero-argument callable computing the value

    Returns:
        The cached or freshly built value (None results are cached too)
    """
    key = ':'.join(
        ['openhands:stats', str(get_stats_cache_version())] + [str(part) for part in key_parts]
    )
    sentinel = object()
    value = cache.get(key, sentinel)

    if value is sentinel:
        value = builder()
        cache.set(key, value, timeout=get_app_setting('STATS_CACHE_TIMEOUT'))

    return value
