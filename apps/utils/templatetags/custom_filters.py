# utils/templatetags/custom_filters.py

from django import template

register = template.Library()


@register.filter
def money(value):
    """
    Usage: {{ report.amount_saved|money }}  ->  $1.234.500,00
    """
    from core.utils import format_money
    return format_money(value)


@register.filter
def month_name(value):
    """
    Usage: {{ report.month|month_name }}  ->  Marzo
    """
    from core.utils import get_month_name
    try:
        return get_month_name(int(value))
    except (TypeError, ValueError):
        return ''


@register.filter
def get_item(dictionary, key):
    """
    Get item from dictionary using key.
    Usage: {{ summary.savings_by_type|get_item:"Asca" }}
    """
    if not dictionary:
        return None
    try:
        return dictionary.get(key)
    except (AttributeError, TypeError):
        return None


@register.filter
def cycle_badge(status):
    """CSS class for a cycle classification badge"""
    return {
        'ACTIVE': 'bg-success',
        'TERMINATED': 'bg-danger',
    }.get(status, 'bg-secondary')
