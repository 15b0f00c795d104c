# utils/forms.py

"""
Shared form widgets, fields and mixins.

Every create/edit form in the dashboard is built from these pieces so that
validation messages, number inputs and Bootstrap styling behave the same on
every screen.
"""

from django import forms
from django.core.exceptions import ValidationError
from decimal import Decimal, InvalidOperation
import re
import logging

logger = logging.getLogger(__name__)


# =============================================================================
# CUSTOM WIDGETS
# =============================================================================

class DatePickerInput(forms.DateInput):
    """Date picker widget with HTML5 date input"""
    input_type = 'date'

    def __init__(self, attrs=None, format=None):
        default_attrs = {'class': 'form-control'}
        if attrs:
            default_attrs.update(attrs)
        super().__init__(attrs=default_attrs, format=format or '%Y-%m-%d')


class MoneyInput(forms.NumberInput):
    """Money input widget, never negative"""

    def __init__(self, attrs=None):
        default_attrs = {
            'class': 'form-control money-input',
            'step': '0.01',
            'min': '0',
            'placeholder': '0.00'
        }
        if attrs:
            default_attrs.update(attrs)
        super().__init__(attrs=default_attrs)


class CountInput(forms.NumberInput):
    """Whole-number input for people and meeting counts"""

    def __init__(self, attrs=None):
        default_attrs = {'class': 'form-control', 'step': '1', 'min': '0'}
        if attrs:
            default_attrs.update(attrs)
        super().__init__(attrs=default_attrs)


class SearchInput(forms.TextInput):
    """Search input widget"""

    def __init__(self, attrs=None):
        default_attrs = {
            'class': 'form-control search-input',
            'placeholder': 'Buscar...',
            'type': 'search',
            'autocomplete': 'off',
        }
        if attrs:
            default_attrs.update(attrs)
        super().__init__(attrs=default_attrs)


# =============================================================================
# CUSTOM FORM FIELDS
# =============================================================================

ES_CO_THOUSANDS = re.compile(r'^-?\d{1,3}(\.\d{3})+$')


def parse_money_input(value):
    """
    Normalize typed money into a plain decimal string.

    Accepts the number widget's '1500.50' as well as es-CO text as printed
    by format_money: '$1.500', '$1.234.500,00'. A dot followed by groups of
    exactly three digits is a thousands separator; a comma is the decimal
    separator.
    """
    value = re.sub(r'[^\d.,-]', '', value)

    if ',' in value:
        return value.replace('.', '').replace(',', '.')
    if ES_CO_THOUSANDS.match(value):
        return value.replace('.', '')
    return value


class MoneyField(forms.DecimalField):
    """Decimal amount field that accepts '1500.50' and es-CO '$1.234.500,00' input"""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('max_digits', 14)
        kwargs.setdefault('decimal_places', 2)
        kwargs.setdefault('min_value', Decimal('0.00'))
        kwargs.setdefault('widget', MoneyInput())
        kwargs.setdefault('error_messages', {'min_value': 'Debe ser un número positivo'})
        super().__init__(*args, **kwargs)

    def clean(self, value):
        if value in self.empty_values:
            return super().clean(value)

        if isinstance(value, str):
            value = parse_money_input(value)

        try:
            value = Decimal(value)
        except (ValueError, InvalidOperation):
            raise ValidationError('Ingresa un monto válido.')

        return super().clean(value)


class PhoneNumberField(forms.CharField):
    """Phone number field; keeps digits and a leading plus sign"""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('max_length', 20)
        kwargs.setdefault('min_length', 5)
        super().__init__(*args, **kwargs)

    def clean(self, value):
        value = super().clean(value)

        if value in self.empty_values:
            return value

        cleaned = re.sub(r'[^\d+]', '', value)
        if not re.match(r'^\+?\d{5,15}$', cleaned):
            raise ValidationError('Ingresa un teléfono válido.')

        return cleaned


# =============================================================================
# FORM MIXINS
# =============================================================================

class BootstrapFormMixin:
    """Mixin to add Bootstrap classes to form fields"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.apply_bootstrap_classes()

    def apply_bootstrap_classes(self):
        for field in self.fields.values():
            widget = field.widget
            existing_classes = widget.attrs.get('class', '')

            if isinstance(widget, (forms.CheckboxInput, forms.RadioSelect)):
                css_class = 'form-check-input'
            elif isinstance(widget, forms.Select):
                css_class = 'form-select'
            else:
                css_class = 'form-control'

            if css_class not in existing_classes:
                widget.attrs['class'] = f"{existing_classes} {css_class}".strip()


# =============================================================================
# FORM HELPERS
# =============================================================================

def get_form_errors_as_string(form):
    """Flatten form errors into one line for alerts and logs"""
    messages = []
    for field, errors in form.errors.items():
        label = form.fields[field].label if field in form.fields else None
        for error in errors:
            messages.append(f"{label}: {error}" if label else str(error))
    return '; '.join(messages)
