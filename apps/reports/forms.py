# reports/forms.py

from django import forms
from decimal import Decimal
import logging

from .models import MonthlyReport
from savings_groups.models import SavingsGroup
from savings_groups.forms import MONTH_CHOICES
from utils.forms import BootstrapFormMixin, MoneyField, CountInput
from core.utils import get_today

logger = logging.getLogger(__name__)


POSITIVE_NUMBER_MESSAGE = 'Debe ser un número positivo'


# =============================================================================
# MONTHLY REPORT FORM
# =============================================================================

class MonthlyReportForm(BootstrapFormMixin, forms.ModelForm):
    """
    Create/edit a monthly report. The group must be one of the
    facilitator's own groups.
    """

    group = forms.ModelChoiceField(
        queryset=SavingsGroup.objects.none(),
        label='Grupo',
        empty_label='(seleccione grupo)',
        error_messages={'required': 'Debes seleccionar un grupo'},
    )
    year = forms.IntegerField(
        label='Año',
        min_value=2020,
        max_value=2100,
        error_messages={'min_value': 'Año inválido', 'max_value': 'Año inválido'},
    )
    month = forms.TypedChoiceField(
        label='Mes',
        choices=MONTH_CHOICES,
        coerce=int,
        error_messages={'invalid_choice': 'Mes debe ser entre 1 y 12'},
    )
    meetings_count = forms.IntegerField(
        label='Número de reuniones',
        min_value=0,
        initial=0,
        widget=CountInput(),
        error_messages={'min_value': POSITIVE_NUMBER_MESSAGE},
    )
    average_attendance = forms.DecimalField(
        label='Promedio de asistencia',
        min_value=Decimal('0'),
        max_digits=8,
        decimal_places=2,
        required=False,
        error_messages={'min_value': POSITIVE_NUMBER_MESSAGE},
    )
    amount_saved = MoneyField(label='Cantidad ahorrada')

    class Meta:
        model = MonthlyReport
        fields = [
            'group',
            'year',
            'month',
            'meetings_count',
            'average_attendance',
            'amount_saved',
            'comments',
        ]
        widgets = {
            'comments': forms.Textarea(attrs={'rows': 3}),
        }

    def __init__(self, *args, facilitator=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.facilitator = facilitator

        groups = SavingsGroup.objects.all()
        if facilitator is not None:
            groups = groups.filter(facilitator=facilitator)
        self.fields['group'].queryset = groups.order_by('name')

        if not self.is_bound and not self.instance.pk:
            today = get_today()
            self.initial.setdefault('year', today.year)
            self.initial.setdefault('month', today.month)

    def save(self, commit=True):
        report = super().save(commit=False)
        if self.facilitator is not None:
            report.facilitator = self.facilitator

        if commit:
            report.save()

        return report


# =============================================================================
# PERIOD FILTER FORM
# =============================================================================

class PeriodFilterForm(forms.Form):
    """Year/month selector for the summary pages"""

    year = forms.IntegerField(
        label='Año',
        min_value=2000,
        max_value=2100,
        widget=forms.NumberInput(attrs={'class': 'form-control'}),
    )
    month = forms.TypedChoiceField(
        label='Mes',
        choices=MONTH_CHOICES,
        coerce=int,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
