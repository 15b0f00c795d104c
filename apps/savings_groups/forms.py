# savings_groups/forms.py

from django import forms
from dateutil.relativedelta import relativedelta
import logging

from .models import SavingsGroup, Cycle
from utils.forms import (
    BootstrapFormMixin,
    DatePickerInput,
    CountInput,
    SearchInput,
)
from core.utils import MONTH_NAMES, get_cities_for_country, get_city_choices

logger = logging.getLogger(__name__)


MONTH_CHOICES = [(index, name) for index, name in enumerate(MONTH_NAMES, start=1)]


# =============================================================================
# SAVINGS GROUP FORM
# =============================================================================

class SavingsGroupForm(BootstrapFormMixin, forms.ModelForm):
    """
    Create/edit a facilitator's savings group.

    The member total is not typed in: it is always the sum of men, women,
    boys and girls.
    """

    name = forms.CharField(
        label='Nombre del grupo',
        min_length=3,
        max_length=200,
        error_messages={'min_length': 'El nombre debe tener al menos 3 caracteres'},
        widget=forms.TextInput(attrs={'placeholder': 'Nombre del grupo'}),
    )
    creation_year = forms.IntegerField(
        label='Año de creación',
        min_value=2000,
        max_value=2100,
        widget=forms.NumberInput(attrs={'min': 2000, 'max': 2100}),
    )
    cycle_duration_months = forms.IntegerField(
        label='Duración del ciclo (meses)',
        min_value=1,
        initial=12,
        error_messages={'min_value': 'La duración debe ser al menos 1 mes'},
        widget=forms.NumberInput(attrs={'min': 1}),
    )

    class Meta:
        model = SavingsGroup
        fields = [
            'name',
            'savings_type',
            'is_youth_group',
            'operating_country',
            'operating_city',
            'creation_year',
            'creation_month',
            'cycle_duration_months',
            'men',
            'women',
            'boys',
            'girls',
        ]
        widgets = {
            'savings_type': forms.Select(attrs={'class': 'form-select'}),
            'is_youth_group': forms.CheckboxInput(attrs={'class': 'form-check-input'}),
            'men': CountInput(),
            'women': CountInput(),
            'boys': CountInput(),
            'girls': CountInput(),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.fields['creation_month'] = forms.TypedChoiceField(
            label='Mes de creación',
            choices=MONTH_CHOICES,
            coerce=int,
            widget=forms.Select(attrs={'class': 'form-select'}),
        )
        self.fields['operating_city'] = forms.ChoiceField(
            label='Ciudad de operación',
            choices=[('', '(seleccione ciudad)')] + get_city_choices(),
            widget=forms.Select(attrs={'class': 'form-select'}),
        )
        if self.instance and self.instance.pk and self.instance.operating_city:
            known = dict(get_city_choices())
            if self.instance.operating_city not in known:
                self.fields['operating_city'].choices += [
                    (self.instance.operating_city, self.instance.operating_city)
                ]

    def clean_name(self):
        return self.cleaned_data['name'].strip()

    def clean(self):
        cleaned_data = super().clean()

        country = cleaned_data.get('operating_country')
        city = cleaned_data.get('operating_city')
        valid_cities = get_cities_for_country(country)

        if country and city and valid_cities and city not in valid_cities:
            self.add_error('operating_city', f"Selecciona una ciudad de {', '.join(valid_cities)}.")

        return cleaned_data

    def save(self, commit=True):
        group = super().save(commit=False)
        group.total_members = group.demographic_total

        if commit:
            group.save()

        return group


# =============================================================================
# CYCLE FORM
# =============================================================================

class CycleForm(BootstrapFormMixin, forms.ModelForm):
    """Create or manage a group's savings cycle"""

    name = forms.CharField(
        label='Nombre del ciclo',
        min_length=3,
        max_length=200,
        error_messages={'min_length': 'El nombre debe tener al menos 3 caracteres'},
        widget=forms.TextInput(attrs={'placeholder': 'Ej: Ciclo 2024'}),
    )

    class Meta:
        model = Cycle
        fields = ['name', 'start_date', 'end_date', 'status']
        widgets = {
            'start_date': DatePickerInput(),
            'end_date': DatePickerInput(),
            'status': forms.Select(attrs={'class': 'form-select'}),
        }

    def __init__(self, *args, group=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.group = group or getattr(self.instance, 'group', None)

        if self.group is not None:
            self.instance.group = self.group

        self.fields['end_date'].required = False

        if self.group is not None and not self.is_bound and not self.instance.pk:
            self.fields['end_date'].help_text = (
                f"Opcional. Si se deja vacío se espera que termine a los "
                f"{self.group.cycle_duration_months} meses."
            )

    def clean(self):
        cleaned_data = super().clean()

        start_date = cleaned_data.get('start_date')
        if start_date and not cleaned_data.get('end_date') and self.group is not None:
            cleaned_data['end_date'] = start_date + relativedelta(months=self.group.cycle_duration_months)

        return cleaned_data


# =============================================================================
# SEARCH FORMS
# =============================================================================

class GroupSearchForm(forms.Form):
    """Group search used by savers looking for a group to join"""

    q = forms.CharField(
        required=False,
        label='Buscar grupo',
        widget=SearchInput(attrs={'placeholder': 'Nombre del grupo...'})
    )
