# savers/forms.py

from django import forms
from decimal import Decimal

from .models import Participant, Movement
from utils.forms import BootstrapFormMixin, DatePickerInput, MoneyField
from core.utils import get_today


# =============================================================================
# PURPOSE FORM
# =============================================================================

class PurposeForm(BootstrapFormMixin, forms.ModelForm):
    """The saver's personal purpose and goal for the cycle"""

    personal_purpose = forms.CharField(
        label='Propósito personal',
        max_length=500,
        widget=forms.Textarea(attrs={'rows': 4, 'placeholder': '¿Para qué estás ahorrando?'}),
        error_messages={
            'required': 'El propósito es requerido',
            'max_length': 'El propósito no puede exceder los 500 caracteres',
        }
    )
    personal_goal = MoneyField(label='Meta de ahorro', required=False)

    class Meta:
        model = Participant
        fields = ['personal_purpose', 'personal_goal']

    def clean_personal_purpose(self):
        purpose = (self.cleaned_data.get('personal_purpose') or '').strip()
        if not purpose:
            raise forms.ValidationError('El propósito es requerido')
        return purpose

    def clean_personal_goal(self):
        goal = self.cleaned_data.get('personal_goal')
        return goal if goal is not None else Decimal('0.00')


# =============================================================================
# MOVEMENT FORM
# =============================================================================

class MovementForm(BootstrapFormMixin, forms.ModelForm):
    """A contribution: date, amount and an optional note"""

    date = forms.DateField(
        label='Fecha',
        widget=DatePickerInput(),
        error_messages={'required': 'La fecha es requerida'}
    )
    amount = MoneyField(
        label='Monto',
        error_messages={
            'required': 'El monto es requerido',
            'min_value': 'El monto no puede ser negativo',
        }
    )
    note = forms.CharField(
        label='Nota',
        required=False,
        max_length=255,
        widget=forms.TextInput(attrs={'placeholder': 'Opcional'})
    )

    class Meta:
        model = Movement
        fields = ['date', 'amount', 'note']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if not self.instance.pk and not self.is_bound:
            self.initial.setdefault('date', get_today())
