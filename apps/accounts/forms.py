# accounts/forms.py

from django import forms
from django.contrib.auth.forms import AuthenticationForm, UserCreationForm
from django.contrib.auth.models import User
from django.contrib.auth.password_validation import validate_password
from django.utils.translation import gettext_lazy as _

from .models import UserProfile
from utils.forms import BootstrapFormMixin, DatePickerInput, PhoneNumberField
from core.utils import get_cities_for_country, get_city_choices


# =============================================================================
# LOGIN FORM
# =============================================================================

class LoginForm(AuthenticationForm):
    """Login form using email instead of username"""

    username = forms.EmailField(
        label=_('Correo electrónico'),
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': 'nombre@ejemplo.com',
            'autofocus': True
        })
    )
    password = forms.CharField(
        label=_('Contraseña'),
        widget=forms.PasswordInput(attrs={'class': 'form-control'})
    )

    error_messages = {
        'invalid_login': _("Correo electrónico o contraseña incorrectos."),
        'inactive': _("Esta cuenta está inactiva."),
    }


# =============================================================================
# REGISTRATION FORM
# =============================================================================

class RegistrationForm(BootstrapFormMixin, UserCreationForm):
    """
    Self-service registration with email and password.
    New accounts always start with the SAVER role.
    """

    email = forms.EmailField(
        label=_('Correo electrónico'),
        widget=forms.EmailInput(attrs={'placeholder': 'nombre@ejemplo.com'})
    )

    class Meta:
        model = User
        fields = ('email',)

    def clean_email(self):
        email = self.cleaned_data['email'].strip().lower()
        if User.objects.filter(email__iexact=email).exists() or User.objects.filter(username__iexact=email).exists():
            raise forms.ValidationError('Ya existe una cuenta con este correo electrónico.')
        return email

    def save(self, commit=True):
        user = super().save(commit=False)
        user.username = self.cleaned_data['email']
        user.email = self.cleaned_data['email']
        if commit:
            user.save()
        return user


# =============================================================================
# PROFILE FORM
# =============================================================================

class ProfileForm(BootstrapFormMixin, forms.ModelForm):
    """
    Profile update for every role: names and email live on auth.User,
    the rest on UserProfile. A new password is optional.
    """

    first_name = forms.CharField(label='Nombre', min_length=2, max_length=150)
    last_name = forms.CharField(label='Apellido', min_length=2, max_length=150)
    email = forms.EmailField(label='Correo electrónico')
    phone = PhoneNumberField(label='Teléfono')
    new_password = forms.CharField(
        label='Nueva contraseña',
        required=False,
        strip=False,
        widget=forms.PasswordInput(render_value=False),
        help_text='Déjalo en blanco para conservar la contraseña actual.'
    )

    class Meta:
        model = UserProfile
        fields = ['country', 'city', 'church', 'birth_date', 'phone']
        labels = {
            'country': 'País',
            'city': 'Ciudad',
            'church': 'Iglesia',
            'birth_date': 'Fecha de nacimiento',
        }
        widgets = {
            'birth_date': DatePickerInput(),
        }

    def __init__(self, *args, user=None, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)

        self.fields['city'].required = True
        self.fields['city'].widget = forms.Select(
            choices=[('', '(seleccione ciudad)')] + get_city_choices(),
            attrs={'class': 'form-select'}
        )
        self.fields['birth_date'].required = True
        self.fields['church'].required = False

        if user is not None and not self.is_bound:
            self.initial.setdefault('first_name', user.first_name)
            self.initial.setdefault('last_name', user.last_name)
            self.initial.setdefault('email', user.email)

    def clean_email(self):
        email = self.cleaned_data['email'].strip().lower()
        others = User.objects.filter(email__iexact=email)
        if self.user is not None:
            others = others.exclude(pk=self.user.pk)
        if others.exists():
            raise forms.ValidationError('Ya existe una cuenta con este correo electrónico.')
        return email

    def clean_city(self):
        city = (self.cleaned_data.get('city') or '').strip()
        if len(city) < 2:
            raise forms.ValidationError('La ciudad es requerida.')
        return city

    def clean_new_password(self):
        password = self.cleaned_data.get('new_password')
        if password:
            validate_password(password, self.user)
        return password

    def clean(self):
        cleaned_data = super().clean()

        country = cleaned_data.get('country')
        city = cleaned_data.get('city')
        valid_cities = get_cities_for_country(country)

        if country and city and valid_cities and city not in valid_cities:
            self.add_error('city', f"Selecciona una ciudad de {', '.join(valid_cities)}.")

        return cleaned_data

    def save(self, commit=True):
        profile = super().save(commit=False)
        user = self.user or profile.user

        user.first_name = self.cleaned_data['first_name']
        user.last_name = self.cleaned_data['last_name']
        user.email = self.cleaned_data['email']

        new_password = self.cleaned_data.get('new_password')
        if new_password:
            user.set_password(new_password)

        if commit:
            user.save()
            profile.save()

        return profile
