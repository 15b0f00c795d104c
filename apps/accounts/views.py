# accounts/views.py

from django.shortcuts import render, redirect
from django.contrib.auth import login, logout, update_session_auth_hash
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_POST
import logging

from .models import UserProfile
from .forms import LoginForm, RegistrationForm, ProfileForm

logger = logging.getLogger(__name__)


# =============================================================================
# AUTHENTICATION VIEWS
# =============================================================================

@never_cache
def login_view(request):
    """Handle user login, then let core:home pick the dashboard for the role"""

    if request.user.is_authenticated:
        return redirect('core:home')

    if request.method == 'POST':
        form = LoginForm(request, data=request.POST)

        if form.is_valid():
            user = form.get_user()
            login(request, user)
            logger.info(f"User {user.username} logged in successfully")

            next_url = request.GET.get('next') or request.POST.get('next')
            if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                return redirect(next_url)

            return redirect('core:home')
        else:
            logger.warning(f"Failed login attempt for: {request.POST.get('username', '')}")
            messages.error(request, "Correo electrónico o contraseña incorrectos.", extra_tags='sweetalert-error')
    else:
        form = LoginForm()

    return render(request, 'accounts/login.html', {'form': form})


@require_POST
def logout_view(request):
    """Handle user logout"""
    username = request.user.username if request.user.is_authenticated else 'Unknown'
    logout(request)
    messages.success(request, "Sesión cerrada correctamente.", extra_tags='sweetalert')
    logger.info(f"User {username} logged out")
    return redirect('accounts:login')


@never_cache
def register_view(request):
    """Self-service registration; new accounts are savers"""

    if request.user.is_authenticated:
        return redirect('core:home')

    if request.method == 'POST':
        form = RegistrationForm(request.POST)

        if form.is_valid():
            user = form.save()
            login(request, user, backend='accounts.backends.EmailAuthBackend')
            messages.success(request, "Usuario creado exitosamente", extra_tags='sweetalert')
            logger.info(f"New user registered: {user.email}")
            return redirect('core:home')
        else:
            messages.error(request, "Por favor corrige los errores del formulario.", extra_tags='sweetalert-error')
    else:
        form = RegistrationForm()

    return render(request, 'accounts/register.html', {'form': form})


# =============================================================================
# PROFILE VIEWS
# =============================================================================

@login_required
def profile_update(request):
    """Let any user edit their own profile and optionally change password"""

    profile, _ = UserProfile.objects.get_or_create(user=request.user)

    if request.method == 'POST':
        form = ProfileForm(request.POST, instance=profile, user=request.user)

        if form.is_valid():
            try:
                form.save()
            except Exception as e:
                logger.error(f"Error updating profile for {request.user.username}: {e}")
                messages.error(request, f"Error al actualizar el perfil: {e}", extra_tags='sweetalert-error')
            else:
                if form.cleaned_data.get('new_password'):
                    update_session_auth_hash(request, request.user)
                    logger.info(f"Password changed for user: {request.user.username}")

                messages.success(request, "Perfil actualizado correctamente", extra_tags='sweetalert')
                logger.info(f"Profile updated for user: {request.user.username}")
                return redirect('accounts:profile')
        else:
            messages.error(request, "Por favor corrige los errores del formulario.", extra_tags='sweetalert-error')
    else:
        form = ProfileForm(instance=profile, user=request.user)

    return render(request, 'accounts/profile.html', {
        'form': form,
        'profile': profile,
    })
