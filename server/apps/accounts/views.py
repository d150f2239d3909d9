"""Views for the accounts app."""

import logging

from django.contrib.auth import login
from django.contrib.auth.views import LoginView, LogoutView
from django.http import HttpResponse
from django.urls import reverse_lazy
from django.views.generic import FormView

from server.apps.accounts.forms import EmailAuthenticationForm, SignUpForm
from server.apps.accounts.logic.account_operations import create_account

logger = logging.getLogger(__name__)


class SignUpView(FormView):
    """Create an account and start a session for it."""

    template_name = 'accounts/sign_up.html'
    form_class = SignUpForm
    success_url = reverse_lazy('files:dashboard')

    def form_valid(self, form: SignUpForm) -> HttpResponse:
        profile = create_account(
            full_name=form.cleaned_data['full_name'],
            email=form.cleaned_data['email'],
            password=form.cleaned_data['password'],
        )
        login(
            self.request,
            profile.user,
            backend='django.contrib.auth.backends.ModelBackend',
        )
        logger.info('Signed up %s', profile.user.email)
        return super().form_valid(form)


class SignInView(LoginView):
    """Email and password sign-in over the session cookie."""

    template_name = 'accounts/sign_in.html'
    authentication_form = EmailAuthenticationForm
    redirect_authenticated_user = True


class SignOutView(LogoutView):
    """End the session (POST only)."""
