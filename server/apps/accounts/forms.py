"""Forms for signing up and signing in."""

from django import forms
from django.contrib.auth.forms import AuthenticationForm

from server.apps.accounts.logic.account_operations import get_user_by_email


class SignUpForm(forms.Form):
    """New account details."""

    full_name = forms.CharField(max_length=255, strip=True)
    email = forms.EmailField()
    password = forms.CharField(
        min_length=8,
        widget=forms.PasswordInput,
    )

    def clean_email(self) -> str:
        email = self.cleaned_data['email'].strip().lower()
        if get_user_by_email(email) is not None:
            raise forms.ValidationError(
                'An account with this email already exists.',
            )
        return email


class EmailAuthenticationForm(AuthenticationForm):
    """Sign in with email and password."""

    username = forms.EmailField(
        label='Email',
        widget=forms.EmailInput(attrs={'autofocus': True}),
    )

    def clean_username(self) -> str:
        return self.cleaned_data['username'].strip().lower()
