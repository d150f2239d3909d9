"""Business logic for user accounts."""

import logging
from typing import Any

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from server.apps.accounts.models import UserProfile

User = get_user_model()

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)


def get_user_by_email(email: str) -> _User | None:
    """Find a user by email, ignoring case.

    Args:
        email: Email to look up.

    Returns:
        User instance or None.
    """
    return User.objects.filter(email__iexact=email.strip()).first()


def get_or_create_profile(user: _User) -> UserProfile:
    """Get or create profile for user (on-demand creation).

    Args:
        user: User to get the profile for.

    Returns:
        UserProfile instance for the user.
    """
    profile, created = UserProfile.objects.get_or_create(
        user=user,
        defaults={
            'full_name': user.get_full_name() or user.username,
            'avatar_url': settings.ACCOUNTS_AVATAR_PLACEHOLDER_URL,
        },
    )
    if created:
        logger.info(
            'Created profile for user %s: account %s',
            user.username,
            profile.account_id,
        )
    return profile


def create_account(full_name: str, email: str, password: str) -> UserProfile:
    """Create a user and their profile unless the email is taken.

    An existing account is returned untouched; the password is only
    set for new users.

    Args:
        full_name: Display name.
        email: Email, also used as the username.
        password: Raw password for the new user.

    Returns:
        Profile of the new or existing user.
    """
    email = email.strip().lower()
    existing_user = get_user_by_email(email)
    if existing_user is not None:
        logger.info('Account already exists for %s', email)
        return get_or_create_profile(existing_user)

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=email,
                email=email,
                password=password,
            )
            profile = UserProfile.objects.create(
                user=user,
                full_name=full_name.strip(),
                avatar_url=settings.ACCOUNTS_AVATAR_PLACEHOLDER_URL,
            )
    except Exception:
        logger.exception('Failed to create account for %s', email)
        raise

    logger.info(
        'Created account %s for %s',
        profile.account_id,
        email,
    )
    return profile
