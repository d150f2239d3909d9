"""Database models for accounts app."""

import uuid
from typing import Final, final, override

from django.conf import settings
from django.db import models

_FULL_NAME_MAX_LENGTH: Final = 255
_AVATAR_URL_MAX_LENGTH: Final = 1024


@final
class UserProfile(models.Model):
    """Public details of a user.

    Django's user carries the email and the session; the profile adds
    the display name, the avatar and a stable account identifier that
    is copied onto every uploaded file.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='profile',
        primary_key=True,
    )

    account_id = models.UUIDField(
        default=uuid.uuid4,
        unique=True,
        editable=False,
    )

    full_name = models.CharField(
        max_length=_FULL_NAME_MAX_LENGTH,
        blank=True,
    )

    avatar_url = models.URLField(
        max_length=_AVATAR_URL_MAX_LENGTH,
        blank=True,
        help_text='Avatar image, a placeholder until the user sets one',
    )

    class Meta:
        """Model metadata."""

        verbose_name = 'User Profile'  # type: ignore[mutable-override]
        verbose_name_plural = 'User Profiles'  # type: ignore[mutable-override]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user.username}: {self.full_name}'
