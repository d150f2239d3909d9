"""Database models for files app."""

from typing import Final, final, override

from django.conf import settings
from django.db import models

from server.apps.files.infrastructure import metadata

# Constants for field max lengths
_NAME_MAX_LENGTH: Final = 255
_EXTENSION_MAX_LENGTH: Final = 32
_CATEGORY_MAX_LENGTH: Final = 16
_STORAGE_PATH_MAX_LENGTH: Final = 512


class Category(models.TextChoices):
    """File category, derived from the extension at upload time."""

    DOCUMENT = metadata.DOCUMENT, 'Document'
    IMAGE = metadata.IMAGE, 'Image'
    VIDEO = metadata.VIDEO, 'Video'
    AUDIO = metadata.AUDIO, 'Audio'
    OTHER = metadata.OTHER, 'Other'


@final
class File(models.Model):
    """File stored in S3-compatible storage.

    Each file belongs to exactly one user. The storage key follows the
    pattern {user_id}/{blob id}/{original filename} and never changes;
    renaming only touches the display name.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='files',
        db_index=True,
    )

    account_id = models.UUIDField(
        null=True,
        blank=True,
        help_text="Owner's account identifier at upload time",
    )

    # upload_to='' means we control the full path
    file = models.FileField(
        upload_to='',
        max_length=_STORAGE_PATH_MAX_LENGTH,
        help_text='Path in storage: {user_id}/{blob id}/file.ext',
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
        help_text='Display name, always ends with the extension',
    )

    extension = models.CharField(
        max_length=_EXTENSION_MAX_LENGTH,
        blank=True,
        help_text='Lowercase extension without dot',
    )

    category = models.CharField(
        max_length=_CATEGORY_MAX_LENGTH,
        choices=Category.choices,
        default=Category.OTHER,
        db_index=True,
    )

    size_bytes = models.BigIntegerField(
        help_text='File size in bytes',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering = ['-created_at']

        indexes = [
            models.Index(
                fields=['user', 'category'],
                name='files_user_category_idx',
            ),
            models.Index(
                fields=['user', '-created_at'],
                name='files_user_recent_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user.username}:{self.name}'

    @property
    def bucket_file_id(self) -> str:
        """Storage key of the blob behind this record."""
        return self.file.name

    def is_owned_by(self, user: object) -> bool:
        """Check whether user owns this file.

        Args:
            user: Acting user.

        Returns:
            True if the user is the owner.
        """
        return self.user_id == getattr(user, 'pk', None)

    def get_shared_emails(self) -> list[str]:
        """Emails of collaborators, in the order they were granted.

        Returns:
            List of collaborator emails.
        """
        return [share.email for share in self.shares.all()]


@final
class FileShare(models.Model):
    """Read access to a file granted to an email address.

    Sharing never transfers ownership; the owner replaces the whole set
    of shares at once.
    """

    file = models.ForeignKey(
        File,
        on_delete=models.CASCADE,
        related_name='shares',
    )

    email = models.EmailField(
        db_index=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File Share'  # type: ignore[mutable-override]
        verbose_name_plural = 'File Shares'  # type: ignore[mutable-override]
        ordering = ['id']

        constraints = [
            models.UniqueConstraint(
                fields=['file', 'email'],
                name='file_shares_file_email_unique',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.file_id}:{self.email}'
