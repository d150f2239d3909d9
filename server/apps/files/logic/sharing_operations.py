"""Business logic for sharing files with other users."""

import logging
from collections.abc import Iterable
from typing import Any

from django.core.validators import validate_email
from django.db import transaction

from server.apps.files.logic.file_operations import get_owned_file
from server.apps.files.models import File, FileShare

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)


def normalize_emails(emails: Iterable[str], owner_email: str = '') -> list[str]:
    """Clean up a list of collaborator emails.

    Emails are stripped, lowercased and de-duplicated, keeping the
    first occurrence. Blank entries and the owner's own email are
    dropped.

    Args:
        emails: Raw emails as typed by the user.
        owner_email: Email of the file owner.

    Returns:
        Normalized list of emails.

    Raises:
        ValidationError: If any email is malformed.
    """
    owner_email = owner_email.strip().lower()
    normalized: list[str] = []
    for raw_email in emails:
        email = raw_email.strip().lower()
        if not email or email == owner_email or email in normalized:
            continue
        validate_email(email)
        normalized.append(email)
    return normalized


def update_file_users(
    user: _User,
    file_id: int,
    emails: Iterable[str],
) -> File:
    """Replace the list of emails that can access a file.

    The new list fully replaces the old one: emails missing from it
    lose access.

    Args:
        user: Acting user, must be the owner.
        file_id: ID of file to share.
        emails: Complete list of collaborator emails.

    Returns:
        Updated File instance.

    Raises:
        File.DoesNotExist: If file doesn't exist.
        FilePermissionError: If user is not the owner.
        ValidationError: If any email is malformed.
    """
    file_instance = get_owned_file(user, file_id, 'share')
    new_emails = normalize_emails(emails, owner_email=user.email)

    try:
        with transaction.atomic():
            file_instance.shares.all().delete()
            FileShare.objects.bulk_create(
                FileShare(file=file_instance, email=email)
                for email in new_emails
            )
            file_instance.save(update_fields=['updated_at'])
    except Exception:
        logger.exception(
            'Failed to update file sharing permissions: ID=%d',
            file_id,
        )
        raise

    logger.info(
        'File %d now shared with %d users',
        file_id,
        len(new_emails),
    )
    return file_instance
