"""Business logic for file operations."""

import logging
from typing import TYPE_CHECKING, Any, BinaryIO, Final

from django.conf import settings
from django.core.files.base import File as DjangoFile
from django.core.files.storage import default_storage
from django.db import transaction
from django.db.models import Q, QuerySet

from server.apps.accounts.logic.account_operations import get_or_create_profile
from server.apps.files.exceptions import (
    FilePermissionError,
    FileTooLargeError,
    InvalidFileNameError,
)
from server.apps.files.infrastructure.metadata import (
    build_storage_path,
    ensure_extension,
    extract_filename,
    get_file_type,
    validate_storage_path,
)
from server.apps.files.logic.quota_operations import check_quota
from server.apps.files.models import File

if TYPE_CHECKING:
    from server.apps.files.infrastructure.storage import FileStorage

# User type for Django's dynamic user model
_User = Any

DEFAULT_SORT: Final = 'created_at-desc'

# Sort keys accepted from the UI, including the legacy `$createdAt` style
_SORT_FIELDS: Final = {
    'created_at': 'created_at',
    '$createdAt': 'created_at',
    'updated_at': 'updated_at',
    '$updatedAt': 'updated_at',
    'name': 'name',
    'size': 'size_bytes',
}

logger = logging.getLogger(__name__)


def _get_storage() -> 'FileStorage':
    """Get the configured default storage backend.

    Returns:
        FileStorage instance with proper S3 configuration.
    """
    return default_storage  # type: ignore[return-value]


def _get_file_size(file_obj: BinaryIO | DjangoFile) -> int:
    """Get file size from file object.

    Args:
        file_obj: File-like object.

    Returns:
        File size in bytes.
    """
    if hasattr(file_obj, 'size'):
        return file_obj.size
    file_size = len(file_obj.read())
    file_obj.seek(0)
    return file_size


def _check_name_length(name: str) -> None:
    """Reject display names the name column can't hold.

    Raises:
        InvalidFileNameError: If the name is too long.
    """
    max_length = File._meta.get_field('name').max_length
    if max_length is not None and len(name) > max_length:
        raise InvalidFileNameError(
            f'File name is too long: {len(name)} characters '
            f'(maximum: {max_length})',
        )


def get_owned_file(user: _User, file_id: int, action: str) -> File:
    """Load a file and make sure user owns it.

    Args:
        user: Acting user.
        file_id: ID of the file.
        action: Attempted action, used in the error message.

    Returns:
        File instance owned by user.

    Raises:
        File.DoesNotExist: If file doesn't exist.
        FilePermissionError: If user is not the owner.
    """
    file_instance = File.objects.select_related('user').get(id=file_id)
    if not file_instance.is_owned_by(user):
        logger.warning(
            'User %s may not %s file %d owned by %s',
            user.username,
            action,
            file_id,
            file_instance.user.username,
        )
        raise FilePermissionError(file_id, action)
    return file_instance


def upload_file(
    user: _User,
    file_obj: BinaryIO | DjangoFile,
    filename: str | None = None,
) -> File:
    """Upload file to storage and create database record.

    Transaction safety: Upload to storage first, then create DB record.
    If DB transaction fails, the uploaded file is deleted from storage
    (rollback).

    Args:
        user: Owner of the file.
        file_obj: File-like object to upload.
        filename: Original filename. Defaults to file_obj.name.

    Returns:
        Created File instance.

    Raises:
        FileTooLargeError: If the file is larger than a single upload may be.
        QuotaExceededError: If the upload would exceed the user's quota.
        InvalidFileNameError: If the filename is missing or too long.
        ValidationError: If storage path validation fails.
        Exception: If upload or DB operation fails.
    """
    filename = extract_filename(filename or getattr(file_obj, 'name', ''))
    if not filename:
        raise InvalidFileNameError('Uploaded file has no name')
    _check_name_length(filename)

    file_size = _get_file_size(file_obj)
    max_bytes = settings.FILES_MAX_UPLOAD_BYTES
    if file_size > max_bytes:
        raise FileTooLargeError(file_size, max_bytes)

    check_quota(user, file_size)
    account_id = get_or_create_profile(user).account_id

    storage_path = build_storage_path(user.id, filename)
    validate_storage_path(user.id, storage_path)
    file_type = get_file_type(filename)

    storage = _get_storage()

    # Step 1: Upload to storage first
    try:
        saved_name = storage.save(storage_path, file_obj)
    except Exception:
        logger.exception('Failed to upload file: %s', filename)
        raise

    # Step 2: Create database record (in transaction)
    try:
        with transaction.atomic():
            file_instance = File.objects.create(
                user=user,
                account_id=account_id,
                file=saved_name,
                name=filename,
                extension=file_type.extension,
                category=file_type.category,
                size_bytes=file_size,
            )
    except Exception:
        # Rollback: Delete file from storage since DB transaction failed
        logger.exception(
            'Failed to create file record, rolling back storage upload: %s',
            saved_name,
        )
        storage.rollback_upload(saved_name)
        raise

    logger.info(
        'File record created: %s (ID: %d, category: %s)',
        file_instance.name,
        file_instance.id,
        file_instance.category,
    )
    return file_instance


def accessible_files(user: _User) -> QuerySet[File]:
    """Files the user owns or that were shared with their email.

    Args:
        user: Acting user.

    Returns:
        QuerySet of accessible files (without duplicates).
    """
    access = Q(user=user)
    if user.email:
        access |= Q(shares__email__iexact=user.email)
    return File.objects.filter(access).distinct()


def _parse_sort(sort: str) -> list[str]:
    """Translate 'field-direction' into an ORM ordering.

    Unknown fields fall back to newest first.

    Args:
        sort: Sort key such as 'name-asc' or '$createdAt-desc'.

    Returns:
        Ordering arguments for QuerySet.order_by().
    """
    sort_by, _, order_by = (sort or DEFAULT_SORT).rpartition('-')
    field_name = _SORT_FIELDS.get(sort_by)
    if field_name is None or order_by not in {'asc', 'desc'}:
        logger.debug('Unknown sort key %r, using %s', sort, DEFAULT_SORT)
        return ['-created_at', '-id']

    prefix = '' if order_by == 'asc' else '-'
    return [f'{prefix}{field_name}', f'{prefix}id']


def list_files(
    user: _User,
    categories: list[str] | tuple[str, ...] = (),
    search_text: str = '',
    sort: str = DEFAULT_SORT,
    limit: int | None = None,
) -> QuerySet[File]:
    """List files the user owns or that are shared with them.

    Args:
        user: Acting user.
        categories: Only return these categories. Empty means all.
        search_text: Case-insensitive substring of the file name.
        sort: 'field-direction' ordering, e.g. 'size-desc'.
        limit: Maximum number of results.

    Returns:
        QuerySet of matching files.
    """
    files = accessible_files(user)

    if categories:
        files = files.filter(category__in=list(categories))
    if search_text:
        files = files.filter(name__icontains=search_text)

    files = files.order_by(*_parse_sort(sort)).select_related('user')

    if limit:
        files = files[:limit]

    logger.debug(
        'Listing files for user %s (categories=%s, search=%r, sort=%s)',
        user.username,
        list(categories),
        search_text,
        sort,
    )
    return files


def get_file(user: _User, file_id: int) -> File:
    """Get a file the user may read.

    Args:
        user: Acting user.
        file_id: ID of the file.

    Returns:
        File instance.

    Raises:
        File.DoesNotExist: If file doesn't exist or isn't accessible.
    """
    return accessible_files(user).get(id=file_id)


def rename_file(user: _User, file_id: int, name: str) -> File:
    """Rename a file (display name only, the blob keeps its key).

    The file's extension is appended when the new name lacks it.

    Args:
        user: Acting user, must be the owner.
        file_id: ID of file to rename.
        name: New name, with or without the extension.

    Returns:
        Updated File instance.

    Raises:
        File.DoesNotExist: If file doesn't exist.
        FilePermissionError: If user is not the owner.
        InvalidFileNameError: If the new name is empty or too long.
    """
    name = name.strip()
    if not name:
        raise InvalidFileNameError('File name cannot be empty')

    file_instance = get_owned_file(user, file_id, 'rename')
    new_name = ensure_extension(name, file_instance.extension)
    _check_name_length(new_name)

    old_name = file_instance.name
    try:
        file_instance.name = new_name
        file_instance.save(update_fields=['name', 'updated_at'])
    except Exception:
        logger.exception('Failed to rename file: ID=%d', file_id)
        raise

    logger.info(
        'Renamed file %d: %s -> %s',
        file_id,
        old_name,
        new_name,
    )
    return file_instance


def delete_file(user: _User, file_id: int) -> None:
    """Delete file from database and storage.

    Transaction safety: Delete DB record first. The blob is only
    deleted once the record is gone, so a failed DB delete never
    leaves a record pointing at a missing blob.

    Args:
        user: Acting user, must be the owner.
        file_id: ID of file to delete.

    Raises:
        File.DoesNotExist: If file doesn't exist.
        FilePermissionError: If user is not the owner.
        Exception: If DB or storage deletion fails.
    """
    file_instance = get_owned_file(user, file_id, 'delete')

    storage_name = file_instance.bucket_file_id
    logger.info(
        'Deleting file: ID=%d, path=%s',
        file_id,
        storage_name,
    )

    # Step 1: Delete from database
    try:
        with transaction.atomic():
            file_instance.delete()
    except Exception:
        logger.exception('Failed to delete file from database: ID=%d', file_id)
        raise
    logger.info('File record deleted from database: ID=%d', file_id)

    # Step 2: Delete from storage
    try:
        _get_storage().delete(storage_name)
    except Exception:
        logger.exception(
            'Failed to delete blob, left orphaned: %s',
            storage_name,
        )
        raise
    logger.info('Blob deleted from storage: %s', storage_name)
