"""Metadata extraction utilities for files."""

import uuid
from pathlib import Path
from typing import Final, NamedTuple

from django.core.exceptions import ValidationError

DOCUMENT: Final = 'document'
IMAGE: Final = 'image'
VIDEO: Final = 'video'
AUDIO: Final = 'audio'
OTHER: Final = 'other'

CATEGORIES: Final = (DOCUMENT, IMAGE, VIDEO, AUDIO, OTHER)

_DOCUMENT_EXTENSIONS: Final = frozenset((
    'pdf',
    'doc',
    'docx',
    'txt',
    'xls',
    'xlsx',
    'csv',
    'rtf',
    'ods',
    'ppt',
    'odp',
    'md',
    'html',
    'htm',
    'epub',
    'pages',
    'fig',
    'psd',
    'ai',
    'indd',
    'xd',
    'sketch',
    'afdesign',
    'afphoto',
))
_IMAGE_EXTENSIONS: Final = frozenset((
    'jpg', 'jpeg', 'png', 'gif', 'bmp', 'svg', 'webp',
))
_VIDEO_EXTENSIONS: Final = frozenset(('mp4', 'avi', 'mov', 'mkv', 'webm'))
_AUDIO_EXTENSIONS: Final = frozenset(('mp3', 'wav', 'ogg', 'flac'))


class FileType(NamedTuple):
    """Category and normalized extension of a file."""

    category: str
    extension: str


def get_file_extension(filename: str) -> str:
    """Get file extension from filename.

    Args:
        filename: Filename (e.g., 'document.pdf').

    Returns:
        Extension without dot, lowercase (e.g., 'pdf').
        Returns empty string if no extension.
    """
    extension = Path(filename).suffix
    return extension.lstrip('.').lower()


def get_file_type(filename: str) -> FileType:
    """Classify a file by its extension.

    Example: 'Holiday.JPG' -> FileType('image', 'jpg')

    Args:
        filename: Filename with extension.

    Returns:
        FileType with one of CATEGORIES and the lowercase extension.
        Files without a known extension are classified as 'other'.
    """
    extension = get_file_extension(filename)
    if not extension:
        return FileType(OTHER, '')

    if extension in _DOCUMENT_EXTENSIONS:
        return FileType(DOCUMENT, extension)
    if extension in _IMAGE_EXTENSIONS:
        return FileType(IMAGE, extension)
    if extension in _VIDEO_EXTENSIONS:
        return FileType(VIDEO, extension)
    if extension in _AUDIO_EXTENSIONS:
        return FileType(AUDIO, extension)
    return FileType(OTHER, extension)


def ensure_extension(name: str, extension: str) -> str:
    """Append extension to name unless it already ends with it.

    The suffix check is case-insensitive: 'REPORT.PDF' keeps its name
    for extension 'pdf'.

    Args:
        name: Name supplied by the user.
        extension: Extension without dot. Empty means no extension.

    Returns:
        Name that carries the extension as a suffix.
    """
    if not extension:
        return name
    if name.lower().endswith(f'.{extension.lower()}'):
        return name
    return f'{name}.{extension}'


def extract_filename(storage_path: str) -> str:
    """Extract filename from storage path.

    Args:
        storage_path: Full path (e.g., '123/4f1c.../file.pdf').

    Returns:
        Filename (e.g., 'file.pdf').
    """
    return Path(storage_path).name


def build_storage_path(user_id: int, filename: str) -> str:
    """Build a unique storage key for a new upload.

    Every upload gets its own random folder so two uploads with the
    same filename never collide.

    Args:
        user_id: Owner's user ID.
        filename: Original filename.

    Returns:
        Storage path: '{user_id}/{hex id}/{filename}'.
    """
    return '{user_id}/{blob_id}/{filename}'.format(
        user_id=user_id,
        blob_id=uuid.uuid4().hex,
        filename=extract_filename(filename),
    )


def validate_storage_path(user_id: int, storage_path: str) -> None:
    """Validate storage path follows user isolation rules.

    Ensures the storage path starts with the user's ID to maintain
    multi-user isolation.

    Args:
        user_id: Owner's user ID.
        storage_path: Proposed storage path.

    Raises:
        ValidationError: If path doesn't start with user_id or is invalid.
    """
    if not storage_path:
        raise ValidationError('Storage path cannot be empty')

    path_parts = Path(storage_path).parts
    if not path_parts:
        raise ValidationError('Storage path must have at least one component')

    try:
        path_user_id = int(path_parts[0])
    except ValueError as error:
        raise ValidationError(
            'Storage path must start with user ID',
        ) from error

    if path_user_id != user_id:
        raise ValidationError(
            f'Storage path user ID ({path_user_id}) does not match '
            f'owner ({user_id})',
        )
