"""Formatting helpers shared by templates, admin and views."""

from datetime import datetime
from typing import Final, Literal, TypedDict

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from server.apps.files.infrastructure.metadata import (
    AUDIO,
    DOCUMENT,
    IMAGE,
    OTHER,
    VIDEO,
)
from server.apps.files.logic.quota_operations import QuotaSnapshot

_KB: Final = 1024
_MB: Final = _KB * 1024
_GB: Final = _MB * 1024

_EMPTY_DATE: Final = '—'

_MONTHS_SHORT: Final = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)
_MONTHS_LONG: Final = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)

_ICONS: Final = '/static/assets/icons/'

_EXTENSION_ICONS: Final = {
    'pdf': 'file-pdf.svg',
    'doc': 'file-doc.svg',
    'docx': 'file-docx.svg',
    'csv': 'file-csv.svg',
    'txt': 'file-txt.svg',
    'xls': 'file-document.svg',
    'xlsx': 'file-document.svg',
    'svg': 'file-image.svg',
    **dict.fromkeys(
        ('mkv', 'mov', 'avi', 'wmv', 'mp4', 'flv', 'webm', 'm4v', '3gp'),
        'file-video.svg',
    ),
    **dict.fromkeys(
        (
            'mp3', 'mpeg', 'wav', 'aac', 'flac',
            'ogg', 'wma', 'm4a', 'aiff', 'alac',
        ),
        'file-audio.svg',
    ),
}

_CATEGORY_ICONS: Final = {
    IMAGE: 'file-image.svg',
    DOCUMENT: 'file-document.svg',
    VIDEO: 'file-video.svg',
    AUDIO: 'file-audio.svg',
}

# Route slug -> categories shown on that page
FILE_TYPE_ROUTES: Final = {
    'documents': (DOCUMENT,),
    'images': (IMAGE,),
    'media': (VIDEO, AUDIO),
    'others': (OTHER,),
}

DateFormat = Literal['short', 'medium', 'long']


class UsageCard(TypedDict):
    """One dashboard card of the storage summary."""

    title: str
    size: int
    latest_date: datetime | None
    icon: str
    url: str


def convert_file_size(size_bytes: int, digits: int = 1) -> str:
    """Display file size in human-readable format.

    Args:
        size_bytes: Size in bytes.
        digits: Decimal places for KB and larger.

    Returns:
        Formatted size string (e.g., '512 Bytes', '1.5 MB').
    """
    if size_bytes < _KB:
        return f'{size_bytes} Bytes'
    if size_bytes < _MB:
        return f'{size_bytes / _KB:.{digits}f} KB'
    if size_bytes < _GB:
        return f'{size_bytes / _MB:.{digits}f} MB'
    return f'{size_bytes / _GB:.{digits}f} GB'


def calculate_percentage(size_bytes: int, total_bytes: int) -> float:
    """Share of total_bytes used, in percent, rounded to 2 places."""
    if total_bytes <= 0:
        return 0.0
    return round(size_bytes / total_bytes * 100, 2)


def format_date_time(
    value: datetime | str | None,
    date_format: DateFormat = 'medium',
) -> str:
    """Format a timestamp like '1:30pm, 16 Jun'.

    - 'short': time, day and short month
    - 'medium': like short, plus the year when it isn't the current one
    - 'long': time, day, full month and year

    Args:
        value: Datetime or ISO 8601 string.
        date_format: One of 'short', 'medium', 'long'.

    Returns:
        Formatted string, or '—' for missing or unparsable input.
    """
    if not value:
        return _EMPTY_DATE

    if isinstance(value, str):
        try:
            parsed = parse_datetime(value)
        except ValueError:
            parsed = None
        if parsed is None:
            return _EMPTY_DATE
        value = parsed

    if timezone.is_aware(value):
        value = timezone.localtime(value)

    hour = value.hour % 12 or 12
    period = 'pm' if value.hour >= 12 else 'am'
    time = f'{hour}:{value.minute:02d}{period}'
    month_index = value.month - 1

    if date_format == 'short':
        return f'{time}, {value.day} {_MONTHS_SHORT[month_index]}'
    if date_format == 'long':
        return (
            f'{time}, {value.day} {_MONTHS_LONG[month_index]} {value.year}'
        )

    formatted = f'{time}, {value.day} {_MONTHS_SHORT[month_index]}'
    if value.year != timezone.localtime().year:
        formatted = f'{formatted} {value.year}'
    return formatted


def get_file_icon(extension: str, category: str) -> str:
    """Static icon path for a file.

    Known extensions get a dedicated icon, everything else falls back
    to the icon of its category.
    """
    icon = _EXTENSION_ICONS.get(extension)
    if icon is None:
        icon = _CATEGORY_ICONS.get(category, 'file-other.svg')
    return f'{_ICONS}{icon}'


def get_file_types_params(file_type: str) -> tuple[str, ...]:
    """Categories listed on the page for a route slug.

    Unknown slugs show documents.
    """
    return FILE_TYPE_ROUTES.get(file_type, (DOCUMENT,))


def _latest(*dates: datetime | None) -> datetime | None:
    present = [date for date in dates if date is not None]
    return max(present) if present else None


def get_usage_summary(total_space: QuotaSnapshot) -> list[UsageCard]:
    """Build the dashboard cards for a quota snapshot.

    Video and audio are shown together as 'Media'.

    Args:
        total_space: Snapshot from get_total_space_used().

    Returns:
        Cards for documents, images, media and others.
    """
    video = total_space[VIDEO]
    audio = total_space[AUDIO]
    return [
        UsageCard(
            title='Documents',
            size=total_space[DOCUMENT].size,
            latest_date=total_space[DOCUMENT].latest_date,
            icon=f'{_ICONS}file-document-light.svg',
            url='/documents/',
        ),
        UsageCard(
            title='Images',
            size=total_space[IMAGE].size,
            latest_date=total_space[IMAGE].latest_date,
            icon=f'{_ICONS}file-image-light.svg',
            url='/images/',
        ),
        UsageCard(
            title='Media',
            size=video.size + audio.size,
            latest_date=_latest(video.latest_date, audio.latest_date),
            icon=f'{_ICONS}file-video-light.svg',
            url='/media/',
        ),
        UsageCard(
            title='Others',
            size=total_space[OTHER].size,
            latest_date=total_space[OTHER].latest_date,
            icon=f'{_ICONS}file-other-light.svg',
            url='/others/',
        ),
    ]
