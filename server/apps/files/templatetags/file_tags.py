"""Template filters for file cards and the usage dashboard."""

from django import template

from server.apps.files import presentation
from server.apps.files.infrastructure import links
from server.apps.files.models import File

register = template.Library()


@register.filter
def file_size(size_bytes: int) -> str:
    """Render a byte count, e.g. `{{ file.size_bytes|file_size }}`."""
    return presentation.convert_file_size(size_bytes or 0)


@register.filter
def date_time(value, date_format: str = 'medium') -> str:
    """Render a timestamp, e.g. `{{ file.created_at|date_time:'long' }}`."""
    return presentation.format_date_time(value, date_format)  # type: ignore[arg-type]


@register.filter
def file_icon(file_instance: File) -> str:
    return presentation.get_file_icon(
        file_instance.extension,
        file_instance.category,
    )


@register.simple_tag
def file_url(file_instance: File) -> str:
    return links.construct_file_url(file_instance)
