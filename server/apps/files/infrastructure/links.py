"""View and download links for stored files."""

from django.core.files.storage import default_storage

from server.apps.files.models import File


def construct_file_url(file_instance: File) -> str:
    """Link that opens the file in the browser.

    Args:
        file_instance: File to link to.

    Returns:
        Signed storage URL.
    """
    return default_storage.url(file_instance.bucket_file_id)


def construct_download_url(file_instance: File) -> str:
    """Link that downloads the file under its display name.

    Args:
        file_instance: File to link to.

    Returns:
        Signed storage URL with an attachment disposition.
    """
    return default_storage.download_url(  # type: ignore[attr-defined]
        file_instance.bucket_file_id,
        file_instance.name,
    )
