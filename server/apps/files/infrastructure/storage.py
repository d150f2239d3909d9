"""S3-compatible storage backend for user files."""

import logging
from typing import final

from django.utils.http import content_disposition_header
from storages.backends.s3 import S3Storage

logger = logging.getLogger(__name__)


@final
class FileStorage(S3Storage):
    """S3Storage with upload compensation and attachment links.

    Saving and deleting are plain S3Storage; failures propagate to
    the logic layer, which logs them.
    """

    def rollback_upload(self, name: str) -> None:
        """Remove a blob whose database record was never written.

        Best-effort: a failure leaves an orphaned blob and is logged,
        so the database error stays the one the caller sees.

        Args:
            name: Storage key of the blob.
        """
        logger.warning('Removing blob of failed upload: %s', name)
        try:
            self.delete(name)
        except Exception:
            logger.exception('Could not remove blob, left orphaned: %s', name)

    def download_url(self, name: str, filename: str) -> str:
        """Build a signed URL that makes browsers save the file.

        Args:
            name: Storage key of the blob.
            filename: Name offered to the browser.

        Returns:
            URL with an attachment content disposition.
        """
        disposition = content_disposition_header(
            as_attachment=True,
            filename=filename,
        )
        return self.url(
            name,
            parameters={'ResponseContentDisposition': disposition},
        )
