"""File storage limits."""

from server.settings.components import config

# Total storage available to each user (2 GB)
FILES_STORAGE_QUOTA_BYTES = config(
    'FILES_STORAGE_QUOTA_BYTES',
    cast=int,
    default=2 * 1024 * 1024 * 1024,
)

# Largest single upload accepted (50 MB)
FILES_MAX_UPLOAD_BYTES = config(
    'FILES_MAX_UPLOAD_BYTES',
    cast=int,
    default=50 * 1024 * 1024,
)
