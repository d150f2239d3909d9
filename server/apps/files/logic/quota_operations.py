"""Business logic for storage quota operations.

Usage is never stored: every snapshot is folded from the owner's
current files, so it cannot drift from what is actually in storage.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from django.conf import settings

from server.apps.files.exceptions import QuotaExceededError
from server.apps.files.infrastructure.metadata import CATEGORIES, OTHER
from server.apps.files.models import File

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CategoryUsage:
    """Storage used by one category."""

    size: int = 0
    latest_date: datetime | None = None


@dataclass(slots=True)
class QuotaSnapshot:
    """Derived per-category and total storage usage for one user."""

    categories: dict[str, CategoryUsage] = field(
        default_factory=lambda: {
            category: CategoryUsage() for category in CATEGORIES
        },
    )
    used: int = 0
    all: int = 0  # noqa: WPS125

    def __getitem__(self, category: str) -> CategoryUsage:
        """Usage for a single category."""
        return self.categories[category]

    def available_bytes(self) -> int:
        """Get available storage space.

        Returns:
            Available bytes (never negative).
        """
        return max(0, self.all - self.used)

    def has_space_for(self, size_bytes: int) -> bool:
        """Check if there's enough space for the given size.

        Args:
            size_bytes: Size to check in bytes.

        Returns:
            True if there's enough space, False otherwise.
        """
        return self.used + size_bytes <= self.all


def get_quota_bytes() -> int:
    """Storage ceiling every user gets."""
    return settings.FILES_STORAGE_QUOTA_BYTES


def get_total_space_used(user: _User) -> QuotaSnapshot:
    """Fold the user's own files into a quota snapshot.

    Shared files count towards their owner only.

    Args:
        user: Owner to summarize.

    Returns:
        QuotaSnapshot with size and latest update per category.
    """
    snapshot = QuotaSnapshot(all=get_quota_bytes())

    rows = File.objects.filter(user=user).values_list(
        'category',
        'size_bytes',
        'updated_at',
    )
    for category, size_bytes, updated_at in rows:
        usage = snapshot.categories.get(category)
        if usage is None:
            usage = snapshot.categories[OTHER]
        usage.size += size_bytes
        snapshot.used += size_bytes

        if usage.latest_date is None or updated_at > usage.latest_date:
            usage.latest_date = updated_at

    logger.debug(
        'Storage used by user %s: %d of %d bytes',
        user.username,
        snapshot.used,
        snapshot.all,
    )
    return snapshot


def check_quota(user: _User, size_bytes: int) -> None:
    """Check if user has enough quota for an upload.

    Args:
        user: User to check quota for.
        size_bytes: Size of the upload in bytes.

    Raises:
        QuotaExceededError: If upload would exceed quota.
    """
    snapshot = get_total_space_used(user)

    if not snapshot.has_space_for(size_bytes):
        logger.warning(
            'Quota exceeded for user %s: need %d, have %d available',
            user.username,
            size_bytes,
            snapshot.available_bytes(),
        )
        raise QuotaExceededError(
            quota_bytes=snapshot.all,
            used_bytes=snapshot.used,
            required_bytes=size_bytes,
        )
