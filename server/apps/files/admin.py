"""Django admin configuration for files app."""


from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.files.models import File, FileShare
from server.apps.files.presentation import convert_file_size


class FileShareInline(admin.TabularInline):
    """Collaborators listed on the file page."""

    model = FileShare
    extra = 0
    fields = ['email', 'created_at']
    readonly_fields = ['created_at']


@admin.register(File)
class FileAdmin(admin.ModelAdmin[File]):
    """Admin interface for File model."""

    list_display = [
        'name',
        'user',
        'category',
        'size_display',
        'shared_with_display',
        'created_at',
    ]

    list_filter = [
        'category',
        'created_at',
        'user',
    ]

    search_fields = [
        'name',
        'file',  # Searches the storage key
        'shares__email',
    ]

    # Category and storage key never change after upload
    readonly_fields = [
        'file',
        'extension',
        'category',
        'size_bytes',
        'account_id',
        'created_at',
        'updated_at',
    ]

    inlines = [FileShareInline]

    fieldsets = (
        ('File Information', {
            'fields': ('name', 'user', 'account_id', 'file'),
        }),
        ('Metadata', {
            'fields': (
                'extension',
                'category',
                'size_bytes',
            ),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
        }),
    )

    def size_display(self, obj: File) -> str:
        """Display file size in human-readable format.

        Args:
            obj: File instance.

        Returns:
            Formatted size string (e.g., '1.5 MB', '234 KB').
        """
        return convert_file_size(obj.size_bytes)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def shared_with_display(self, obj: File) -> int:
        """Number of collaborators.

        Args:
            obj: File instance.

        Returns:
            Count of emails the file is shared with.
        """
        return obj.shares.count()
    shared_with_display.short_description = 'Shared with'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[File]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('user')


@admin.register(FileShare)
class FileShareAdmin(admin.ModelAdmin[FileShare]):
    """Admin interface for FileShare model."""

    list_display = [
        'email',
        'file',
        'created_at',
    ]

    search_fields = [
        'email',
        'file__name',
    ]

    readonly_fields = ['created_at']

    def get_queryset(self, request: HttpRequest) -> QuerySet[FileShare]:
        return super().get_queryset(request).select_related('file__user')
