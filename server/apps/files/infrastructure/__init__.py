"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Custom storage backend (S3/MinIO)
- Metadata extraction (category, extension, storage keys)
- View and download URL construction

Keep infrastructure concerns separate from business logic.
"""
