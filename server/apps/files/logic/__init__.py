"""Business logic layer for files app.

This package contains all business logic for file operations:
- Upload, list, rename and delete (owner checks included)
- Sharing files with other users by email
- Storage usage snapshots and quota checks

All business logic should be implemented here, separate from
models (data layer) and infrastructure (external systems).

Reference: https://github.com/dry-python
for decoupling business logic from Django views.
"""
