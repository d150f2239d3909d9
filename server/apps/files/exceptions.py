"""Exceptions for files app."""


class QuotaExceededError(Exception):
    """Raised when upload would exceed user's storage quota."""

    def __init__(
        self,
        quota_bytes: int,
        used_bytes: int,
        required_bytes: int,
    ) -> None:
        """Initialize QuotaExceededError.

        Args:
            quota_bytes: Total quota limit in bytes.
            used_bytes: Currently used bytes.
            required_bytes: Bytes needed for the operation.
        """
        self.quota_bytes = quota_bytes
        self.used_bytes = used_bytes
        self.required_bytes = required_bytes

        available = max(0, quota_bytes - used_bytes)
        super().__init__(
            f'Quota exceeded: need {required_bytes} bytes, '
            f'only {available} bytes available '
            f'(quota: {quota_bytes}, used: {used_bytes})',
        )


class FileTooLargeError(Exception):
    """Raised when a single upload is larger than allowed."""

    def __init__(self, size_bytes: int, max_bytes: int) -> None:
        """Initialize FileTooLargeError.

        Args:
            size_bytes: Size of the rejected upload.
            max_bytes: Largest accepted upload.
        """
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes
        super().__init__(
            f'File too large: {size_bytes} bytes '
            f'(maximum: {max_bytes} bytes)',
        )


class FilePermissionError(Exception):
    """Raised when a user other than the owner tries to modify a file."""

    def __init__(self, file_id: int, action: str) -> None:
        """Initialize FilePermissionError.

        Args:
            file_id: ID of the file.
            action: What was attempted (e.g., 'rename').
        """
        self.file_id = file_id
        self.action = action
        super().__init__(
            f'Only the owner can {action} this file',
        )


class InvalidFileNameError(ValueError):
    """Raised when a new file name is empty."""
