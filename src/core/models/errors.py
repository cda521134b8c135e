"""Custom exception classes for the photo album service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_METADATA_OPERATION_FAILED,
    ERROR_CODE_PHOTO_DELETE_FAILED,
    ERROR_CODE_PHOTO_DOWNLOAD_FAILED,
    ERROR_CODE_PHOTO_UPLOAD_FAILED,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORAGE,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
)


class PhotoServiceError(Exception):
    """
    Base exception for all photo service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(PhotoServiceError):
    """Raised when an upload or request fails validation."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class MIMETypeError(ValidationError):
    """Raised when the declared content type is not in the allow-list."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UNSUPPORTED_MIME_TYPE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class FileSizeError(ValidationError):
    """Raised when a file is empty or exceeds the configured limit."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_FILE_SIZE_EXCEEDED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class NotFoundError(PhotoServiceError):
    """Raised when a requested photo or its stored file is not found."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class MetadataOperationFailedError(PhotoServiceError):
    """Raised when a photo metadata operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_METADATA_OPERATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StorageError(PhotoServiceError):
    """Raised when an object storage operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORAGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class PhotoUploadFailedError(StorageError):
    """Raised when photo bytes cannot be written to storage."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_PHOTO_UPLOAD_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class PhotoDownloadFailedError(StorageError):
    """Raised when photo bytes cannot be read from storage."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_PHOTO_DOWNLOAD_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class PhotoDeletionFailedError(StorageError):
    """Raised when photo bytes cannot be removed from storage."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_PHOTO_DELETE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
