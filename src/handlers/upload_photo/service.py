"""Business logic for photo upload operations.

This module validates an incoming file, writes its bytes to object storage
and then records its metadata. The two stores are not transactional
together: the object is written first, and a failed metadata insert is
compensated by deleting the object again. A crash between the two steps
can leave an orphaned object behind, never a row without an object.
"""

import uuid
from pathlib import PurePath
from typing import BinaryIO
from urllib.parse import quote

from aws_lambda_powertools import Logger

from core.config import PhotoAlbumSettings, get_settings
from core.infrastructure.adapters.s3_adapter import S3Adapter
from core.infrastructure.adapters.sql_adapter import SqlAdapter
from core.infrastructure.aws.s3_photo_storage import S3PhotoStorage
from core.infrastructure.sql.sql_photo_metadata import SqlPhotoMetadata
from core.models.errors import FileSizeError, MIMETypeError, ValidationError
from core.models.photo import Photo, UploadResult
from core.repositories.metadata_repository import PhotoMetadataRepository
from core.repositories.storage_repository import PhotoStorageRepository
from core.utils.constants import (
    DIAGNOSTIC_ORPHAN_OBJECT,
    ERROR_CODE_EMPTY_FILE,
    MESSAGE_EMPTY_FILE,
    MESSAGE_METADATA_WRITE_FAILED,
    MESSAGE_STORAGE_WRITE_FAILED,
    MESSAGE_UNEXPECTED_UPLOAD_ERROR,
    MIME_TYPE_DISPLAY_NAMES,
    OBJECT_METADATA_MAX_NAME_BYTES,
    OBJECT_METADATA_ORIGINAL_FILE_NAME,
    OBJECT_METADATA_UPLOADED_AT,
    UPLOADS_PREFIX,
    format_size_limit_mb,
)
from core.utils.image_probe import probe_dimensions
from core.utils.time import utc_now

logger = Logger(UTC=True)


def describe_mime_types(mime_types: tuple[str, ...]) -> str:
    """Render an allow-list for humans, e.g. 'JPEG, PNG, or GIF'."""
    names = [
        MIME_TYPE_DISPLAY_NAMES.get(m, m.split("/")[-1].upper()) for m in mime_types
    ]

    if len(names) == 1:
        return names[0]
    if len(names) == 2:
        return f"{names[0]} or {names[1]}"
    return f"{', '.join(names[:-1])}, or {names[-1]}"


def quote_metadata_name(file_name: str) -> str:
    """URL-quote a file name for object metadata, shortened to fit the size cap.

    Characters are dropped from the end before quoting so an escape
    sequence is never cut in half.
    """
    quoted = quote(file_name)
    while len(quoted) > OBJECT_METADATA_MAX_NAME_BYTES:
        file_name = file_name[:-1]
        quoted = quote(file_name)
    return quoted


class UploadService:
    """Application service responsible for photo uploads.

    This service orchestrates:
    - Validating declared content type and size
    - Generating a collision-free storage key
    - Probing image dimensions
    - Writing the object, then the metadata row
    - Compensating the object write if the row cannot be stored

    Upload never raises: every outcome is reported as an UploadResult.
    """

    def __init__(
        self,
        *,
        storage: PhotoStorageRepository | None = None,
        metadata: PhotoMetadataRepository | None = None,
        settings: PhotoAlbumSettings | None = None,
    ) -> None:
        """Initialize the upload service with required infrastructure dependencies."""
        self.settings = settings or get_settings()
        self.storage = storage or S3PhotoStorage(S3Adapter(self.settings))
        self.metadata = metadata or SqlPhotoMetadata(SqlAdapter(self.settings))

    @staticmethod
    def generate_stored_file_name(file_name: str) -> str:
        """Return a unique file name keeping only the caller's extension."""
        return f"{uuid.uuid4()}{PurePath(file_name).suffix}"

    @staticmethod
    def build_storage_key(stored_file_name: str) -> str:
        return f"{UPLOADS_PREFIX}/{stored_file_name}"

    def validate_upload(self, *, content_type: str, size_bytes: int) -> None:
        """Check type, size ceiling and emptiness, in that order.

        Raises:
            MIMETypeError: If the content type is not allowed
            FileSizeError: If the file is too large or empty
        """
        allowed = self.settings.allowed_mime_types

        if (content_type or "").strip().lower() not in allowed:
            raise MIMETypeError(
                message=(
                    "File type not supported. Please upload "
                    f"{describe_mime_types(allowed)} images."
                ),
                details={"content_type": content_type},
            )

        max_size = self.settings.max_file_size_bytes
        if size_bytes > max_size:
            raise FileSizeError(
                message=f"File size exceeds {format_size_limit_mb(max_size)}MB limit.",
                details={"size_bytes": size_bytes, "max_size_bytes": max_size},
            )

        if size_bytes <= 0:
            raise FileSizeError(
                message=MESSAGE_EMPTY_FILE,
                error_code=ERROR_CODE_EMPTY_FILE,
                details={"size_bytes": size_bytes},
            )

    def upload_photo(
        self,
        *,
        file_name: str,
        content_type: str,
        size_bytes: int,
        content: BinaryIO,
    ) -> UploadResult:
        """Upload a photo and persist its metadata.

        The upload flow is:
        1. Validate content type and size
        2. Generate the storage key and probe dimensions
        3. Ensure the bucket exists
        4. Upload bytes to object storage
        5. Insert metadata, deleting the object again if that fails

        Args:
            file_name: Caller-supplied file name (display only)
            content_type: Declared MIME type
            size_bytes: Declared file size
            content: Binary stream with the file content, read once

        Returns:
            UploadResult describing success or the user-facing failure
        """
        logger.debug(
            "Starting photo upload",
            extra={"file_name": file_name, "content_type": content_type, "size": size_bytes},
        )

        try:
            try:
                self.validate_upload(content_type=content_type, size_bytes=size_bytes)
            except ValidationError as exc:
                logger.warning(
                    "Upload rejected",
                    extra={
                        "file_name": file_name,
                        "error_code": exc.error_code,
                        **exc.details,
                    },
                )
                return UploadResult(file_name=file_name, error_message=exc.message)

            stored_file_name = self.generate_stored_file_name(file_name)
            key = self.build_storage_key(stored_file_name)

            file_data = content.read()
            width, height = probe_dimensions(file_data, file_name=file_name)

            uploaded_at = utc_now()
            photo = Photo(
                original_file_name=file_name,
                stored_file_name=stored_file_name,
                file_path=key,
                file_size=size_bytes,
                mime_type=content_type,
                width=width,
                height=height,
                uploaded_at=uploaded_at,
            )

            self.storage.ensure_container()

            try:
                self.storage.upload_photo(
                    key=key,
                    file_data=file_data,
                    mime_type=content_type,
                    metadata={
                        OBJECT_METADATA_ORIGINAL_FILE_NAME: quote_metadata_name(file_name),
                        OBJECT_METADATA_UPLOADED_AT: uploaded_at.isoformat(),
                    },
                )
            except Exception:
                logger.exception(
                    "Error uploading photo to object storage",
                    extra={"file_name": file_name, "key": key},
                )
                return UploadResult(
                    file_name=file_name,
                    error_message=MESSAGE_STORAGE_WRITE_FAILED,
                )

            try:
                photo_id = self.metadata.create_photo(photo=photo)
            except Exception:
                self._discard_object(key=key, file_name=file_name)
                logger.exception(
                    "Error saving photo metadata",
                    extra={"file_name": file_name, "key": key},
                )
                return UploadResult(
                    file_name=file_name,
                    error_message=MESSAGE_METADATA_WRITE_FAILED,
                )

        except Exception:
            logger.exception(
                "Unexpected error during photo upload",
                extra={"file_name": file_name},
            )
            return UploadResult(
                file_name=file_name,
                error_message=MESSAGE_UNEXPECTED_UPLOAD_ERROR,
            )

        logger.info(
            "Photo uploaded successfully",
            extra={"file_name": file_name, "photo_id": photo_id, "key": key},
        )
        return UploadResult(success=True, photo_id=photo_id, file_name=file_name)

    def _discard_object(self, *, key: str, file_name: str) -> None:
        """Best-effort removal of an object whose metadata never landed."""
        try:
            self.storage.remove_photo(key=key)
            logger.info("Rolled back uploaded object", extra={"key": key})
        except Exception:
            logger.exception(
                "Error deleting object during rollback",
                extra={
                    "diagnostic_event": DIAGNOSTIC_ORPHAN_OBJECT,
                    "key": key,
                    "file_name": file_name,
                },
            )
