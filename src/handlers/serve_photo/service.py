"""
Business logic for photo delivery.

Resolves a photo's metadata and fetches the stored bytes. A row whose
object is missing is reported as not-found and logged; it is never
repaired here.
"""

from aws_lambda_powertools import Logger

from core.config import PhotoAlbumSettings, get_settings
from core.infrastructure.adapters.s3_adapter import S3Adapter
from core.infrastructure.adapters.sql_adapter import SqlAdapter
from core.infrastructure.aws.s3_photo_storage import S3PhotoStorage
from core.infrastructure.sql.sql_photo_metadata import SqlPhotoMetadata
from core.models.errors import NotFoundError
from core.models.photo import Photo
from core.repositories.metadata_repository import PhotoMetadataRepository
from core.repositories.storage_repository import PhotoStorageRepository
from core.utils.constants import (
    ERROR_CODE_PHOTO_FILE_MISSING,
    ERROR_CODE_PHOTO_NOT_FOUND,
)
from core.utils.time import microseconds_since_epoch

logger = Logger(UTC=True)


def build_etag(photo: Photo) -> str:
    """Weak-validation tag derived from the photo id and upload time."""
    return f'"{photo.id}-{microseconds_since_epoch(photo.uploaded_at)}"'


class ServeService:
    """Application service streaming stored photo files back to callers."""

    def __init__(
        self,
        *,
        storage: PhotoStorageRepository | None = None,
        metadata: PhotoMetadataRepository | None = None,
        settings: PhotoAlbumSettings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.storage = storage or S3PhotoStorage(S3Adapter(settings))
        self.metadata = metadata or SqlPhotoMetadata(SqlAdapter(settings))

    def fetch_photo_file(self, photo_id: int) -> tuple[Photo, bytes]:
        """Return the photo metadata and its stored bytes.

        Raises:
            NotFoundError: If the photo is unknown or its object is missing
            MetadataOperationFailedError: If the lookup fails
            StorageError: If the object cannot be read
        """
        photo = self.metadata.fetch_photo(photo_id=photo_id)

        if photo is None:
            logger.warning("Photo not found", extra={"photo_id": photo_id})
            raise NotFoundError(
                message="Photo not found",
                error_code=ERROR_CODE_PHOTO_NOT_FOUND,
                details={"photo_id": photo_id},
            )

        if not self.storage.photo_exists(key=photo.file_path):
            logger.error(
                "Stored object missing for photo",
                extra={"photo_id": photo_id, "key": photo.file_path},
            )
            raise NotFoundError(
                message="Photo file not found",
                error_code=ERROR_CODE_PHOTO_FILE_MISSING,
                details={"photo_id": photo_id},
            )

        content = self.storage.download_photo(key=photo.file_path)

        logger.debug(
            "Serving photo",
            extra={
                "photo_id": photo_id,
                "file_name": photo.original_file_name,
                "size": len(content),
                "key": photo.file_path,
            },
        )

        return photo, content
