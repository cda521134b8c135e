"""Business logic for photo deletion.

The metadata row is authoritative for whether a photo exists. Removing
the stored object is best-effort: a failure there is logged as an orphan
and never blocks removing the photo from the catalog.
"""

from aws_lambda_powertools import Logger

from core.config import PhotoAlbumSettings, get_settings
from core.infrastructure.adapters.s3_adapter import S3Adapter
from core.infrastructure.adapters.sql_adapter import SqlAdapter
from core.infrastructure.aws.s3_photo_storage import S3PhotoStorage
from core.infrastructure.sql.sql_photo_metadata import SqlPhotoMetadata
from core.models.errors import MetadataOperationFailedError
from core.repositories.metadata_repository import PhotoMetadataRepository
from core.repositories.storage_repository import PhotoStorageRepository
from core.utils.constants import (
    DIAGNOSTIC_ORPHAN_OBJECT,
    ERROR_CODE_METADATA_DELETE_FAILED,
)

logger = Logger(UTC=True)


class DeleteService:
    """Application service responsible for deleting photos.

    This service orchestrates:
    - Looking up the photo to obtain its storage key
    - Best-effort deletion of the stored object
    - Authoritative removal of the metadata row
    """

    def __init__(
        self,
        *,
        storage: PhotoStorageRepository | None = None,
        metadata: PhotoMetadataRepository | None = None,
        settings: PhotoAlbumSettings | None = None,
    ) -> None:
        """Initialize the delete service with required infrastructure dependencies."""
        settings = settings or get_settings()
        self.storage = storage or S3PhotoStorage(S3Adapter(settings))
        self.metadata = metadata or SqlPhotoMetadata(SqlAdapter(settings))

    def delete_photo(self, photo_id: int) -> bool:
        """Delete a photo and its stored file.

        The deletion flow is:
        1. Fetch metadata to confirm the photo exists and obtain the storage key
        2. Delete the object from storage (failures are logged and swallowed)
        3. Delete the metadata row

        Args:
            photo_id: Identifier of the photo to delete

        Returns:
            True if the photo was deleted, False if it does not exist

        Raises:
            MetadataOperationFailedError: If the lookup or row deletion fails
        """
        logger.debug("Starting photo deletion", extra={"photo_id": photo_id})

        photo = self.metadata.fetch_photo(photo_id=photo_id)

        if photo is None:
            logger.warning(
                "Photo not found for deletion",
                extra={"photo_id": photo_id},
            )
            return False

        try:
            self.storage.remove_photo(key=photo.file_path)
        except Exception:
            logger.exception(
                "Error deleting stored object, continuing with metadata removal",
                extra={
                    "diagnostic_event": DIAGNOSTIC_ORPHAN_OBJECT,
                    "photo_id": photo_id,
                    "key": photo.file_path,
                },
            )

        try:
            removed = self.metadata.remove_photo(photo_id=photo_id)
        except MetadataOperationFailedError:
            logger.exception("Failed to delete photo metadata", extra={"photo_id": photo_id})
            raise
        except Exception as exc:
            logger.exception("Failed to delete photo metadata", extra={"photo_id": photo_id})
            raise MetadataOperationFailedError(
                message="Unable to delete photo metadata",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"photo_id": photo_id},
            ) from exc

        if not removed:
            # Another request removed the row after the lookup
            logger.warning(
                "Photo not found for deletion",
                extra={"photo_id": photo_id},
            )
            return False

        logger.info("Photo deleted successfully", extra={"photo_id": photo_id})
        return True
