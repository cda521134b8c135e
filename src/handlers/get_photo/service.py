"""
Business logic for single photo retrieval.
"""

from aws_lambda_powertools import Logger

from core.config import PhotoAlbumSettings
from core.infrastructure.adapters.sql_adapter import SqlAdapter
from core.infrastructure.sql.sql_photo_metadata import SqlPhotoMetadata
from core.models.errors import NotFoundError
from core.models.photo import Photo
from core.repositories.metadata_repository import PhotoMetadataRepository
from core.utils.constants import ERROR_CODE_PHOTO_NOT_FOUND

logger = Logger(UTC=True)


class GetService:
    """Application service returning the metadata of one photo."""

    def __init__(
        self,
        *,
        metadata: PhotoMetadataRepository | None = None,
        settings: PhotoAlbumSettings | None = None,
    ) -> None:
        self.metadata = metadata or SqlPhotoMetadata(SqlAdapter(settings))

    def get_photo(self, photo_id: int) -> Photo:
        """Return photo metadata.

        Raises:
            NotFoundError: If no photo has this id
            MetadataOperationFailedError: If the lookup fails
        """
        photo = self.metadata.fetch_photo(photo_id=photo_id)

        if photo is None:
            logger.warning("Photo not found", extra={"photo_id": photo_id})
            raise NotFoundError(
                message="Photo not found",
                error_code=ERROR_CODE_PHOTO_NOT_FOUND,
                details={"photo_id": photo_id},
            )

        return photo
