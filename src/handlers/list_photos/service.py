"""
Business logic for the photo gallery listing.
"""

from aws_lambda_powertools import Logger

from core.config import PhotoAlbumSettings
from core.infrastructure.adapters.sql_adapter import SqlAdapter
from core.infrastructure.sql.sql_photo_metadata import SqlPhotoMetadata
from core.models.photo import Photo
from core.repositories.metadata_repository import PhotoMetadataRepository

logger = Logger(UTC=True)


class ListService:
    """Application service responsible for listing the gallery."""

    def __init__(
        self,
        *,
        metadata: PhotoMetadataRepository | None = None,
        settings: PhotoAlbumSettings | None = None,
    ) -> None:
        """Initialize list service with required dependencies."""
        self.metadata = metadata or SqlPhotoMetadata(SqlAdapter(settings))

    def list_photos(self) -> list[Photo]:
        """Return every photo, newest upload first.

        Raises:
            MetadataOperationFailedError: If the query fails
        """
        photos = self.metadata.list_photos()

        logger.info("Photos listed successfully", extra={"count": len(photos)})

        return photos
