"""SQLAlchemy-backed implementation of PhotoMetadataRepository."""

from aws_lambda_powertools import Logger
from sqlalchemy.exc import SQLAlchemyError

from core.infrastructure.adapters.sql_adapter import SqlAdapter, SqlAdapterProtocol
from core.infrastructure.sql.photo_table import PhotoRow
from core.models.errors import MetadataOperationFailedError
from core.models.photo import Photo
from core.repositories.metadata_repository import PhotoMetadataRepository
from core.utils.constants import (
    ERROR_CODE_METADATA_CREATE_FAILED,
    ERROR_CODE_METADATA_DELETE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_LIST_FAILED,
)

logger = Logger(UTC=True)


class SqlPhotoMetadata(PhotoMetadataRepository):
    """Relational metadata storage with error handling.

    All SQLAlchemy errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(self, adapter: SqlAdapterProtocol | None = None) -> None:
        """Initialize with SQL adapter."""
        self._db: SqlAdapterProtocol = adapter or SqlAdapter()

    def create_photo(self, *, photo: Photo) -> int:
        """Insert photo metadata and return the assigned id.

        Raises:
            MetadataOperationFailedError: If the insert fails
        """
        logger.debug("Creating photo metadata", extra={"file_path": photo.file_path})

        row = PhotoRow(**photo.model_dump(exclude={"id"}))

        try:
            photo_id = self._db.insert_row(row=row)
            logger.info(
                "Photo metadata created",
                extra={"photo_id": photo_id, "file_path": photo.file_path},
            )
            return photo_id

        except SQLAlchemyError as exc:
            logger.error("Photo insert failed", extra={"file_path": photo.file_path})
            raise MetadataOperationFailedError(
                message="Unable to save photo metadata at this time",
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={"file_path": photo.file_path},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error creating photo metadata")
            raise MetadataOperationFailedError(
                message="Unable to save photo metadata at this time",
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={"file_path": photo.file_path},
            ) from exc

    def fetch_photo(self, *, photo_id: int) -> Photo | None:
        """Fetch a single photo by id.

        Raises:
            MetadataOperationFailedError: If the lookup fails
        """
        logger.debug("Fetching photo metadata", extra={"photo_id": photo_id})

        try:
            row = self._db.get_row(photo_id=photo_id)
            if row is None:
                return None
            return Photo.model_validate(row)

        except SQLAlchemyError as exc:
            logger.error("Photo lookup failed", extra={"photo_id": photo_id})
            raise MetadataOperationFailedError(
                message="Unable to fetch photo metadata at this time",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"photo_id": photo_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error fetching photo metadata")
            raise MetadataOperationFailedError(
                message="Unable to fetch photo metadata at this time",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"photo_id": photo_id},
            ) from exc

    def remove_photo(self, *, photo_id: int) -> bool:
        """Remove a photo row, returning whether one matched.

        Raises:
            MetadataOperationFailedError: If deletion fails
        """
        logger.debug("Removing photo metadata", extra={"photo_id": photo_id})

        try:
            removed = self._db.delete_row(photo_id=photo_id)
            logger.info(
                "Photo metadata removed",
                extra={"photo_id": photo_id, "rows": removed},
            )
            return removed > 0

        except SQLAlchemyError as exc:
            logger.error("Photo delete failed", extra={"photo_id": photo_id})
            raise MetadataOperationFailedError(
                message="Unable to delete photo metadata at this time",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"photo_id": photo_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting photo metadata")
            raise MetadataOperationFailedError(
                message="Unable to delete photo metadata at this time",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"photo_id": photo_id},
            ) from exc

    def list_photos(self) -> list[Photo]:
        """List all photos, newest first.

        Raises:
            MetadataOperationFailedError: If the query fails
        """
        try:
            rows = self._db.select_rows()
            return [Photo.model_validate(row) for row in rows]

        except SQLAlchemyError as exc:
            logger.error("Photo listing failed")
            raise MetadataOperationFailedError(
                message="Unable to list photos at this time",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error listing photos")
            raise MetadataOperationFailedError(
                message="Unable to list photos at this time",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
            ) from exc
