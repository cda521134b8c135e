"""S3-backed implementation of PhotoStorageRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import (
    NotFoundError,
    PhotoDeletionFailedError,
    PhotoDownloadFailedError,
    PhotoUploadFailedError,
    StorageError,
)
from core.repositories.storage_repository import PhotoStorageRepository
from core.utils.constants import (
    ERROR_CODE_CONTAINER_UNAVAILABLE,
    ERROR_CODE_PHOTO_FILE_MISSING,
)

logger = Logger(UTC=True)

_MISSING_CODES = frozenset({"404", "NoSuchKey", "NoSuchBucket", "NotFound"})


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class S3PhotoStorage(PhotoStorageRepository):
    """Photo storage implementation backed by Amazon S3."""

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter()

    def ensure_container(self) -> None:
        """Create the bucket when it does not exist (idempotent)."""
        try:
            self._s3.head_bucket()
            return
        except ClientError as exc:
            if _error_code(exc) not in _MISSING_CODES:
                logger.error("S3 bucket check failed", extra={"code": _error_code(exc)})
                raise StorageError(
                    message="Photo storage is unavailable",
                    error_code=ERROR_CODE_CONTAINER_UNAVAILABLE,
                ) from exc

        logger.info("Creating missing photo bucket")

        try:
            self._s3.create_bucket()
        except ClientError as exc:
            if _error_code(exc) in ("BucketAlreadyOwnedByYou", "BucketAlreadyExists"):
                return
            logger.error("S3 bucket creation failed", extra={"code": _error_code(exc)})
            raise StorageError(
                message="Photo storage is unavailable",
                error_code=ERROR_CODE_CONTAINER_UNAVAILABLE,
            ) from exc

    def upload_photo(
        self,
        *,
        key: str,
        file_data: bytes,
        mime_type: str,
        metadata: dict[str, str],
    ) -> None:
        """Upload photo bytes to S3 under the given key."""
        logger.debug(
            "Uploading photo",
            extra={"key": key, "size": len(file_data), "mime_type": mime_type},
        )

        try:
            self._s3.put_object(
                key=key,
                body=file_data,
                content_type=mime_type,
                metadata=metadata,
            )
            logger.info("Photo uploaded successfully", extra={"key": key})

        except ClientError as exc:
            logger.error("S3 upload failed", extra={"key": key, "code": _error_code(exc)})
            raise PhotoUploadFailedError(
                message="Unable to upload photo at this time",
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error uploading photo")
            raise PhotoUploadFailedError(
                message="Unable to upload photo at this time",
                details={"key": key},
            ) from exc

    def photo_exists(self, *, key: str) -> bool:
        """Return True if an object is stored under `key`."""
        try:
            self._s3.head_object(key=key)
            return True

        except ClientError as exc:
            if _error_code(exc) in _MISSING_CODES:
                return False

            logger.error("S3 head_object failed", extra={"key": key})
            raise PhotoDownloadFailedError(
                message="Unable to check photo at this time",
                details={"key": key},
            ) from exc

    def download_photo(self, *, key: str) -> bytes:
        """Download photo bytes from S3."""
        logger.debug("Downloading photo", extra={"key": key})

        try:
            response = self._s3.get_object(key=key)
            body: bytes = response["Body"].read()

            logger.info(
                "Photo downloaded successfully",
                extra={"key": key, "size": len(body)},
            )
            return body

        except ClientError as exc:
            logger.error("S3 download failed", extra={"key": key})

            if _error_code(exc) in _MISSING_CODES:
                raise NotFoundError(
                    message="Photo file not found",
                    error_code=ERROR_CODE_PHOTO_FILE_MISSING,
                    details={"key": key},
                ) from exc

            raise PhotoDownloadFailedError(
                message="Unable to download photo at this time",
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error downloading photo")
            raise PhotoDownloadFailedError(
                message="Unable to download photo at this time",
                details={"key": key},
            ) from exc

    def remove_photo(self, *, key: str) -> None:
        """Delete a photo object from S3. S3 treats missing keys as success."""
        logger.debug("Deleting photo", extra={"key": key})

        try:
            self._s3.delete_object(key=key)
            logger.info("Photo object deleted", extra={"key": key})

        except ClientError as exc:
            logger.error("S3 deletion failed", extra={"key": key})
            raise PhotoDeletionFailedError(
                message="Unable to delete photo at this time",
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting photo")
            raise PhotoDeletionFailedError(
                message="Unable to delete photo at this time",
                details={"key": key},
            ) from exc
