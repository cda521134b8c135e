"""Abstract contract for photo file storage."""

from abc import ABC, abstractmethod


class PhotoStorageRepository(ABC):
    """Contract for storing and retrieving photo files by key.

    Implementations could be S3, GCS, local disk, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def ensure_container(self) -> None:
        """Create the backing container if it does not exist yet.

        Raises:
            StorageError: If the container cannot be checked or created
        """

    @abstractmethod
    def upload_photo(
        self,
        *,
        key: str,
        file_data: bytes,
        mime_type: str,
        metadata: dict[str, str],
    ) -> None:
        """Store photo bytes under `key`.

        Args:
            key: Storage key generated by the caller
            file_data: Binary photo content
            mime_type: Content type recorded on the object
            metadata: Side metadata attached to the object

        Raises:
            PhotoUploadFailedError: If upload fails
        """

    @abstractmethod
    def photo_exists(self, *, key: str) -> bool:
        """Return whether an object exists under `key`.

        Raises:
            PhotoDownloadFailedError: If the check itself fails
        """

    @abstractmethod
    def download_photo(self, *, key: str) -> bytes:
        """Download photo bytes by key.

        Raises:
            NotFoundError: If the object doesn't exist
            PhotoDownloadFailedError: If download fails
        """

    @abstractmethod
    def remove_photo(self, *, key: str) -> None:
        """Delete photo bytes by key. Missing objects are not an error.

        Raises:
            PhotoDeletionFailedError: If deletion fails
        """
