"""Abstract contract for photo metadata persistence."""

from abc import ABC, abstractmethod

from core.models.photo import Photo


class PhotoMetadataRepository(ABC):
    """Contract for storing and retrieving photo metadata.

    Implementations could be PostgreSQL, SQLite, MySQL, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def create_photo(self, *, photo: Photo) -> int:
        """Insert a photo row.

        Args:
            photo: Photo metadata without an id

        Returns:
            The id assigned by the store

        Raises:
            MetadataOperationFailedError: If the insert fails
        """

    @abstractmethod
    def fetch_photo(self, *, photo_id: int) -> Photo | None:
        """Fetch a single photo.

        Args:
            photo_id: Surrogate photo identifier

        Returns:
            Photo or None if not found

        Raises:
            MetadataOperationFailedError: If the lookup fails
        """

    @abstractmethod
    def remove_photo(self, *, photo_id: int) -> bool:
        """Remove a photo row.

        Args:
            photo_id: Surrogate photo identifier

        Returns:
            True if a row was removed, False if none matched

        Raises:
            MetadataOperationFailedError: If deletion fails
        """

    @abstractmethod
    def list_photos(self) -> list[Photo]:
        """List every photo.

        Returns:
            Photos sorted newest first by upload time

        Raises:
            MetadataOperationFailedError: If the query fails
        """
