"""Abstract contract for image file storage."""

from abc import ABC, abstractmethod

from core.models.errors import NotSupportedError
from core.models.image import StoredImage
from core.models.record import ImageRecord


class ImageStorageRepository(ABC):
    """Contract for storing and removing the bytes behind stored images.

    Implementations could be S3, GCS, local disk, etc.
    Collection managers depend on this interface, not the implementation.
    """

    @abstractmethod
    def store(self, *, parent: ImageRecord, image: StoredImage) -> StoredImage:
        """Copy an uncommitted image's bytes into the backend.

        Args:
            parent: Record owning the image
            image: Image whose `uri` points at caller-local bytes

        Returns:
            A committed copy of the image whose `uri` is the backend URI

        Raises:
            ImageUploadFailedError: If the bytes could not be written
        """

    @abstractmethod
    def delete(self, *, parent: ImageRecord, image: StoredImage) -> None:
        """Delete a committed image's bytes.

        Deleting bytes that are already gone succeeds.

        Raises:
            ImageDeletionFailedError: If deletion fails
        """

    @abstractmethod
    def exists(self, *, parent: ImageRecord, image: StoredImage) -> bool:
        """Return whether the image's bytes are present.

        Never raises; backend failures resolve to False.
        """

    def delete_all(self) -> None:
        """Delete every stored image.

        Raises:
            NotSupportedError: If the backend has no bulk delete
        """
        raise NotSupportedError(
            message="Bulk delete is not supported by this storage backend",
            details={"backend": type(self).__name__},
        )
