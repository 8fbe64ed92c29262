"""Storage facade used by the collection managers.

Wraps a storage backend with the rules every backend shares: committed
images are never re-uploaded, uncommitted images are never deleted or
reported as present (their bytes belong to the caller), and deleting
nothing succeeds.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.adapters.s3_adapter import S3Adapter
from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.infrastructure.local.local_image_storage import LocalImageStorage
from core.models.image import StoredImage
from core.models.record import ImageRecord
from core.models.settings import Settings
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import STORAGE_BACKEND_S3

logger = Logger(UTC=True)


class ImageStorage:
    """Applies the shared storage rules in front of a backend."""

    def __init__(self, backend: ImageStorageRepository) -> None:
        self.backend = backend

    def store(self, parent: ImageRecord, image: StoredImage) -> StoredImage:
        if image.committed:
            return image
        return self.backend.store(parent=parent, image=image)

    def delete(self, parent: ImageRecord, image: StoredImage | None) -> None:
        if image is None:
            return

        if not image.committed:
            logger.debug("Not deleting uncommitted image", extra={"image_key": image.key})
            return

        self.backend.delete(parent=parent, image=image)

    def exists(self, parent: ImageRecord, image: StoredImage | None) -> bool:
        if image is None or not image.committed:
            return False
        return self.backend.exists(parent=parent, image=image)

    def delete_all(self) -> None:
        self.backend.delete_all()


def build_storage(settings: Settings) -> ImageStorage:
    """Create the storage facade for the configured backend."""
    backend: ImageStorageRepository

    if settings.storage_backend == STORAGE_BACKEND_S3:
        backend = S3ImageStorage(S3Adapter.from_settings(settings))
    else:
        backend = LocalImageStorage.from_settings(settings)

    logger.info("Image storage configured", extra={"backend": type(backend).__name__})
    return ImageStorage(backend)
