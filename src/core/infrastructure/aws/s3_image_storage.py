"""S3-backed implementation of ImageStorageRepository."""

from urllib.parse import urlparse

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import ImageDeletionFailedError, ImageUploadFailedError
from core.models.image import StoredImage
from core.models.record import ImageRecord
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import S3_URI_SCHEME
from core.utils.paths import upload_path

logger = Logger(UTC=True)


class S3ImageStorage(ImageStorageRepository):
    """Image storage implementation backed by Amazon S3."""

    def __init__(self, adapter: S3AdapterProtocol | S3Adapter) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3 = adapter

    @property
    def bucket(self) -> str:
        return self._s3.bucket

    def store(self, *, parent: ImageRecord, image: StoredImage) -> StoredImage:
        """Upload an image's local bytes to S3 and return the committed image."""
        key = upload_path(parent, image)

        logger.debug(
            "Uploading image",
            extra={
                "record_id": parent.id,
                "image_key": image.key,
                "key": key,
                "size": image.size,
            },
        )

        try:
            self._s3.upload_file(
                key=key,
                filename=image.uri,
                content_type=image.content_type,
            )
        except (ClientError, BotoCoreError, OSError) as exc:
            logger.error("S3 upload failed", extra={"key": key})
            raise ImageUploadFailedError(
                message="Unable to upload image at this time",
                details={"record_id": parent.id, "image_key": image.key},
            ) from exc

        logger.info("Image uploaded successfully", extra={"key": key})
        return image.model_copy(
            update={
                "uri": f"{S3_URI_SCHEME}://{self.bucket}/{key}",
                "committed": True,
                "filename": None,
            }
        )

    def delete(self, *, parent: ImageRecord, image: StoredImage) -> None:
        """Delete an image object from S3. Missing objects are not an error."""
        if not self.owns(image.uri):
            logger.debug("Skipping delete of foreign uri", extra={"uri": image.uri})
            return

        key = self.uri_to_key(image.uri)
        logger.debug("Deleting image", extra={"key": key})

        try:
            self._s3.delete_object(key=key)
        except (ClientError, BotoCoreError) as exc:
            logger.error("S3 deletion failed", extra={"key": key})
            raise ImageDeletionFailedError(
                message="Unable to delete image at this time",
                details={"record_id": parent.id, "key": key},
            ) from exc

        logger.info("Image deleted successfully", extra={"key": key})

    def exists(self, *, parent: ImageRecord, image: StoredImage) -> bool:
        if not self.owns(image.uri):
            return False

        key = self.uri_to_key(image.uri)

        try:
            return key in self._s3.list_keys(prefix=key)
        except (ClientError, BotoCoreError):
            logger.warning("S3 existence check failed", extra={"key": key})
            return False

    def owns(self, uri: str) -> bool:
        return uri.startswith(f"{S3_URI_SCHEME}://{self.bucket}/")

    @staticmethod
    def uri_to_key(uri: str) -> str:
        """Return the object key of an `s3://bucket/key` URI."""
        return urlparse(uri).path.lstrip("/")
