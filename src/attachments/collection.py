"""Behaviour shared by image maps and image lists.

A manager is created once per declared collection field and is stateless
with respect to records: every call names the record or staged change it
works on.
"""

from collections.abc import Callable
from typing import Any

from aws_lambda_powertools import Logger

from attachments.storage import ImageStorage
from core.models.errors import StorageError
from core.models.image import DisplayImage, StoredImage, UploadedFile
from core.models.record import CollectionKind, ImageRecord, image_collections
from core.models.staged import StagedChange
from core.proxy.display import display_image
from core.proxy.url_signer import ProxyUrlSigner
from core.utils.paths import validate_key
from core.utils.sizes import Aspect, Size

logger = Logger(UTC=True)

DefaultProducer = Callable[[ImageRecord, Any, Aspect, Size], StoredImage | None]


class ImageCollectionManager:
    kind: CollectionKind

    def __init__(
        self,
        field: str,
        *,
        storage: ImageStorage,
        signer: ProxyUrlSigner,
        default: DefaultProducer | None = None,
    ) -> None:
        self.field = field
        self.storage = storage
        self.signer = signer
        self.default = default

    def images(self, record: ImageRecord) -> list[StoredImage]:
        self._check_field(type(record))
        return list(getattr(record, self.field))

    def staged_images(self, staged: StagedChange) -> list[StoredImage]:
        """Return a copy of the collection as proposed so far in the chain."""
        self._check_field(type(staged.data))
        return list(staged.fetch_field(self.field))

    def display_all(self, record: ImageRecord, aspect: Aspect, size: Size) -> list[DisplayImage]:
        """Render every image in the collection. Defaults are never substituted."""
        displayed = (display_image(self.signer, image, aspect, size) for image in self.images(record))
        return [image for image in displayed if image is not None]

    def remove_from_storage(self, record: ImageRecord, image: StoredImage | None) -> None:
        """Delete an image's bytes outside of any staged change.

        Use this for images replaced by a put, once the record update that
        replaced them has succeeded.
        """
        self.storage.delete(record, image)

    def _display(
        self,
        record: ImageRecord,
        found: StoredImage | None,
        key: Any,
        aspect: Aspect,
        size: Size,
    ) -> DisplayImage | None:
        if found is not None:
            return display_image(self.signer, found, aspect, size)

        default = self._default_image(record, key, aspect, size)
        return display_image(self.signer, default, aspect, size, is_default=True)

    def _default_image(
        self, record: ImageRecord, key: Any, aspect: Aspect, size: Size
    ) -> StoredImage | None:
        if self.default is not None:
            return self.default(record, key, aspect, size)

        producer = getattr(record, f"default_{self.field}", None)
        if producer is None:
            return None
        return producer(key, aspect, size)

    def _coerce(self, image: StoredImage | UploadedFile, key: str | int | None) -> StoredImage:
        """Return a staged-owned copy of the image with its key applied.

        Raises:
            ValidationError: If the key cannot be used as a storage path segment
        """
        if isinstance(image, UploadedFile):
            if key is None:
                raise ValueError("A key is required when staging an upload")
            coerced = StoredImage.from_upload(image, key)
        elif key is None:
            coerced = image.model_copy()
        else:
            coerced = image.model_copy(update={"key": str(key)})

        validate_key(coerced.key)
        return coerced

    def _remove_deleted(self, deleted: StoredImage | None, staged: StagedChange) -> None:
        """Delete a removed image's bytes, recording failures on the field."""
        try:
            self.storage.delete(staged.data, deleted)
        except StorageError as exc:
            logger.warning(
                "Image delete failed during commit",
                extra={"field": self.field, "error_code": exc.error_code},
            )
            staged.add_error(self.field, exc.message)

    def _store(self, image: StoredImage, staged: StagedChange) -> StoredImage | None:
        """Store an added image, recording failures on the field."""
        try:
            return self.storage.store(staged.data, image)
        except StorageError as exc:
            logger.warning(
                "Image store failed during commit",
                extra={"field": self.field, "image_key": image.key, "error_code": exc.error_code},
            )
            staged.add_error(self.field, exc.message)
            return None

    def _check_field(self, record_type: type[ImageRecord]) -> None:
        if image_collections(record_type).get(self.field) != self.kind:
            raise ValueError(
                f"{record_type.__name__}.{self.field} is not an image {self.kind}"
            )
