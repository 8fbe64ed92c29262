"""Image maps: unordered collections of images addressed by name."""

from functools import partial

from aws_lambda_powertools import Logger

from attachments.collection import ImageCollectionManager
from core.models.image import DisplayImage, StoredImage, UploadedFile
from core.models.record import ImageRecord
from core.models.staged import StagedChange
from core.utils.sizes import Aspect, Size

logger = Logger(UTC=True)


class ImageMap(ImageCollectionManager):
    """Manages one image map field of a record type.

    Mutations are staged on a `StagedChange` and can be chained; each call
    sees what earlier calls in the chain proposed. Image bytes are uploaded
    or deleted only once the record write has succeeded.

        staged = avatars.put(StagedChange(user), UploadedFile(...), key="avatar")
        user = records.update(staged=staged)
    """

    kind = "map"

    def put(
        self,
        staged: StagedChange,
        image: StoredImage | UploadedFile,
        *,
        key: str | None = None,
    ) -> StagedChange:
        """Set the image stored under its key, replacing any existing one.

        The replaced image's bytes are left in storage; remove them with
        `remove_from_storage` once the update has succeeded.
        """
        added = self._coerce(image, key)
        kept = [current for current in self.staged_images(staged) if current.key != added.key]

        logger.debug("Staging image put", extra={"field": self.field, "image_key": added.key})
        staged.put_field(self.field, [added, *kept])
        staged.prepare(partial(self._store_added, added))
        return staged.optimistic_lock()

    def delete(self, staged: StagedChange, key: str) -> StagedChange:
        """Remove the named image; its bytes are deleted after the write."""
        key = str(key)
        images = self.staged_images(staged)
        deleted = next((current for current in images if current.key == key), None)
        kept = [current for current in images if current.key != key]

        logger.debug("Staging image delete", extra={"field": self.field, "image_key": key})
        staged.put_field(self.field, kept)
        staged.prepare(partial(self._remove_deleted, deleted))
        return staged.optimistic_lock()

    def find(self, record: ImageRecord, key: str) -> StoredImage | None:
        key = str(key)
        return next((image for image in self.images(record) if image.key == key), None)

    def has(self, record: ImageRecord, key: str) -> bool:
        return self.find(record, key) is not None

    def display_one(
        self, record: ImageRecord, key: str, aspect: Aspect, size: Size
    ) -> DisplayImage | None:
        """Render the named image, falling back to the record's default for that name."""
        return self._display(record, self.find(record, key), str(key), aspect, size)

    def _store_added(self, added: StoredImage, staged: StagedChange) -> None:
        images = staged.fetch_field(self.field)

        if not any(current is added for current in images):
            logger.debug(
                "Skipping upload of image removed later in the change",
                extra={"field": self.field, "image_key": added.key},
            )
            return

        saved = self._store(added, staged)
        if saved is None:
            return

        staged.put_field(
            self.field,
            [saved if current.key == saved.key else current for current in images],
        )
