"""Image lists: ordered collections of images addressed by position."""

from functools import partial

from aws_lambda_powertools import Logger

from attachments.collection import ImageCollectionManager
from core.models.errors import IndexOutOfRangeError
from core.models.image import DisplayImage, StoredImage, UploadedFile
from core.models.record import ImageRecord
from core.models.staged import StagedChange
from core.utils.sizes import Aspect, Size

logger = Logger(UTC=True)


def reindex(images: list[StoredImage]) -> list[StoredImage]:
    """Rewrite every key to its position. Images are updated in place."""
    for position, image in enumerate(images):
        image.key = str(position)
    return images


class ImageList(ImageCollectionManager):
    """Manages one image list field of a record type.

    Every image's key is its position as a string. Structural changes are
    staged like image map changes; once the record write succeeds each
    commit action stores or deletes bytes and then reindexes the list.
    """

    kind = "list"

    def add(self, staged: StagedChange, image: StoredImage | UploadedFile) -> StagedChange:
        """Append an image to the end of the list."""
        return self.insert_at(staged, -1, image)

    def insert_at(
        self, staged: StagedChange, index: int | str, image: StoredImage | UploadedFile
    ) -> StagedChange:
        """Insert an image before `index`. A negative index appends."""
        index = int(index)
        images = self.staged_images(staged)
        position = len(images) if index < 0 or index > len(images) else index

        added = self._coerce(image, position)
        images.insert(position, added)

        logger.debug("Staging image insert", extra={"field": self.field, "index": position})
        staged.put_field(self.field, images)
        staged.prepare(partial(self._store_added, added))
        return staged.optimistic_lock()

    def replace_at(
        self, staged: StagedChange, index: int | str, image: StoredImage | UploadedFile
    ) -> StagedChange:
        """Overwrite the image at `index`; the list never grows.

        Raises:
            IndexOutOfRangeError: If there is no image at `index`
        """
        index = int(index)
        images = self.staged_images(staged)

        if not 0 <= index < len(images):
            raise IndexOutOfRangeError(
                message=f"No image at index {index}",
                details={"field": self.field, "index": index, "length": len(images)},
            )

        added = self._coerce(image, index)
        images[index] = added

        logger.debug("Staging image replace", extra={"field": self.field, "index": index})
        staged.put_field(self.field, images)
        staged.prepare(partial(self._store_added, added))
        return staged.optimistic_lock()

    def delete_at(self, staged: StagedChange, index: int | str) -> StagedChange:
        """Remove the image at `index`; an index past the end removes nothing."""
        index = int(index)
        images = self.staged_images(staged)
        deleted = images.pop(index) if 0 <= index < len(images) else None

        logger.debug("Staging image delete", extra={"field": self.field, "index": index})
        staged.put_field(self.field, images)
        staged.prepare(partial(self._delete_and_reindex, deleted))
        return staged.optimistic_lock()

    def at(self, record: ImageRecord, index: int | str) -> StoredImage | None:
        key = str(int(index))
        return next((image for image in self.images(record) if image.key == key), None)

    def display_one(
        self, record: ImageRecord, index: int | str, aspect: Aspect, size: Size
    ) -> DisplayImage | None:
        """Render the image at `index`, falling back to the record's default for it."""
        return self._display(record, self.at(record, index), int(index), aspect, size)

    def _store_added(self, added: StoredImage, staged: StagedChange) -> None:
        images = list(staged.fetch_field(self.field))
        position = next((i for i, current in enumerate(images) if current is added), None)

        if position is None:
            logger.debug(
                "Skipping upload of image removed later in the change",
                extra={"field": self.field},
            )
            return

        saved = self._store(added, staged)
        if saved is None:
            return

        images[position] = saved
        staged.put_field(self.field, reindex(images))

    def _delete_and_reindex(self, deleted: StoredImage | None, staged: StagedChange) -> None:
        # The image is gone from the list even when its bytes could not be deleted.
        self._remove_deleted(deleted, staged)
        staged.put_field(self.field, reindex(list(staged.fetch_field(self.field))))
