"""Local filesystem implementation of ImageStorageRepository.

Intended for development and tests. Images are copied below a storage root
and addressed with `local://images/uploads/...` URIs.
"""

import shutil
from pathlib import Path

from aws_lambda_powertools import Logger

from core.models.errors import (
    ConfigurationError,
    ImageDeletionFailedError,
    ImageUploadFailedError,
)
from core.models.image import StoredImage
from core.models.record import ImageRecord
from core.models.settings import Settings
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import LOCAL_URI_SCHEME, NON_PRODUCTION_ENVIRONMENTS
from core.utils.paths import upload_path

logger = Logger(UTC=True)

URI_PREFIX = f"{LOCAL_URI_SCHEME}://"


class LocalImageStorage(ImageStorageRepository):
    """Image storage backed by a directory on the local filesystem."""

    def __init__(self, *, root: str | Path, environment: str) -> None:
        self.root = Path(root)
        self.environment = environment

    @classmethod
    def from_settings(cls, settings: Settings) -> "LocalImageStorage":
        if not settings.storage_root:
            raise ConfigurationError(message="A local storage root must be configured")
        return cls(root=settings.storage_root, environment=settings.environment)

    def store(self, *, parent: ImageRecord, image: StoredImage) -> StoredImage:
        relative_path = upload_path(parent, image)
        destination = self.root / relative_path

        if not self._is_inside_root(destination):
            logger.error("Refusing to store image outside the storage root", extra={"path": str(destination)})
            raise ImageUploadFailedError(
                message="Unable to store image at this time",
                details={"record_id": parent.id, "image_key": image.key},
            )

        logger.debug(
            "Copying image into local storage",
            extra={"record_id": parent.id, "image_key": image.key, "path": str(destination)},
        )

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(image.uri, destination)
        except OSError as exc:
            logger.error("Local store failed", extra={"path": str(destination)})
            raise ImageUploadFailedError(
                message="Unable to store image at this time",
                details={"record_id": parent.id, "image_key": image.key},
            ) from exc

        logger.info("Image stored locally", extra={"path": str(destination)})
        return image.model_copy(
            update={"uri": f"{URI_PREFIX}{relative_path}", "committed": True, "filename": None}
        )

    def delete(self, *, parent: ImageRecord, image: StoredImage) -> None:
        path = self.local_path(image)

        if path is None or not path.is_file():
            return

        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            logger.error("Local delete failed", extra={"path": str(path)})
            raise ImageDeletionFailedError(
                message="Unable to delete image at this time",
                details={"record_id": parent.id, "path": str(path)},
            ) from exc

        logger.info("Image deleted locally", extra={"path": str(path)})

    def exists(self, *, parent: ImageRecord, image: StoredImage) -> bool:
        path = self.local_path(image)
        return path is not None and path.is_file()

    def delete_all(self) -> None:
        """Remove the whole storage root.

        Raises:
            ConfigurationError: Outside of non-production environments
        """
        if self.environment not in NON_PRODUCTION_ENVIRONMENTS:
            raise ConfigurationError(
                message="delete_all is not supported in this environment",
                details={"environment": self.environment},
            )

        logger.warning("Deleting all locally stored images", extra={"root": str(self.root)})
        shutil.rmtree(self.root, ignore_errors=True)

    def local_path(self, image: StoredImage) -> Path | None:
        """Return where a `local://` image lives, or None for foreign URIs.

        URIs that resolve outside the storage root are treated as foreign.
        """
        if not image.uri.startswith(URI_PREFIX):
            return None

        path = self.root / image.uri.removeprefix(URI_PREFIX)
        return path if self._is_inside_root(path) else None

    def _is_inside_root(self, path: Path) -> bool:
        return path.resolve().is_relative_to(self.root.resolve())
