"""Storage path derivation shared by every storage backend.

Both backends lay images out as

    images/uploads/<record type>/<record id>/<key>/<uuid>-<key><ext>

so URIs differ only in their scheme prefix.
"""

import uuid
from pathlib import PurePosixPath

from core.models.errors import ValidationError
from core.models.image import StoredImage
from core.models.record import ImageRecord, record_type_name
from core.utils.constants import UPLOAD_PATH_PREFIX
from core.utils.mime import uri_extension

UNSAFE_KEY_CHARACTERS = ("/", "\\", "\x00")


def source_extension(image: StoredImage) -> str:
    if image.filename:
        return PurePosixPath(image.filename).suffix
    return uri_extension(image.uri)


def upload_path(parent: ImageRecord, image: StoredImage) -> str:
    """Return a fresh, unique storage path for an image."""
    filename = f"{uuid.uuid4()}-{image.key}{source_extension(image)}"

    return "/".join(
        [
            *UPLOAD_PATH_PREFIX,
            record_type_name(parent),
            str(parent.id),
            image.key,
            filename,
        ]
    )


def validate_key(key: str) -> str:
    """Check that a key is usable as a single storage path segment.

    Raises:
        ValidationError: If the key is empty, a dot segment, or holds a separator
    """
    if key in ("", ".", "..") or any(char in key for char in UNSAFE_KEY_CHARACTERS):
        raise ValidationError(message=f"Invalid image key '{key}'", details={"key": key})
    return key
