from collections.abc import Mapping
from pathlib import PurePosixPath
from urllib.parse import urlparse

from core.utils.constants import DEFAULT_CONTENT_TYPE, MIME_TYPE_EXTENSION_MAP

EXTENSION_MIME_TYPES: Mapping[str, str] = {
    ext: mime for mime, extensions in MIME_TYPE_EXTENSION_MAP.items() for ext in extensions
}


def uri_extension(uri: str) -> str:
    """Return the extension (with leading dot) of a URI's path component."""
    return PurePosixPath(urlparse(uri).path).suffix


def content_type_for(uri: str) -> str:
    extension = uri_extension(uri).lower().lstrip(".")
    return EXTENSION_MIME_TYPES.get(extension, DEFAULT_CONTENT_TYPE)
