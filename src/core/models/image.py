"""Stored and displayable image models."""

import os
from typing import Any

from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator

from core.utils.constants import DEFAULT_GRAVITY, GRAVITIES
from core.utils.mime import content_type_for


class UploadedFile(BaseModel):
    """Freshly uploaded bytes that have not been committed to storage yet."""

    path: StrictStr = Field(..., description="Path to the temporary file holding the bytes")
    content_type: StrictStr = Field(..., description="Declared MIME type of the upload")
    filename: StrictStr = Field(..., description="Original client-side file name")


class StoredImage(BaseModel):
    """One image held by an image map or image list.

    Before commit, `uri` points at caller-local bytes and `committed` is
    False. After commit it is a backend URI (`s3://bucket/...` or
    `local://...`).
    """

    key: StrictStr = Field("", description="Name in an image map or position in an image list")
    uri: StrictStr = Field(..., description="Source location of the image bytes")
    content_type: StrictStr = Field(..., description="MIME type of the image (e.g. image/png)")
    size: StrictInt = Field(..., ge=0, description="Image size in bytes")
    gravity: StrictStr = Field(DEFAULT_GRAVITY, description="Crop anchor used by the resizing proxy")
    committed: bool = Field(True, description="Whether the bytes live in the storage backend")

    is_default: bool = Field(False, exclude=True, description="Set on default stand-in images")
    filename: StrictStr | None = Field(None, exclude=True, description="Original upload file name")

    @field_validator("key", mode="before")
    @classmethod
    def stringify_key(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("gravity")
    @classmethod
    def validate_gravity(cls, value: str) -> str:
        if value not in GRAVITIES:
            raise ValueError(
                f"Invalid gravity '{value}'. Allowed gravities: {', '.join(sorted(GRAVITIES))}"
            )
        return value

    @classmethod
    def from_upload(cls, upload: UploadedFile, key: str | int | None) -> "StoredImage":
        """Build an uncommitted image from an upload; size is read from disk."""
        return cls(
            key=key,
            uri=upload.path,
            content_type=upload.content_type,
            size=os.stat(upload.path).st_size,
            filename=upload.filename,
            committed=False,
        )

    @classmethod
    def new(cls, key: str | int, uri: str, size: int) -> "StoredImage":
        """Build a committed image, deriving its content type from the URI."""
        return cls(key=key, uri=uri, size=size, content_type=content_type_for(uri))


class DisplayImage(BaseModel):
    """A stored image rendered at a specific aspect and height via the proxy."""

    url: StrictStr = Field(..., description="Signed resizing proxy URL")
    width: StrictInt = Field(..., description="Target width in pixels, 0 to infer from source")
    height: StrictInt = Field(..., description="Target height in pixels")
    content_type: StrictStr
    gravity: StrictStr
    aspect: Any = Field(..., description="Aspect the image was rendered at")
    key: StrictStr
    is_default: bool = False
    original: StoredImage | None = None
