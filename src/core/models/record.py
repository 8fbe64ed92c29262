"""Records that own image collections.

A record type declares image collections with the `ImageMapField` and
`ImageListField` annotations:

    class User(ImageRecord):
        first_name: str
        avatars: ImageMapField = Field(default_factory=list)
        photos: ImageListField = Field(default_factory=list)

`ImageRecord` carries the `version` counter used for optimistic locking, so
every record type gets exactly one regardless of how many collections it
declares.
"""

from dataclasses import dataclass
from typing import Annotated, Literal

from pydantic import BaseModel, Field, StrictStr

from core.models.image import StoredImage

CollectionKind = Literal["map", "list"]


@dataclass(frozen=True)
class ImageCollection:
    """Annotation marker identifying a field as an image collection."""

    kind: CollectionKind


ImageMapField = Annotated[list[StoredImage], ImageCollection("map")]
ImageListField = Annotated[list[StoredImage], ImageCollection("list")]


class ImageRecord(BaseModel):
    """Base class for persisted records holding image collections."""

    id: StrictStr = Field(..., description="Record identifier")
    version: int = Field(0, ge=0, description="Optimistic lock counter")


def image_collections(record_type: type[ImageRecord]) -> dict[str, CollectionKind]:
    """Return the image collection fields declared on a record type."""
    collections: dict[str, CollectionKind] = {}

    for name, field in record_type.model_fields.items():
        for marker in field.metadata:
            if isinstance(marker, ImageCollection):
                collections[name] = marker.kind

    return collections


def record_type_name(record: ImageRecord | type[ImageRecord]) -> str:
    """Return the lowercased, dotted type name used in storage paths."""
    record_type = record if isinstance(record, type) else type(record)
    return f"{record_type.__module__}.{record_type.__qualname__}".lower()
