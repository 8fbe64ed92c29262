"""Record types and image builders shared by the tests."""

import uuid
from typing import Any

from pydantic import Field

from core.models.image import StoredImage
from core.models.record import ImageListField, ImageMapField, ImageRecord


def gravatar_url(name: str, size: Any = 80) -> str:
    return f"https://www.gravatar.com/avatar/{uuid.uuid4()}/{name}/{size}/image.png"


def named_image(**overrides: Any) -> StoredImage:
    values: dict[str, Any] = {
        "key": "named",
        "uri": "/images/named/named.png",
        "size": 15_536,
        "content_type": "image/png",
    }
    values.update(overrides)
    return StoredImage(**values)


def indexed_image(**overrides: Any) -> StoredImage:
    return named_image(**{"key": "0", "uri": "/images/named/indexed.png", **overrides})


class User(ImageRecord):
    first_name: str = ""
    avatars: ImageMapField = Field(default_factory=list)

    def default_avatars(self, key: str, aspect: Any, size: Any) -> StoredImage | None:
        if key != "avatar":
            return None

        return StoredImage(
            key="avatar",
            uri=gravatar_url(self.first_name, size),
            content_type="image/png",
            size=308,
        )


class Gallery(ImageRecord):
    name: str = ""
    images: ImageListField = Field(default_factory=list)

    def default_images(self, index: int, aspect: Any, size: Any) -> StoredImage | None:
        return StoredImage(
            key=index,
            uri=gravatar_url(self.name),
            content_type="image/png",
            size=308,
        )


class Album(ImageRecord):
    name: str = ""
    images: ImageListField = Field(default_factory=list)


class Product(ImageRecord):
    title: str = ""
    logos: ImageMapField = Field(default_factory=list)
    banners: ImageMapField = Field(default_factory=list)
    photos: ImageListField = Field(default_factory=list)
    thumbnails: ImageListField = Field(default_factory=list)
