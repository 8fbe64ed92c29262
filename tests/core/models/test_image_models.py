import pytest
from pydantic import ValidationError

from core.models.image import DisplayImage, StoredImage, UploadedFile
from support.records import named_image


class TestStoredImage:
    def test_defaults(self) -> None:
        image = StoredImage(uri="/images/a.png", content_type="image/png", size=10)

        assert image.key == ""
        assert image.gravity == "smart"
        assert image.committed is True
        assert image.is_default is False
        assert image.filename is None

    def test_integer_keys_become_strings(self) -> None:
        assert named_image(key=3).key == "3"

    def test_rejects_negative_size(self) -> None:
        with pytest.raises(ValidationError):
            named_image(size=-1)

    def test_rejects_unknown_gravity(self) -> None:
        with pytest.raises(ValidationError):
            named_image(gravity="north")

    def test_serialization_skips_transient_fields(self) -> None:
        image = named_image(is_default=True, filename="photo.png")

        dumped = image.model_dump()

        assert dumped == {
            "key": "named",
            "uri": "/images/named/named.png",
            "content_type": "image/png",
            "size": 15_536,
            "gravity": "smart",
            "committed": True,
        }

    def test_new_derives_content_type(self) -> None:
        image = StoredImage.new("avatar", "s3://bucket/images/avatar.jpeg", 500)

        assert image.content_type == "image/jpeg"
        assert image.committed is True
        assert image.key == "avatar"

    def test_new_with_unknown_extension(self) -> None:
        image = StoredImage.new(0, "/images/blob.bin", 1)

        assert image.content_type == "application/octet-stream"
        assert image.key == "0"


class TestFromUpload:
    def test_builds_uncommitted_image(self, uploaded_png: UploadedFile, sample_png_binary: bytes) -> None:
        image = StoredImage.from_upload(uploaded_png, "avatar")

        assert image.key == "avatar"
        assert image.uri == uploaded_png.path
        assert image.content_type == "image/png"
        assert image.size == len(sample_png_binary)
        assert image.filename == "small.png"
        assert image.committed is False

    def test_missing_file(self, tmp_path) -> None:
        upload = UploadedFile(
            path=str(tmp_path / "gone.png"), content_type="image/png", filename="gone.png"
        )

        with pytest.raises(FileNotFoundError):
            StoredImage.from_upload(upload, "avatar")


class TestDisplayImage:
    def test_minimal(self) -> None:
        displayed = DisplayImage(
            url="https://proxy/sig/path",
            width=0,
            height=240,
            content_type="image/png",
            gravity="smart",
            aspect="original",
            key="0",
        )

        assert displayed.is_default is False
        assert displayed.original is None
