"""Tests for the thin S3 adapter against a mocked bucket."""

import pytest
from botocore.exceptions import ClientError

from conftest import AWS_REGION, S3_BUCKET_NAME
from core.infrastructure.adapters.s3_adapter import S3Adapter
from core.models.errors import ConfigurationError
from core.models.settings import Settings


@pytest.fixture
def adapter(s3_bucket) -> S3Adapter:
    return S3Adapter(bucket=S3_BUCKET_NAME, region_name=AWS_REGION)


class TestS3Adapter:
    def test_requires_bucket(self) -> None:
        with pytest.raises(ConfigurationError):
            S3Adapter(bucket=None)

    def test_from_settings(self, s3_bucket, settings: Settings) -> None:
        assert S3Adapter.from_settings(settings).bucket == S3_BUCKET_NAME

    def test_upload_file_sets_content_type(self, adapter: S3Adapter, s3_bucket, uploaded_png) -> None:
        adapter.upload_file(key="images/a.png", filename=uploaded_png.path, content_type="image/png")

        head = s3_bucket.head_object(Bucket=S3_BUCKET_NAME, Key="images/a.png")
        assert head["ContentType"] == "image/png"

    def test_upload_missing_file_bubbles_up(self, adapter: S3Adapter, tmp_path) -> None:
        with pytest.raises(OSError):
            adapter.upload_file(
                key="images/a.png", filename=str(tmp_path / "gone.png"), content_type="image/png"
            )

    def test_list_keys_by_prefix(self, adapter: S3Adapter, s3_bucket) -> None:
        for key in ("images/1/a.png", "images/1/b.png", "images/2/c.png"):
            s3_bucket.put_object(Bucket=S3_BUCKET_NAME, Key=key, Body=b"x")

        assert sorted(adapter.list_keys(prefix="images/1/")) == ["images/1/a.png", "images/1/b.png"]
        assert adapter.list_keys(prefix="images/3/") == []

    def test_delete_object(self, adapter: S3Adapter, s3_bucket) -> None:
        s3_bucket.put_object(Bucket=S3_BUCKET_NAME, Key="images/a.png", Body=b"x")

        adapter.delete_object(key="images/a.png")

        assert adapter.list_keys(prefix="images/") == []

    def test_errors_bubble_up(self, s3_bucket) -> None:
        missing = S3Adapter(bucket="no-such-bucket", region_name=AWS_REGION)

        with pytest.raises(ClientError):
            missing.list_keys(prefix="images/")
