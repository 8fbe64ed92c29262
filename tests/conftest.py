"""
Pytest configuration and fixtures for image attachment tests.
Provides AWS mocking, DynamoDB and S3 fixtures, storage backends and signers.
"""

from collections.abc import Callable
from pathlib import Path

import boto3
import pytest
from moto import mock_aws

from attachments.storage import ImageStorage
from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter
from core.infrastructure.adapters.s3_adapter import S3Adapter
from core.infrastructure.aws.dynamodb_records import DynamoDBRecords
from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.infrastructure.local.local_image_storage import LocalImageStorage
from core.models.image import UploadedFile
from core.models.settings import Settings
from core.proxy.url_signer import ProxyUrlSigner

AWS_REGION = "us-east-1"
S3_BUCKET_NAME = "image-attachments-test"
RECORDS_TABLE_NAME = "image-attachments-records-test"
PROXY_HOST = "proxy.images.test"
PROXY_KEY = "943b421c9eb07c830af81030552c86009268de4e532ba2ee2eab8247c6da0881"
PROXY_SALT = "520f986b998545b4785e0defbc4f3c1203f22de2374a3d53cb7a7fe9fea309c5"

SMALLEST_PNG = bytes([120, 156, 99, 96, 1, 0, 0, 6, 0, 5])


@pytest.fixture(autouse=True)
def aws_environment(monkeypatch):
    """Keep boto3 away from real credentials."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", AWS_REGION)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        storage_backend="local",
        s3_bucket=S3_BUCKET_NAME,
        storage_root=str(tmp_path / "uploads"),
        records_table_name=RECORDS_TABLE_NAME,
        aws_region=AWS_REGION,
        imgproxy_host=PROXY_HOST,
        imgproxy_key=PROXY_KEY,
        imgproxy_salt=PROXY_SALT,
        environment="test",
    )


@pytest.fixture
def signer(settings) -> ProxyUrlSigner:
    return ProxyUrlSigner.from_settings(settings)


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=AWS_REGION)


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """Create the S3 bucket used by the S3 storage backend."""
    s3_client.create_bucket(Bucket=S3_BUCKET_NAME)
    return s3_client


@pytest.fixture
def s3_object_keys(s3_bucket) -> Callable[[], list[str]]:
    """
    Helper listing every object key in the test bucket.

    Usage:
        assert key in s3_object_keys()
    """

    def _keys() -> list[str]:
        response = s3_bucket.list_objects_v2(Bucket=S3_BUCKET_NAME)
        return [item["Key"] for item in response.get("Contents", [])]

    return _keys


@pytest.fixture
def s3_storage(s3_bucket, settings) -> ImageStorage:
    return ImageStorage(S3ImageStorage(S3Adapter.from_settings(settings)))


@pytest.fixture
def local_storage(settings) -> ImageStorage:
    return ImageStorage(LocalImageStorage.from_settings(settings))


@pytest.fixture(scope="function")
def records_table(aws_mock):
    """Create the DynamoDB table holding records."""
    dynamodb = boto3.resource("dynamodb", region_name=AWS_REGION)
    table = dynamodb.create_table(
        TableName=RECORDS_TABLE_NAME,
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[
            {"AttributeName": "record_type", "KeyType": "HASH"},
            {"AttributeName": "record_id", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "record_type", "AttributeType": "S"},
            {"AttributeName": "record_id", "AttributeType": "S"},
        ],
    )
    table.wait_until_exists()
    return table


@pytest.fixture
def records(records_table, settings) -> DynamoDBRecords:
    return DynamoDBRecords(DynamoDBAdapter.from_settings(settings))


@pytest.fixture
def sample_png_binary() -> bytes:
    """Smallest bytes the tests treat as a PNG upload."""
    return SMALLEST_PNG


@pytest.fixture
def uploaded_png(tmp_path, sample_png_binary) -> UploadedFile:
    """A PNG sitting in a temporary upload location."""
    path: Path = tmp_path / "incoming" / "small.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(sample_png_binary)

    return UploadedFile(path=str(path), content_type="image/png", filename="small.png")


@pytest.fixture
def make_upload(tmp_path, sample_png_binary) -> Callable[[str], UploadedFile]:
    """
    Helper creating a distinct temporary upload per call.

    Usage:
        upload = make_upload("photo.jpg")
    """
    counter = {"n": 0}

    def _make(filename: str = "small.png") -> UploadedFile:
        counter["n"] += 1
        path = tmp_path / "incoming" / str(counter["n"]) / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(sample_png_binary)
        content_type = "image/png" if filename.endswith(".png") else "image/jpeg"
        return UploadedFile(path=str(path), content_type=content_type, filename=filename)

    return _make
