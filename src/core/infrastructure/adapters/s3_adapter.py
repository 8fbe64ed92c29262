"""Thin adapter for interacting with Amazon S3."""

from collections.abc import Mapping
from typing import Any, Protocol

import boto3

from core.models.errors import ConfigurationError
from core.models.settings import Settings


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def upload_file(
        self,
        Filename: str,
        Bucket: str,
        Key: str,
        ExtraArgs: Mapping[str, Any] | None = None,
    ) -> None: ...

    def delete_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Any: ...

    def list_objects_v2(
        self,
        *,
        Bucket: str,
        Prefix: str,
    ) -> Mapping[str, Any]: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (repository-facing)."""

    bucket: str

    def upload_file(self, *, key: str, filename: str, content_type: str) -> None: ...

    def delete_object(self, *, key: str) -> None: ...

    def list_keys(self, *, prefix: str) -> list[str]: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(
        self,
        *,
        bucket: str | None,
        region_name: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        """Create S3 client for the given bucket."""
        if not bucket:
            raise ConfigurationError(message="An S3 bucket name must be configured")

        self.bucket = bucket
        self._client: _Boto3S3Client = boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            region_name=region_name,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3Adapter":
        return cls(
            bucket=settings.s3_bucket,
            region_name=settings.aws_region,
            endpoint_url=settings.aws_endpoint_url,
        )

    def upload_file(self, *, key: str, filename: str, content_type: str) -> None:
        """Stream a local file into S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.upload_file(
            filename,
            self.bucket,
            key,
            ExtraArgs={"ContentType": content_type},
        )

    def delete_object(self, *, key: str) -> None:
        """Delete object from S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.delete_object(
            Bucket=self.bucket,
            Key=key,
        )

    def list_keys(self, *, prefix: str) -> list[str]:
        """List object keys starting with `prefix` (first page only).
        Raises boto3 exceptions - caught by domain implementation.
        """
        response = self._client.list_objects_v2(
            Bucket=self.bucket,
            Prefix=prefix,
        )
        return [item["Key"] for item in response.get("Contents", [])]
