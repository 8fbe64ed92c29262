"""Service configuration."""

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, Field, StrictStr, field_validator

from core.utils.constants import (
    DEFAULT_ENVIRONMENT,
    DEFAULT_PROXY_SCHEME,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_ENVIRONMENT,
    ENV_IMAGE_RECORDS_TABLE_NAME,
    ENV_IMAGE_S3_BUCKET_NAME,
    ENV_IMAGE_STORAGE_ROOT,
    ENV_IMGPROXY_HOST,
    ENV_IMGPROXY_KEY,
    ENV_IMGPROXY_SALT,
    ENV_IMGPROXY_SCHEME,
    ENV_STORAGE_BACKEND,
    STORAGE_BACKEND_LOCAL,
)


class Settings(BaseModel):
    """Explicit configuration handed to storage, signer and repositories."""

    storage_backend: Literal["s3", "local"] = Field(
        STORAGE_BACKEND_LOCAL, description="Which storage backend holds image bytes"
    )
    s3_bucket: StrictStr | None = Field(None, description="Bucket for the S3 backend")
    storage_root: StrictStr | None = Field(None, description="Root directory for the local backend")
    records_table_name: StrictStr | None = Field(None, description="DynamoDB table holding records")
    aws_region: StrictStr | None = None
    aws_endpoint_url: StrictStr | None = None

    imgproxy_scheme: StrictStr = DEFAULT_PROXY_SCHEME
    imgproxy_host: StrictStr = Field(..., description="Host serving the resizing proxy")
    imgproxy_key: StrictStr = Field("", description="Hex encoded HMAC signing key")
    imgproxy_salt: StrictStr = Field("", description="Hex encoded HMAC signing salt")

    environment: StrictStr = DEFAULT_ENVIRONMENT

    @field_validator("imgproxy_key", "imgproxy_salt")
    @classmethod
    def validate_hex(cls, value: str) -> str:
        try:
            bytes.fromhex(value)
        except ValueError as exc:
            raise ValueError("must be a hex encoded string") from exc
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables."""
        env = os.environ if environ is None else environ

        values = {
            "storage_backend": env.get(ENV_STORAGE_BACKEND),
            "s3_bucket": env.get(ENV_IMAGE_S3_BUCKET_NAME),
            "storage_root": env.get(ENV_IMAGE_STORAGE_ROOT),
            "records_table_name": env.get(ENV_IMAGE_RECORDS_TABLE_NAME),
            "aws_region": env.get(ENV_AWS_REGION),
            "aws_endpoint_url": env.get(ENV_AWS_ENDPOINT_URL),
            "imgproxy_scheme": env.get(ENV_IMGPROXY_SCHEME),
            "imgproxy_host": env.get(ENV_IMGPROXY_HOST),
            "imgproxy_key": env.get(ENV_IMGPROXY_KEY),
            "imgproxy_salt": env.get(ENV_IMGPROXY_SALT),
            "environment": env.get(ENV_ENVIRONMENT),
        }

        return cls(**{name: value for name, value in values.items() if value is not None})
