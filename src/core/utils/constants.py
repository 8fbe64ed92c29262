"""Global constants used throughout the application.

This module centralizes the error codes, lookup tables and environment
variable names shared across modules. Keeping them here makes the resizing
proxy contract and the storage layout easy to audit in one place.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_UNKNOWN_SIZE = "UNKNOWN_SIZE"
ERROR_CODE_UNSUPPORTED_GRAVITY = "UNSUPPORTED_GRAVITY"
ERROR_CODE_UNSUPPORTED_ASPECT = "UNSUPPORTED_ASPECT"
ERROR_CODE_INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
ERROR_CODE_COMMIT_FAILED = "COMMIT_FAILED"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"
ERROR_CODE_IMAGE_DELETE_FAILED = "IMAGE_DELETE_FAILED"
ERROR_CODE_NOT_SUPPORTED = "NOT_SUPPORTED"

# Record / DynamoDB Errors
ERROR_CODE_STALE_VERSION = "STALE_VERSION"
ERROR_CODE_DUPLICATE_RECORD = "DUPLICATE_RECORD"
ERROR_CODE_RECORD_OPERATION_FAILED = "RECORD_OPERATION_FAILED"

# Configuration
ERROR_CODE_CONFIGURATION = "CONFIGURATION_ERROR"


# ============================================================================
# Image Sizes and Aspect Ratios
# ============================================================================

NAMED_HEIGHTS: Final[dict[str, int]] = {
    "x_large": 1024,
    "large": 800,
    "medium": 240,
    "small": 120,
    "tiny": 64,
    "avatar_large": 128,
    "avatar_medium": 64,
    "avatar_small": 32,
}

ASPECT_SQUARE = "square"
ASPECT_ORIGINAL = "original"

# Ratios offered to callers choosing how to crop an image
SUPPORTED_ASPECT_RATIOS: Final[tuple[tuple[int, int], ...]] = ((1, 1), (2, 3), (4, 5))


# ============================================================================
# Resizing Proxy
# ============================================================================

DEFAULT_GRAVITY = "smart"

# Gravity codes as stored on images mapped to the proxy's gravity names
PROXY_GRAVITY_MAP: Final[dict[str, str]] = {
    "n": "no",
    "s": "so",
    "e": "ea",
    "w": "we",
    "ne": "noea",
    "nw": "nowe",
    "se": "soea",
    "sw": "sowe",
    "center": "ce",
    "smart": "sm",
}

GRAVITIES: Final[frozenset[str]] = frozenset(PROXY_GRAVITY_MAP)

RESIZE_TYPE_FILL = "fill"
LOGO_KEY_PREFIX = "logo_"
DEFAULT_PROXY_SCHEME = "https"


# ============================================================================
# MIME Types
# ============================================================================

MIME_TYPE_EXTENSION_MAP: Final[dict[str, tuple[str, ...]]] = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/gif": ("gif",),
    "image/webp": ("webp",),
    "image/svg+xml": ("svg",),
}

DEFAULT_CONTENT_TYPE = "application/octet-stream"


# ============================================================================
# Storage Layout
# ============================================================================

UPLOAD_PATH_PREFIX: Final[tuple[str, ...]] = ("images", "uploads")
S3_URI_SCHEME = "s3"
LOCAL_URI_SCHEME = "local"

STORAGE_BACKEND_S3 = "s3"
STORAGE_BACKEND_LOCAL = "local"

# Environments where bulk deletion of the local upload root is permitted
NON_PRODUCTION_ENVIRONMENTS: Final[frozenset[str]] = frozenset(
    {"test", "dev", "development", "local"}
)
DEFAULT_ENVIRONMENT = "production"


# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_STORAGE_BACKEND = "IMAGE_STORAGE_BACKEND"
ENV_IMAGE_S3_BUCKET_NAME = "IMAGE_S3_BUCKET_NAME"
ENV_IMAGE_STORAGE_ROOT = "IMAGE_STORAGE_ROOT"
ENV_IMAGE_RECORDS_TABLE_NAME = "IMAGE_RECORDS_TABLE_NAME"
ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMGPROXY_SCHEME = "IMGPROXY_SCHEME"
ENV_IMGPROXY_HOST = "IMGPROXY_HOST"
ENV_IMGPROXY_KEY = "IMGPROXY_KEY"
ENV_IMGPROXY_SALT = "IMGPROXY_SALT"
ENV_ENVIRONMENT = "ENVIRONMENT"
