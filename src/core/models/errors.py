"""Custom exception classes for the image attachment service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_COMMIT_FAILED,
    ERROR_CODE_CONFIGURATION,
    ERROR_CODE_DUPLICATE_RECORD,
    ERROR_CODE_IMAGE_DELETE_FAILED,
    ERROR_CODE_IMAGE_UPLOAD_FAILED,
    ERROR_CODE_INDEX_OUT_OF_RANGE,
    ERROR_CODE_NOT_SUPPORTED,
    ERROR_CODE_RECORD_OPERATION_FAILED,
    ERROR_CODE_STALE_VERSION,
    ERROR_CODE_STORAGE,
    ERROR_CODE_UNKNOWN_SIZE,
    ERROR_CODE_UNSUPPORTED_ASPECT,
    ERROR_CODE_UNSUPPORTED_GRAVITY,
    ERROR_CODE_VALIDATION_FAILED,
)


class ImageServiceError(Exception):
    """
    Base exception for all image service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(ImageServiceError):
    """Raised when input validation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class UnknownSizeError(ImageServiceError):
    """Raised when a named image size is not in the size table."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UNKNOWN_SIZE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class UnsupportedGravityError(ImageServiceError):
    """Raised when a gravity code has no resizing proxy equivalent."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UNSUPPORTED_GRAVITY,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class UnsupportedAspectError(ImageServiceError):
    """Raised when an aspect ratio cannot be parsed or applied."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UNSUPPORTED_ASPECT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class IndexOutOfRangeError(ImageServiceError):
    """Raised when an image list is addressed at an index it does not have."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_INDEX_OUT_OF_RANGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StorageError(ImageServiceError):
    """Raised when an image storage operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORAGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ImageUploadFailedError(StorageError):
    """Raised when image bytes could not be written to the backend."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_IMAGE_UPLOAD_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ImageDeletionFailedError(StorageError):
    """Raised when image bytes could not be removed from the backend."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_IMAGE_DELETE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class NotSupportedError(ImageServiceError):
    """Raised when a storage backend lacks an optional capability."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_NOT_SUPPORTED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ConfigurationError(ImageServiceError):
    """Raised when the service is misconfigured for the requested operation."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CONFIGURATION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StaleVersionError(ImageServiceError):
    """Raised when a record was modified since the staged change was built.

    Callers may retry with a freshly fetched record.
    """

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STALE_VERSION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class CommitFailedError(ValidationError):
    """Raised when a staged change could not be committed cleanly.

    `errors` maps each collection field to the messages recorded against it.
    `record` holds the record as persisted, or None when nothing was written.
    """

    def __init__(
        self,
        *,
        message: str,
        errors: dict[str, list[str]],
        record: Any = None,
        error_code: str = ERROR_CODE_COMMIT_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.errors = errors
        self.record = record
        super().__init__(
            message=message,
            error_code=error_code,
            details={"errors": errors, **(details or {})},
        )


class DuplicateRecordError(ImageServiceError):
    """Raised when inserting a record whose id already exists."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_DUPLICATE_RECORD,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class RecordOperationFailedError(ImageServiceError):
    """Raised when a record persistence operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RECORD_OPERATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
