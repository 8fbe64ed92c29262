"""Image Attachments Package."""

__version__ = "1.0.0"
__description__ = (
    "Image maps and image lists for persisted records, with deferred S3/local "
    "storage commits and signed resizing proxy URLs"
)

__all__ = ["attachments", "core"]
