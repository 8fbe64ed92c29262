"""Signed URLs for the image resizing proxy.

A display URL has the form

    <scheme>://<host>/<signature>/rs:fill:<width>:<height>:t:t/g:<gravity>/<source>

where `<source>` is the URL-safe, unpadded base64 of the stored image URI
followed by the output extension, and `<signature>` is the URL-safe,
unpadded base64 of HMAC-SHA256(key, salt + path).
"""

import base64
import hashlib
import hmac

from aws_lambda_powertools import Logger

from core.models.errors import ConfigurationError, UnsupportedGravityError
from core.models.settings import Settings
from core.utils.constants import LOGO_KEY_PREFIX, PROXY_GRAVITY_MAP, RESIZE_TYPE_FILL
from core.utils.mime import uri_extension

logger = Logger(UTC=True)


def urlsafe_b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


class ProxyUrlSigner:
    """Builds deterministic, signed resizing proxy URLs."""

    def __init__(self, *, scheme: str, host: str, key: bytes, salt: bytes) -> None:
        self.scheme = scheme
        self.host = host
        self._key = key
        self._salt = salt

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProxyUrlSigner":
        """Create a signer, decoding the hex secrets once."""
        try:
            key = bytes.fromhex(settings.imgproxy_key)
            salt = bytes.fromhex(settings.imgproxy_salt)
        except ValueError as exc:
            raise ConfigurationError(
                message="Resizing proxy key and salt must be hex encoded",
            ) from exc

        return cls(
            scheme=settings.imgproxy_scheme,
            host=settings.imgproxy_host,
            key=key,
            salt=salt,
        )

    def sign(
        self,
        source_uri: str,
        key: str | int,
        width: int,
        height: int,
        gravity: str,
        resize_type: str = RESIZE_TYPE_FILL,
    ) -> str:
        """Return the signed proxy URL for an image.

        Raises:
            UnsupportedGravityError: If `gravity` has no proxy equivalent
        """
        try:
            proxy_gravity = PROXY_GRAVITY_MAP[gravity]
        except KeyError as exc:
            raise UnsupportedGravityError(
                message=f"Unsupported gravity '{gravity}'",
                details={"gravity": gravity},
            ) from exc

        extension = self.output_extension(key, source_uri)
        encoded_source = urlsafe_b64(source_uri.encode("utf-8")) + extension

        resize = ":".join(["rs", resize_type, str(width), str(height), "t", "t"])
        path = "/".join(["", resize, f"g:{proxy_gravity}", encoded_source])

        url = f"{self.scheme}://{self.host}/{self.signature(path)}{path}"
        logger.debug(
            "Signed proxy url",
            extra={"key": str(key), "width": width, "height": height, "gravity": gravity},
        )
        return url

    def signature(self, path: str) -> str:
        digest = hmac.new(self._key, self._salt + path.encode("utf-8"), hashlib.sha256).digest()
        return urlsafe_b64(digest)

    @staticmethod
    def output_extension(key: str | int, source_uri: str) -> str:
        """Pick the proxy output extension for a source.

        Logos keep their extension so transparency survives; other PNGs are
        served as JPEG.
        """
        extension = uri_extension(source_uri)

        if str(key).startswith(LOGO_KEY_PREFIX):
            return extension

        if extension == ".png":
            return ".jpg"

        return extension
