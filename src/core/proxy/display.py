"""Turn stored images into displayable ones."""

from core.models.image import DisplayImage, StoredImage
from core.proxy.url_signer import ProxyUrlSigner
from core.utils.sizes import Aspect, Size, apply_aspect, normalize_aspect


def display_image(
    signer: ProxyUrlSigner,
    image: StoredImage | None,
    aspect: Aspect,
    size: Size,
    *,
    is_default: bool = False,
) -> DisplayImage | None:
    """Render `image` at an aspect and size, or return None when there is no image."""
    if image is None:
        return None

    aspect = normalize_aspect(aspect)
    width, height = apply_aspect(aspect, size)
    url = signer.sign(image.uri, image.key, width, height, image.gravity)

    return DisplayImage(
        url=url,
        width=width,
        height=height,
        content_type=image.content_type,
        gravity=image.gravity,
        aspect=aspect,
        key=image.key,
        is_default=is_default,
        original=image.model_copy(update={"is_default": is_default}),
    )
