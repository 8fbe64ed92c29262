"""Image size and aspect ratio resolution.

Sizes are either a pixel height or a name from `NAMED_HEIGHTS`. Aspects are
`"square"`, `"original"` or a `(width, height)` ratio;
`SUPPORTED_ASPECT_RATIOS` lists the ratios offered to callers. The resolved pair is
what the resizing proxy is asked to fill; a width of 0 tells the proxy to
infer the width from the source image.
"""

from core.models.errors import UnknownSizeError, UnsupportedAspectError
from core.utils.constants import ASPECT_ORIGINAL, ASPECT_SQUARE, NAMED_HEIGHTS

Ratio = tuple[int, int]
Aspect = str | Ratio
Size = int | str


def resolve_height(size: Size) -> int:
    """Return the pixel height for a named size or a raw pixel height.

    Raises:
        UnknownSizeError: If `size` is a name missing from the size table
    """
    if isinstance(size, int) and not isinstance(size, bool):
        return size

    try:
        return NAMED_HEIGHTS[size]
    except (KeyError, TypeError) as exc:
        raise UnknownSizeError(
            message=f"Unknown image size '{size}'",
            details={"size": str(size), "known_sizes": sorted(NAMED_HEIGHTS)},
        ) from exc


def parse_aspect(value: str) -> Aspect:
    """Parse `"original"`, `"square"`, `"1:1"` or `"w:h"` into an aspect.

    Raises:
        UnsupportedAspectError: If the string is not a recognised aspect
    """
    if value in (ASPECT_ORIGINAL, ASPECT_SQUARE):
        return value

    if value == "1:1":
        return ASPECT_SQUARE

    parts = value.split(":")
    if len(parts) == 2 and all(part.isdigit() for part in parts):
        return _validate_ratio((int(parts[0]), int(parts[1])))

    raise UnsupportedAspectError(
        message=f"Invalid aspect ratio '{value}'",
        details={"aspect": value},
    )


def normalize_aspect(aspect: Aspect) -> Aspect:
    """Accept any supported aspect spelling and return its canonical form."""
    if isinstance(aspect, str):
        return parse_aspect(aspect)

    if isinstance(aspect, (tuple, list)) and len(aspect) == 2:
        return _validate_ratio((aspect[0], aspect[1]))

    raise UnsupportedAspectError(
        message=f"Invalid aspect ratio {aspect!r}",
        details={"aspect": repr(aspect)},
    )


def apply_aspect(aspect: Aspect, height: Size) -> tuple[int, int]:
    """Return the `(width, height)` in pixels for an aspect at a given size.

    Ratio widths are rounded half up so that results never depend on float
    representation: `(2, 3)` at 100 is `(67, 100)`, `(1, 2)` at 101 is
    `(51, 101)`.
    """
    aspect = normalize_aspect(aspect)
    resolved_height = resolve_height(height)

    if aspect == ASPECT_SQUARE:
        return apply_aspect((1, 1), resolved_height)

    if aspect == ASPECT_ORIGINAL:
        return 0, resolved_height

    width_ratio, height_ratio = aspect
    if width_ratio == height_ratio:
        return resolved_height, resolved_height

    # floor(h * w / hr + 1/2) in integer arithmetic
    numerator = 2 * resolved_height * width_ratio + height_ratio
    resolved_width = numerator // (2 * height_ratio)
    return resolved_width, resolved_height


def _validate_ratio(ratio: tuple[object, object]) -> Ratio:
    width, height = ratio
    for part in (width, height):
        if not isinstance(part, int) or isinstance(part, bool) or part <= 0:
            raise UnsupportedAspectError(
                message="Aspect ratio members must be positive integers",
                details={"aspect": repr(ratio)},
            )
    return width, height  # type: ignore[return-value]
