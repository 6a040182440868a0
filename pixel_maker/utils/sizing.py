"""Scale source images to fit a bounding box."""

from __future__ import annotations

from PIL import Image


def parse_box(value: str) -> tuple[int, int]:
    """Parse a "WIDTHxHEIGHT" string such as "640x480"."""
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError:
        raise ValueError(f"Expected WIDTHxHEIGHT, got {value!r}") from None
    if width < 1 or height < 1:
        raise ValueError(f"Box dimensions must be positive, got {value!r}")
    return width, height


def fit_within(
    img_width: int,
    img_height: int,
    max_width: int,
    max_height: int,
) -> tuple[int, int]:
    """Calculate dimensions that fill the box while preserving aspect ratio.

    A single scale factor, the smaller of the two axis ratios, is applied to
    both sides. Images smaller than the box are scaled up.

    Returns:
        (width, height) tuple, each at least 1.
    """
    scale = min(max_width / img_width, max_height / img_height)
    return max(1, int(img_width * scale)), max(1, int(img_height * scale))


def fit_image(img: Image.Image, max_width: int, max_height: int) -> Image.Image:
    """Resize an image to fit the box with `fit_within`."""
    size = fit_within(img.width, img.height, max_width, max_height)
    if size == img.size:
        return img
    return img.resize(size, Image.Resampling.LANCZOS)
