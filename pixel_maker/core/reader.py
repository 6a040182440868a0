"""Load source images into RGBA surfaces.

Decoding is left entirely to Pillow; this module only checks paths and
normalizes whatever Pillow returns to RGBA.
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from pixel_maker.core.surface import Surface

SUPPORTED_SUFFIXES = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp")


def detect_format(path: Path) -> str:
    """Detect image format from file extension."""
    suffix = path.suffix.lower()
    if suffix in (".jpg", ".jpeg"):
        return "jpeg"
    if suffix in SUPPORTED_SUFFIXES:
        return suffix.lstrip(".")
    raise ValueError(f"Unsupported format: {suffix}")


def load_image(path: str | Path) -> Surface:
    """Open an image file as an RGBA surface.

    Animated files contribute their first frame only.
    """
    local_path = Path(path)
    if not local_path.exists():
        raise FileNotFoundError(f"File not found: {local_path}")
    detect_format(local_path)

    with Image.open(local_path) as img:
        img.seek(0)
        return Surface.from_image(img)
