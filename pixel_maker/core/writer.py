"""Save pixelated surfaces to disk via Pillow."""

from __future__ import annotations

from pathlib import Path

from pixel_maker.core.reader import detect_format
from pixel_maker.core.surface import Surface

# Formats without an alpha channel
_OPAQUE_FORMATS = ("jpeg", "bmp")


def save_image(surface: Surface, output_path: Path) -> None:
    """Save a surface in the format given by the output file extension."""
    fmt = detect_format(output_path)
    img = surface.to_image()
    if fmt in _OPAQUE_FORMATS:
        img = img.convert("RGB")
    if fmt == "webp":
        # Lossy WebP shifts palette colors
        img.save(str(output_path), lossless=True)
        return
    img.save(str(output_path))
