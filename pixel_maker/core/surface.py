"""In-memory RGBA surfaces that blocks are read from and painted onto."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image


@dataclass(frozen=True)
class PixelBlock:
    """A square region of source pixels."""

    x: int
    y: int
    size: int
    samples: np.ndarray  # shape (h, w, 4), uint8 RGBA

    @property
    def pixel_count(self) -> int:
        return int(self.samples.shape[0] * self.samples.shape[1])


class Surface:
    """Numpy-backed RGBA canvas.

    Pixels are stored as an (height, width, 4) uint8 array, row-major.
    """

    def __init__(self, pixels: np.ndarray) -> None:
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected (height, width, 4) RGBA array, got {pixels.shape}")
        self.pixels = pixels.astype(np.uint8, copy=False)

    @classmethod
    def blank(cls, width: int, height: int) -> Surface:
        """Fully transparent surface of the given size."""
        return cls(np.zeros((height, width, 4), dtype=np.uint8))

    @classmethod
    def from_image(cls, img: Image.Image) -> Surface:
        return cls(np.array(img.convert("RGBA"), dtype=np.uint8))

    def to_image(self) -> Image.Image:
        if self.width == 0 or self.height == 0:
            raise ValueError("Cannot build an image from an empty surface")
        return Image.fromarray(self.pixels)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def read_block(self, x: int, y: int, size: int) -> PixelBlock:
        """Return the size x size block whose top-left corner is (x, y).

        Blocks hanging over the right or bottom edge are cut short.
        """
        samples = self.pixels[y : y + size, x : x + size, :]
        return PixelBlock(x=x, y=y, size=size, samples=samples.copy())

    def paint_block(
        self, x: int, y: int, size: int, color: tuple[int, int, int]
    ) -> None:
        """Fill a size x size square with a single opaque color."""
        r, g, b = color
        self.pixels[y : y + size, x : x + size] = (r, g, b, 255)
