"""Block processing pipeline.

Split into blocks → average → nearest palette color → dither → paint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

import numpy as np

from pixel_maker.core.color import RGBColor, match_color, to_paint_color
from pixel_maker.core.dither import RandomSource, possibly_dither
from pixel_maker.core.palette import PaletteName, get_palette
from pixel_maker.core.surface import PixelBlock, Surface


@dataclass(frozen=True)
class Settings:
    """Conversion settings, read at the start of each run."""

    block_size: int = 5
    dither: float = 0.0  # usually 0.0 to 1.0, higher = more black blocks
    palette: PaletteName = PaletteName.EIGHT_BIT

    def __post_init__(self) -> None:
        if self.block_size < 1:
            raise ValueError(f"Block size must be at least 1, got {self.block_size}")
        # Fail on unknown names here rather than halfway through a run
        object.__setattr__(self, "palette", get_palette(self.palette).name)

    @property
    def colors(self) -> tuple[tuple[int, int, int], ...]:
        return get_palette(self.palette).colors


def grid_size(width: int, height: int, block_size: int) -> tuple[int, int]:
    """Number of whole blocks across and down. Partial blocks are dropped."""
    return width // block_size, height // block_size


def block_origins(cols: int, rows: int, block_size: int) -> Iterator[tuple[int, int]]:
    """Yield the (x, y) origin of every block, row by row."""
    for row in range(rows):
        for col in range(cols):
            yield col * block_size, row * block_size


def average_block(samples: Sequence[int] | np.ndarray) -> RGBColor:
    """Mean RGB of a block of RGBA samples. Alpha is ignored.

    Accepts a flat RGBA sequence or any array whose last axis has 4 channels.
    The result is left fractional.
    """
    arr = np.asarray(samples, dtype=np.float64)
    if arr.ndim == 1 and arr.size % 4 != 0:
        raise ValueError(f"RGBA sample count must be a multiple of 4, got {arr.size}")
    if arr.ndim > 1 and arr.shape[-1] != 4:
        raise ValueError(f"Expected 4 RGBA channels, got shape {arr.shape}")
    rgb = arr.reshape(-1, 4)[:, :3]
    if rgb.shape[0] == 0:
        raise ValueError("Cannot average a block with no pixels")

    sums = rgb.sum(axis=0)
    count = rgb.shape[0]
    return (sums[0] / count, sums[1] / count, sums[2] / count)


def convert_block(
    block: PixelBlock,
    palette: Sequence[Sequence[int]],
    threshold: float,
    rng: RandomSource,
) -> tuple[int, int, int]:
    """Reduce one block to the single color it should be painted with."""
    if block.pixel_count == 0:
        raise ValueError(f"Block at ({block.x}, {block.y}) has no pixels")

    average = average_block(block.samples)
    closest = match_color(average, palette)
    return to_paint_color(possibly_dither(average, closest, threshold, rng))


def pixelate(
    source: Surface,
    settings: Settings,
    rng: RandomSource | None = None,
    on_progress: Callable[[int, int], None] | None = None,
) -> Surface:
    """Convert a whole surface into solid-color blocks.

    Args:
        source: surface to read blocks from. Left untouched.
        settings: block size, dither threshold and palette.
        rng: random source for the dither step. Unseeded if omitted.
        on_progress: callback(blocks_done, total_blocks).

    Returns:
        New surface exactly cols * block_size wide and rows * block_size tall.
    """
    if rng is None:
        rng = np.random.default_rng()

    # Block size is committed for the whole run
    block_size = settings.block_size
    palette = settings.colors
    cols, rows = grid_size(source.width, source.height, block_size)
    target = Surface.blank(cols * block_size, rows * block_size)
    total = cols * rows

    for done, (x, y) in enumerate(block_origins(cols, rows, block_size), start=1):
        block = source.read_block(x, y, block_size)
        color = convert_block(block, palette, settings.dither, rng)
        target.paint_block(x, y, block_size, color)
        if on_progress:
            on_progress(done, total)

    return target
