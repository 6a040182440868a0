"""Tests for the block processing pipeline."""

import numpy as np
import pytest

from pixel_maker.core.palette import CGA_COLORS, PaletteName
from pixel_maker.core.processor import (
    Settings,
    average_block,
    block_origins,
    convert_block,
    grid_size,
    pixelate,
)
from pixel_maker.core.surface import PixelBlock, Surface


class ZeroRandom:
    def random(self):
        return 0.0


def _solid_surface(width, height, color=(128, 128, 128, 255)):
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :] = color
    return Surface(pixels)


class TestSettings:
    def test_default_settings(self):
        s = Settings()
        assert s.block_size == 5
        assert s.dither == 0.0
        assert s.palette == PaletteName.EIGHT_BIT

    def test_palette_name_from_string(self):
        s = Settings(palette="cga")
        assert s.palette is PaletteName.CGA
        assert s.colors == CGA_COLORS

    def test_rejects_zero_block_size(self):
        with pytest.raises(ValueError, match="at least 1"):
            Settings(block_size=0)

    def test_rejects_unknown_palette(self):
        with pytest.raises(ValueError, match="Unknown palette"):
            Settings(palette="sepia")

    def test_dither_not_clamped(self):
        assert Settings(dither=-1.0).dither == -1.0


class TestGrid:
    def test_remainder_dropped(self):
        assert grid_size(13, 7, 5) == (2, 1)

    def test_exact_fit(self):
        assert grid_size(10, 10, 5) == (2, 2)

    def test_smaller_than_block(self):
        assert grid_size(4, 4, 5) == (0, 0)

    def test_origins_raster_order(self):
        assert list(block_origins(3, 2, 4)) == [
            (0, 0), (4, 0), (8, 0),
            (0, 4), (4, 4), (8, 4),
        ]

    def test_origins_visit_each_cell_once(self):
        origins = list(block_origins(7, 5, 3))
        assert len(origins) == 35
        assert len(set(origins)) == 35

    def test_origins_lazy(self):
        origins = block_origins(2, 2, 1)
        assert next(origins) == (0, 0)


class TestAverageBlock:
    def test_black_and_white_example(self):
        samples = [
            0, 0, 0, 255,
            255, 255, 255, 255,
            0, 0, 0, 255,
            255, 255, 255, 255,
        ]
        assert average_block(samples) == (127.5, 127.5, 127.5)

    def test_uniform_block(self):
        samples = np.zeros((4, 4, 4), dtype=np.uint8)
        samples[:, :] = (17, 99, 230, 255)
        assert average_block(samples) == (17, 99, 230)

    def test_alpha_ignored(self):
        opaque = [10, 20, 30, 255, 50, 60, 70, 255]
        clear = [10, 20, 30, 0, 50, 60, 70, 3]
        assert average_block(opaque) == average_block(clear) == (30, 40, 50)

    def test_channels_independent(self):
        samples = [255, 0, 0, 255, 0, 0, 255, 255]
        assert average_block(samples) == (127.5, 0, 127.5)

    def test_empty_block_raises(self):
        with pytest.raises(ValueError, match="no pixels"):
            average_block([])

    def test_ragged_samples_raise(self):
        with pytest.raises(ValueError, match="multiple of 4"):
            average_block([1, 2, 3, 4, 5])

    def test_rgb_array_rejected(self):
        samples = np.zeros((4, 3, 3))
        samples[:, :] = (10, 20, 30)
        with pytest.raises(ValueError, match="4 RGBA channels"):
            average_block(samples)


class TestConvertBlock:
    def test_gray_block(self):
        block = _solid_surface(2, 2).read_block(0, 0, 2)
        color = convert_block(block, CGA_COLORS, 0.0, ZeroRandom())
        assert color == (170, 170, 170)

    def test_dithered_to_black(self):
        block = _solid_surface(2, 2).read_block(0, 0, 2)
        assert convert_block(block, CGA_COLORS, 1.0, ZeroRandom()) == (0, 0, 0)

    def test_zero_area_block_rejected(self):
        block = PixelBlock(x=0, y=0, size=2, samples=np.zeros((0, 0, 4), dtype=np.uint8))
        with pytest.raises(ValueError, match="no pixels"):
            convert_block(block, CGA_COLORS, 0.0, ZeroRandom())


class TestPixelate:
    def test_single_gray_block(self):
        source = _solid_surface(2, 2)
        result = pixelate(source, Settings(block_size=2), rng=ZeroRandom())

        assert (result.width, result.height) == (2, 2)
        # Nearest eight_bit entry to mid gray, fully opaque
        assert (result.pixels == (124, 124, 124, 255)).all()

    def test_output_trimmed_to_grid(self):
        source = _solid_surface(13, 7)
        result = pixelate(source, Settings(block_size=5), rng=ZeroRandom())
        assert (result.width, result.height) == (10, 5)

    def test_blocks_are_solid(self):
        pixels = np.zeros((4, 4, 4), dtype=np.uint8)
        pixels[:, :2] = (255, 255, 255, 255)  # left half white
        pixels[:, 2:] = (0, 0, 170, 255)  # right half blue
        result = pixelate(
            Surface(pixels), Settings(block_size=2, palette="cga"), rng=ZeroRandom()
        )

        assert (result.pixels[:, :2] == (255, 255, 255, 255)).all()
        assert (result.pixels[:, 2:] == (0, 0, 170, 255)).all()

    def test_mixed_block_uses_average(self):
        pixels = np.zeros((2, 2, 4), dtype=np.uint8)
        pixels[0, :] = (255, 255, 255, 255)
        pixels[1, :] = (0, 0, 0, 255)
        result = pixelate(
            Surface(pixels), Settings(block_size=2, palette="cga"), rng=ZeroRandom()
        )
        # Average 127.5 gray is closest to CGA light gray
        assert (result.pixels == (170, 170, 170, 255)).all()

    def test_full_dither_blacks_out_everything(self):
        source = _solid_surface(6, 6, (255, 255, 85, 255))
        result = pixelate(
            source,
            Settings(block_size=3, dither=1.0),
            rng=np.random.default_rng(0),
        )
        assert (result.pixels == (0, 0, 0, 255)).all()

    def test_negative_dither_never_blacks_out(self):
        source = _solid_surface(6, 6, (0, 0, 0, 255))
        result = pixelate(
            source,
            Settings(block_size=3, dither=-1.0, palette="gameboy"),
            rng=np.random.default_rng(0),
        )
        # Black averages still snap to the darkest Game Boy green
        assert (result.pixels == (15, 56, 15, 255)).all()

    def test_source_untouched(self):
        source = _solid_surface(4, 4)
        before = source.pixels.copy()
        pixelate(source, Settings(block_size=2), rng=ZeroRandom())
        assert np.array_equal(source.pixels, before)

    def test_progress_callback(self):
        progress = []
        pixelate(
            _solid_surface(6, 4),
            Settings(block_size=2),
            rng=ZeroRandom(),
            on_progress=lambda done, total: progress.append((done, total)),
        )
        assert len(progress) == 6
        assert progress[0] == (1, 6)
        assert progress[-1] == (6, 6)

    def test_source_smaller_than_block(self):
        result = pixelate(_solid_surface(3, 3), Settings(block_size=5), rng=ZeroRandom())
        assert (result.width, result.height) == (0, 0)

    def test_default_rng(self):
        result = pixelate(_solid_surface(4, 4), Settings(block_size=2))
        assert (result.pixels == (124, 124, 124, 255)).all()
