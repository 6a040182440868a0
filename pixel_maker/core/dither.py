"""Brightness-threshold dithering toward black."""

from __future__ import annotations

from typing import Protocol, Sequence

from pixel_maker.core.color import brightness

BLACK = (0, 0, 0)


class RandomSource(Protocol):
    """Anything with a `random()` returning a uniform float in [0, 1).

    Both `numpy.random.Generator` and `random.Random` qualify.
    """

    def random(self) -> float: ...


def possibly_dither(
    average: Sequence[float],
    matched: tuple,
    threshold: float,
    rng: RandomSource,
) -> tuple:
    """Decide whether a block is forced to black.

    One sample r is drawn from [0, 0.5) per call. The block turns black when
    brightness(average) - r < threshold, otherwise `matched` is returned
    untouched. The rule only darkens: it never swaps in a lighter color.

    Args:
        average: mean color of the source block.
        matched: palette color chosen for that average.
        threshold: dither strength, usually in [0, 1]. Not clamped.
        rng: random source, drawn from once.
    """
    noise = float(rng.random()) / 2
    if brightness(average) - noise < threshold:
        return BLACK
    return matched
